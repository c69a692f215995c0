from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from . import config
from .identity import Identity
from .utils import load_yaml

Policy = Callable[[Identity], Any]

POLICY_KEYS = ("recipients", "accept_from")


class MisuseError(TypeError):
    """A policy argument is missing or not callable."""


def require_policy(policy: Optional[Policy], role: str) -> Policy:
    if policy is None:
        raise MisuseError(f"{role} is required")
    if not callable(policy):
        raise MisuseError(f"{role} must be callable, got {type(policy).__name__}")
    return policy


def _members(identities: Iterable[Identity]) -> tuple:
    members = tuple(identities)
    for member in members:
        if not isinstance(member, Identity):
            raise MisuseError(f"expected Identity, got {type(member).__name__}")
    return members


def _matches_any(members: tuple) -> Policy:
    def check(presented: Identity) -> bool:
        return any(presented is member for member in members)

    return check


def designate(*recipients: Identity) -> Policy:
    """Access policy: only the given parties may open the envelope."""
    return _matches_any(_members(recipients))


def accept_from(*senders: Identity) -> Policy:
    """Trust policy: only believe envelopes sealed by the given parties."""
    return _matches_any(_members(senders))


def anybody() -> Policy:
    return lambda presented: True


def nobody() -> Policy:
    return lambda presented: False


def directory(*identities: Identity) -> Dict[str, Identity]:
    entries: Dict[str, Identity] = {}
    for identity in _members(identities):
        if identity.label in entries:
            raise ValueError(f"duplicate label '{identity.label}' in directory")
        entries[identity.label] = identity
    return entries


@dataclass(frozen=True)
class PartyPolicy:
    name: str
    access: Policy
    trust: Policy


def load_policy(path: Optional[Path] = None) -> Dict[str, Any]:
    policy_path = path or config.DEFAULT_POLICY_FILE
    data = load_yaml(policy_path)
    if not data:
        raise ValueError(f"Policy file is empty or missing: {policy_path}")
    return data


def validate_policy(doc: Mapping[str, Any]) -> List[str]:
    violations: List[str] = []
    name = doc.get("name")
    if name is not None and not isinstance(name, str):
        violations.append(f"name must be a string, got {type(name).__name__}")

    unknown = sorted(set(doc) - set(POLICY_KEYS) - {"name"})
    for key in unknown:
        violations.append(f"unknown key '{key}'")

    for key in POLICY_KEYS:
        labels = doc.get(key, [])
        if not isinstance(labels, list):
            violations.append(f"{key} must be a list of labels")
            continue
        for label in labels:
            if not isinstance(label, str) or not label:
                violations.append(f"{key} entry {label!r} is not a label")
    return violations


def _bind(labels: List[str], entries: Mapping[str, Identity], key: str) -> Policy:
    if config.WILDCARD in labels:
        return anybody()
    missing = [label for label in labels if label not in entries]
    if missing:
        raise ValueError(f"{key} names unknown parties: {', '.join(missing)}")
    return _matches_any(_members(entries[label] for label in labels))


def compile_policy(doc: Mapping[str, Any], entries: Mapping[str, Identity]) -> PartyPolicy:
    """Resolve a policy document's labels to identities.

    Labels are looked up once, here, in a directory the caller was handed.
    The resulting policies compare identities only.
    """
    violations = validate_policy(doc)
    if violations:
        raise ValueError("Invalid policy: " + "; ".join(violations))
    return PartyPolicy(
        name=doc.get("name", "default"),
        access=_bind(doc.get("recipients", []), entries, "recipients"),
        trust=_bind(doc.get("accept_from", []), entries, "accept_from"),
    )
