"""Disclosure protocol.

Unsealing runs two independent checks, each reduced to a ``Verdict``:

1. the sealer's access policy is shown the unsealer's own identity;
2. only if that approves, the unsealer's trust policy is shown the identity
   recorded by the sealer as the envelope's origin.

The message is released only when both approve. Every other path, including a
policy that raises and an envelope this registry never sealed, yields the
caller's fallback, so a denied party cannot tell which check turned it away.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from .envelope import SealedContents
from .identity import Identity, require_issuer
from .policy import Policy, require_policy
from .state import EnvelopeState, Verdict, is_terminal

if TYPE_CHECKING:
    from .registry import Registry


@dataclass(frozen=True)
class DisclosureOutcome:
    state: EnvelopeState
    value: Any

    def __post_init__(self) -> None:
        if not is_terminal(self.state):
            raise ValueError(f"Outcome state must be terminal, got {self.state.value}")

    @property
    def disclosed(self) -> bool:
        return self.state is EnvelopeState.DISCLOSED


def evaluate(policy: Policy, presented: Identity) -> Verdict:
    """Run one policy against one presented identity.

    Only ``True`` or ``Verdict.APPROVED`` approve.
    """
    try:
        decision = policy(presented)
    except Exception:
        # Folded into denial so the failure is indistinguishable from a "no".
        return Verdict.DENIED
    if decision is True or decision is Verdict.APPROVED:
        return Verdict.APPROVED
    return Verdict.DENIED


def disclose(message: Any) -> DisclosureOutcome:
    return DisclosureOutcome(EnvelopeState.DISCLOSED, message)


def deny(fallback: Any) -> DisclosureOutcome:
    return DisclosureOutcome(EnvelopeState.DENIED, fallback)


class Unsealer:
    __slots__ = ("_registry", "_identity")

    def __init__(self, registry: "Registry", identity: Identity, *, _issued_by: Any = None) -> None:
        require_issuer(_issued_by, "Unsealer")
        self._registry = registry
        self._identity = identity

    def attempt(self, envelope: Any, trust_policy: Policy, fallback: Any = None) -> DisclosureOutcome:
        require_policy(trust_policy, "trust_policy")
        outcome = self._run(envelope, trust_policy, fallback)
        self._registry._record("unseal", self._identity, {"outcome": outcome.state.value})
        return outcome

    def unseal(self, envelope: Any, trust_policy: Policy, fallback: Any = None) -> Any:
        return self.attempt(envelope, trust_policy, fallback).value

    def _run(self, envelope: Any, trust_policy: Policy, fallback: Any) -> DisclosureOutcome:
        contents: Optional[SealedContents] = self._registry._vault.fetch(envelope)
        if contents is None:
            return deny(fallback)
        if evaluate(contents.access_policy, self._identity) is not Verdict.APPROVED:
            return deny(fallback)
        if evaluate(trust_policy, contents.origin) is not Verdict.APPROVED:
            return deny(fallback)
        return disclose(contents.message)

    def __repr__(self) -> str:
        return f"<Unsealer for {self._identity.label!r}>"
