import threading
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Set, Tuple

from .audit import record_event
from .disclosure import DisclosureOutcome, Unsealer
from .envelope import Envelope, Sealer, Vault
from .identity import _ISSUE, Identity


class Party:
    """What a party receives at registration.

    Unpacks as ``(identity, seal, unseal)``. ``identity`` is public and may be
    handed to anyone. ``seal``, ``unseal`` and ``attempt`` act as this party and
    must stay with it.
    """

    __slots__ = ("identity", "_sealer", "_unsealer")

    def __init__(self, identity: Identity, sealer: Sealer, unsealer: Unsealer) -> None:
        self.identity = identity
        self._sealer = sealer
        self._unsealer = unsealer

    @property
    def label(self) -> str:
        return self.identity.label

    @property
    def seal(self) -> Callable[..., Envelope]:
        return self._sealer.seal

    @property
    def unseal(self) -> Callable[..., Any]:
        return self._unsealer.unseal

    @property
    def attempt(self) -> Callable[..., DisclosureOutcome]:
        return self._unsealer.attempt

    def __iter__(self) -> Iterator[Any]:
        return iter((self.identity, self.seal, self.unseal))

    def __repr__(self) -> str:
        return f"<Party {self.label!r}>"


class Registry:
    """Issues identities and owns the vault their envelopes are kept in.

    The registry keeps every identity it issues alive for its own lifetime.
    Registration and lookup may be called from several threads.
    """

    def __init__(self, audit_log: Optional[Path] = None) -> None:
        self._lock = threading.Lock()
        self._issued: List[Identity] = []
        self._members: Set[Identity] = set()
        self._by_label: Dict[str, List[Identity]] = {}
        self._vault = Vault()
        self._audit_log = audit_log

    def register(self, label: str) -> Party:
        identity = Identity(label, _issued_by=_ISSUE)
        with self._lock:
            self._issued.append(identity)
            self._members.add(identity)
            self._by_label.setdefault(identity.label, []).append(identity)
        sealer = Sealer(self, identity, _issued_by=_ISSUE)
        unsealer = Unsealer(self, identity, _issued_by=_ISSUE)
        self._record("register", identity, {})
        return Party(identity, sealer, unsealer)

    def lookup(self, label: str) -> Tuple[Identity, ...]:
        with self._lock:
            return tuple(self._by_label.get(label, ()))

    def __contains__(self, identity: object) -> bool:
        with self._lock:
            return isinstance(identity, Identity) and identity in self._members

    def __len__(self) -> int:
        with self._lock:
            return len(self._issued)

    @property
    def audit_log(self) -> Optional[Path]:
        return self._audit_log

    def _record(self, event_type: str, actor: Identity, data: Dict[str, Any]) -> None:
        if self._audit_log is None:
            return
        try:
            record_event(self._audit_log, event_type, actor.label, data)
        except OSError:
            # Best-effort; an unwritable log never blocks register, seal or unseal.
            pass

    def __repr__(self) -> str:
        return f"<Registry parties={len(self)}>"
