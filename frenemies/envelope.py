import threading
import weakref
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from .identity import _ISSUE, Identity, require_issuer
from .policy import Policy, require_policy

if TYPE_CHECKING:
    from .registry import Registry


class Envelope:
    """Opaque sealed value.

    An envelope has no fields of its own. What it seals is kept in the vault of
    the registry that issued the sealer, keyed weakly by the envelope object,
    and is only handed out by the disclosure protocol.
    """

    __slots__ = ("__weakref__",)

    def __init__(self, *, _issued_by: Any = None) -> None:
        require_issuer(_issued_by, "Envelope")

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Envelope is immutable")

    def __copy__(self) -> "Envelope":
        return self

    def __deepcopy__(self, memo: Any) -> "Envelope":
        return self

    def __reduce_ex__(self, protocol: Any):
        raise TypeError("Envelope cannot be serialized; it is only meaningful in-process")

    def __repr__(self) -> str:
        return "<Envelope sealed>"


@dataclass(frozen=True)
class SealedContents:
    message: Any
    access_policy: Policy
    origin: Identity


class Vault:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._contents: "weakref.WeakKeyDictionary[Envelope, SealedContents]" = weakref.WeakKeyDictionary()

    def store(self, envelope: Envelope, contents: SealedContents) -> None:
        with self._lock:
            self._contents[envelope] = contents

    def fetch(self, envelope: Any) -> Optional[SealedContents]:
        if not isinstance(envelope, Envelope):
            return None
        with self._lock:
            return self._contents.get(envelope)

    def __len__(self) -> int:
        with self._lock:
            return len(self._contents)


class Sealer:
    __slots__ = ("_registry", "_identity")

    def __init__(self, registry: "Registry", identity: Identity, *, _issued_by: Any = None) -> None:
        require_issuer(_issued_by, "Sealer")
        self._registry = registry
        self._identity = identity

    def seal(self, message: Any, access_policy: Policy) -> Envelope:
        """Bind ``message`` to ``access_policy``; nothing is evaluated here."""
        require_policy(access_policy, "access_policy")
        envelope = Envelope(_issued_by=_ISSUE)
        self._registry._vault.store(
            envelope,
            SealedContents(message=message, access_policy=access_policy, origin=self._identity),
        )
        self._registry._record("seal", self._identity, {})
        return envelope

    def __repr__(self) -> str:
        return f"<Sealer for {self._identity.label!r}>"
