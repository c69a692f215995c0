"""Unforgeable party identities.

An ``Identity`` is a capability in the object-reference sense: two identities
are the same party only if they are the same object. Nothing outside a
``Registry`` can produce an object that *is* an issued identity, so a policy
comparing with ``is`` cannot be fooled by a look-alike built from data.
"""

from typing import Any

# Private issuing token. Only code in this package holds it.
_ISSUE = object()


def require_issuer(token: Any, kind: str) -> None:
    if token is not _ISSUE:
        raise TypeError(f"{kind} objects are issued by a Registry and cannot be constructed directly")


class Identity:
    __slots__ = ("_label", "__weakref__")

    def __init__(self, label: str, *, _issued_by: Any = None) -> None:
        require_issuer(_issued_by, "Identity")
        object.__setattr__(self, "_label", str(label))

    @property
    def label(self) -> str:
        """Diagnostic name. Never used for equality or authorization."""
        return self._label

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Identity is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Identity is immutable")

    # Equality and hashing stay object-identity based.

    def __copy__(self) -> "Identity":
        return self

    def __deepcopy__(self, memo: Any) -> "Identity":
        return self

    def __reduce_ex__(self, protocol: Any):
        raise TypeError("Identity cannot be serialized; it is only meaningful in-process")

    def __repr__(self) -> str:
        return f"<Identity {self._label!r}>"
