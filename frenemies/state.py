from enum import Enum
from typing import FrozenSet


class EnvelopeState(str, Enum):
    SEALED = "sealed"
    DISCLOSED = "disclosed"
    DENIED = "denied"


class Verdict(str, Enum):
    APPROVED = "approved"
    DENIED = "denied"


# An unseal attempt starts at SEALED and ends in exactly one of these.
TERMINAL_STATES: FrozenSet[EnvelopeState] = frozenset({EnvelopeState.DISCLOSED, EnvelopeState.DENIED})


def is_terminal(state: EnvelopeState) -> bool:
    return state in TERMINAL_STATES
