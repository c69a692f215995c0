import pytest

from frenemies.disclosure import DisclosureOutcome, deny, disclose
from frenemies.state import TERMINAL_STATES, EnvelopeState, is_terminal


def test_terminal_states():
    assert not is_terminal(EnvelopeState.SEALED)
    assert is_terminal(EnvelopeState.DISCLOSED)
    assert is_terminal(EnvelopeState.DENIED)
    assert EnvelopeState.SEALED not in TERMINAL_STATES


def test_outcome_requires_terminal_state():
    with pytest.raises(ValueError):
        DisclosureOutcome(EnvelopeState.SEALED, "x")


def test_outcome_helpers():
    fallback = object()
    assert disclose("hi") == DisclosureOutcome(EnvelopeState.DISCLOSED, "hi")
    assert disclose("hi").disclosed
    denied = deny(fallback)
    assert denied.state is EnvelopeState.DENIED
    assert denied.value is fallback
    assert not denied.disclosed
