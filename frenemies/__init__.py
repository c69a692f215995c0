"""
Frenemies: sealed envelopes between mutually distrusting parties.

Each party registers with a ``Registry`` and receives an unforgeable identity
together with functions to seal and unseal. A sealed envelope opens only when
the sealer's access policy accepts the unsealer and the unsealer's trust policy
accepts the sealer, so whoever carries an envelope in between learns nothing.
"""

from .disclosure import DisclosureOutcome
from .envelope import Envelope
from .identity import Identity
from .policy import MisuseError, accept_from, anybody, designate, nobody
from .registry import Party, Registry
from .state import EnvelopeState, Verdict

__all__ = [
    "DisclosureOutcome",
    "Envelope",
    "EnvelopeState",
    "Identity",
    "MisuseError",
    "Party",
    "Registry",
    "Verdict",
    "accept_from",
    "anybody",
    "designate",
    "nobody",
]
