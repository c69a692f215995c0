import copy
import pickle
import threading

import pytest

from frenemies.disclosure import Unsealer
from frenemies.envelope import Envelope, Sealer
from frenemies.identity import Identity
from frenemies.registry import Party, Registry


def test_register_unpacks_as_triple():
    registry = Registry()
    party = registry.register("alice")
    identity, seal, unseal = party
    assert isinstance(party, Party)
    assert identity is party.identity
    assert callable(seal) and callable(unseal)
    assert party.label == "alice"
    assert identity.label == "alice"


def test_reused_label_issues_distinct_identities():
    registry = Registry()
    first = registry.register("alice").identity
    second = registry.register("alice").identity
    assert first is not second
    assert first != second
    assert registry.lookup("alice") == (first, second)
    assert registry.lookup("nobody") == ()
    assert len(registry) == 2


def test_identity_has_no_public_constructor():
    with pytest.raises(TypeError):
        Identity("alice")
    with pytest.raises(TypeError):
        Identity("alice", _issued_by=object())


def test_fabricated_identity_never_matches():
    registry = Registry()
    alice = registry.register("alice").identity
    forged = object.__new__(Identity)
    assert forged is not alice
    assert forged != alice
    assert forged not in registry
    assert alice in registry


def test_identity_is_immutable_and_not_serializable():
    alice = Registry().register("alice").identity
    with pytest.raises(AttributeError):
        alice._label = "bob"
    assert copy.copy(alice) is alice
    assert copy.deepcopy(alice) is alice
    with pytest.raises(TypeError):
        pickle.dumps(alice)


def test_identity_from_other_registry_is_not_contained():
    other = Registry().register("alice").identity
    assert other not in Registry()


def test_components_have_no_public_constructor():
    registry = Registry()
    alice = registry.register("alice").identity
    with pytest.raises(TypeError):
        Envelope()
    with pytest.raises(TypeError):
        Sealer(registry, alice)
    with pytest.raises(TypeError):
        Unsealer(registry, alice)


def test_concurrent_registration_issues_distinct_identities():
    registry = Registry()
    issued = []
    lock = threading.Lock()

    def worker(n: int) -> None:
        for i in range(50):
            identity = registry.register(f"party-{n}").identity
            with lock:
                issued.append(identity)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(issued) == 400
    assert len({id(i) for i in issued}) == 400
    assert len(registry) == 400
    assert all(identity in registry for identity in issued)
    assert len(registry.lookup("party-3")) == 50


def test_containment_accepts_arbitrary_objects():
    registry = Registry()
    alice = registry.register("alice").identity
    assert alice in registry
    assert [] not in registry
    assert "alice" not in registry
