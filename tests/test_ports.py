import pytest

from pcrkit.hash_algorithm import HashAlgorithm
from pcrkit.pcr import EventResult, Index, ReadResult, Selection
from pcrkit.ports import Observer, Provider


@pytest.mark.parametrize("method", ["on_extend", "on_event"])
def test_observer_cannot_be_instantiated(method):
    with pytest.raises(TypeError, match=method):
        Observer()


@pytest.mark.parametrize(
    "method",
    ["read", "extend", "event", "reset", "allocate", "set_auth_value", "set_auth_policy"],
)
def test_provider_cannot_be_instantiated(method):
    with pytest.raises(TypeError, match=method):
        Provider()


def test_partial_provider_requires_every_operation():
    class ReadOnly(Provider):
        def read(self, selection):
            return ReadResult(selection, 0)

    with pytest.raises(TypeError, match="extend"):
        ReadOnly()

    class Completed(ReadOnly):
        def extend(self, index, digests):
            return None

        def event(self, index, event_data):
            return EventResult()

        def reset(self, index):
            return None

        def allocate(self, banks):
            raise NotImplementedError

        def set_auth_value(self, index, auth):
            return None

        def set_auth_policy(self, index, policy_alg, policy_digest):
            return None

    selection = Selection(HashAlgorithm.SHA256, [Index.DEBUG])
    assert Completed().read(selection) == ReadResult(selection, 0)


def test_complete_observer_subclass_receives_calls():
    class Collecting(Observer):
        def __init__(self):
            self.seen = []

        def on_extend(self, index, digests):
            self.seen.append(("extend", index))

        def on_event(self, index, event_data, result):
            self.seen.append(("event", index, event_data))

    observer = Collecting()
    observer.on_extend(Index.DEBUG, ())
    observer.on_event(Index.APPLICATION, b"\x01", EventResult())
    assert observer.seen == [
        ("extend", Index.DEBUG),
        ("event", Index.APPLICATION, b"\x01"),
    ]


def test_complete_provider_subclass_is_usable():
    class Echo(Provider):
        def read(self, selection):
            return ReadResult(selection, 9)

        def extend(self, index, digests):
            return None

        def event(self, index, event_data):
            return EventResult()

        def reset(self, index):
            return None

        def allocate(self, banks):
            raise NotImplementedError

        def set_auth_value(self, index, auth):
            return None

        def set_auth_policy(self, index, policy_alg, policy_digest):
            return None

    selection = Selection(HashAlgorithm.SHA256)
    assert Echo().read(selection) == ReadResult(selection, 9)