import pytest

from persistence_lib.errors import DataNotFound
from persistence_lib import registry as reg
from persistence_lib.registry import KeyRegistry, REGISTRY_KEY


class InMemoryBackend:
    def __init__(self):
        self.store = {}
        self.writes = []
    def put(self, key, data):
        self.writes.append(key)
        self.store[key] = data
    def get(self, key):
        if key not in self.store:
            raise DataNotFound(key)
        return self.store[key]
    def remove(self, key):
        self.store.pop(key, None)


class FailingBackend(InMemoryBackend):
    def put(self, key, data):
        raise OSError("disk full")


def test_load_missing_snapshot_returns_empty():
    b = InMemoryBackend()
    r = KeyRegistry(b)
    assert r.load() == set()
    assert len(r) == 0


def test_load_corrupt_snapshot_returns_empty():
    b = InMemoryBackend()
    b.store[REGISTRY_KEY] = b'{not json'
    assert KeyRegistry(b).load() == set()
    b.store[REGISTRY_KEY] = b'{"a": 1}'
    assert KeyRegistry(b).load() == set()
    b.store[REGISTRY_KEY] = b'["a", 2]'
    assert KeyRegistry(b).load() == set()
    b.store[REGISTRY_KEY] = b'\xff\xfe'
    assert KeyRegistry(b).load() == set()


def test_record_writes_snapshot_once_per_key():
    b = InMemoryBackend()
    r = KeyRegistry(b)
    r.load()
    assert r.record('a') is True
    assert r.record('a') is False
    assert b.writes == [REGISTRY_KEY]
    assert r.record('b') is True
    assert b.writes == [REGISTRY_KEY, REGISTRY_KEY]
    assert reg.decode_keys(b.store[REGISTRY_KEY]) == {'a', 'b'}


def test_snapshot_reloads_exactly():
    b = InMemoryBackend()
    r = KeyRegistry(b)
    keys = ['plain', 'with space', 'ünïcødé', 'quote"s', 'new\nline', '']
    for k in keys:
        r.record(k)
    fresh = KeyRegistry(b)
    assert fresh.load() == set(keys)
    assert 'ünïcødé' in fresh
    assert list(fresh) == sorted(keys)


def test_clear_removes_snapshot_and_tolerates_absence():
    b = InMemoryBackend()
    r = KeyRegistry(b)
    r.record('a')
    r.clear()
    assert r.keys == frozenset()
    assert REGISTRY_KEY not in b.store
    r.clear()


def test_failed_snapshot_write_forgets_key():
    r = KeyRegistry(FailingBackend())
    with pytest.raises(OSError):
        r.record('a')
    assert 'a' not in r


def test_reserved_keys():
    assert reg.is_reserved_key(REGISTRY_KEY)
    assert reg.is_reserved_key('__persistence_version__')
    assert not reg.is_reserved_key('kListOfStrings')
