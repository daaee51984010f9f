"""Tests for KeyValueStore."""

import logging

from keyvo import (
    KeyValueObservable,
    KeyValueStore,
    get_value_for_key,
    get_value_for_key_path,
    set_value_for_key,
    set_value_for_key_path,
    subscribe,
    subscribe_path,
)


class TestKeyValueStore:
    def test_creation_from_schema(self):
        s = KeyValueStore({"x": 10, "y": "hello"})
        assert s.get("x") == 10
        assert s.get("y") == "hello"
        assert s.keys() == ["x", "y"]

    def test_initial_overrides(self):
        s = KeyValueStore({"x": 10, "y": "hello"}, initial={"x": 99})
        assert s.get("x") == 99
        assert s.get("y") == "hello"

    def test_get_nonexistent(self):
        s = KeyValueStore({"x": 1})
        assert s.get("nope") is None

    def test_set_unknown_key_is_ignored(self, caplog):
        s = KeyValueStore({"x": 0})
        log = []
        subscribe(s, "nope", log.append)
        with caplog.at_level(logging.DEBUG, logger="keyvo.store"):
            s.set("nope", 99)
        assert s.get("nope") is None
        assert s.keys() == ["x"]
        assert log == [None]
        assert "unknown key 'nope'" in caplog.text

    def test_resolver_write_to_unknown_key_is_ignored(self):
        s = KeyValueStore({"x": 0})
        set_value_for_key(s, "y", 1)
        assert get_value_for_key(s, "y") is None
        assert s.keys() == ["x"]

    def test_set_announces(self):
        s = KeyValueStore({"count": 0})
        log = []
        subscribe(s, "count", log.append)
        s.set("count", 1)
        assert log == [0, 1]

    def test_update_writes_before_announcing(self):
        s = KeyValueStore({"x": 0, "y": 0})
        log = []
        subscribe(s, "x", lambda v: log.append((s.get("x"), s.get("y"))))
        s.update({"x": 1, "y": 2})
        assert log == [(0, 0), (1, 2)]

    def test_update_skips_unknown_keys(self):
        s = KeyValueStore({"x": 0})
        log = []
        subscribe(s, "x", log.append)
        s.update({"x": 1, "nope": 2})
        assert s.get("x") == 1
        assert s.get("nope") is None
        assert log == [0, 1]

    def test_resolver_uses_keyed_accessors(self):
        s = KeyValueStore({"x": 0})
        log = []
        subscribe(s, "x", log.append)
        set_value_for_key(s, "x", 5)
        assert get_value_for_key(s, "x") == 5
        assert log == [0, 5]

    def test_key_path_through_store(self):
        class Node(KeyValueObservable):
            def __init__(self, name):
                self.name = name

        s = KeyValueStore({"node": Node("a")})
        log = []
        subscribe_path(s, "node.name", log.append)
        s.set("node", Node("b"))
        assert log == ["a", "b"]
        set_value_for_key_path(s, "node.name", "c")
        assert get_value_for_key_path(s, "node.name") == "c"

    def test_own_and_dispose(self):
        s = KeyValueStore({"x": 0})
        log = []
        s.own(subscribe(s, "x", log.append))
        s.set("x", 1)
        s.dispose()
        s.set("x", 2)
        assert log == [0, 1]
        assert s._key_observers is None

    def test_repr(self):
        assert "KeyValueStore({'x': 0})" == repr(KeyValueStore({"x": 0}))
