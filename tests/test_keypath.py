"""Tests for split_key_path."""

import pytest

from keyvo import split_key_path


class TestSplitKeyPath:
    def test_splits_string_on_dots(self):
        assert split_key_path("foo.bar.baz") == ["foo", "bar", "baz"]

    def test_single_key(self):
        assert split_key_path("foo") == ["foo"]

    def test_empty_string_is_receiver_key(self):
        assert split_key_path("") == [""]

    def test_sequence_passes_through(self):
        assert split_key_path(["foo", "bar"]) == ["foo", "bar"]
        assert split_key_path(("foo", "bar")) == ["foo", "bar"]

    @pytest.mark.parametrize("bad", [None, 42, b"foo.bar", ["foo", 1], {"foo": 1}])
    def test_rejects_other_input(self, bad):
        with pytest.raises(TypeError):
            split_key_path(bad)

    def test_empty_sequence_is_receiver_key(self):
        assert split_key_path([]) == [""]
        assert split_key_path(()) == [""]
