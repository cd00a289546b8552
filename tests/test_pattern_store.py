"""Tests for the flat-file pattern store."""

import pytest

from wdapty.exceptions import AlreadyExistsError, FormatError, PatternNotFoundError
from wdapty.patterns import PatternStore, is_valid_entry


class TestGrammar:
    @pytest.mark.parametrize(
        "line",
        ["name=value", "a.b-c_d=s3://bucket/{date}/x.parq", "x=1", "n=a=b"],
    )
    def test_accepted(self, line):
        assert is_valid_entry(line)

    @pytest.mark.parametrize(
        "line",
        ["name=va lue", "=value", "name=", "na me=value", "name", "name=value\n", "n@me=v"],
    )
    def test_rejected(self, line):
        assert not is_valid_entry(line)


class TestPatternStore:
    def test_list_missing_store_is_empty(self, store):
        assert store.list() == {}

    def test_add_creates_parent_directory(self, store):
        store.add("x", "1")
        assert store.path.exists()
        assert store.path.read_text() == "x=1\n"

    def test_add_then_list(self, store):
        store.add("x", "1")
        store.add("daily", "s3://bucket/{day}/file.parq")
        assert store.list() == {"x": "1", "daily": "s3://bucket/{day}/file.parq"}

    def test_add_duplicate_fails_regardless_of_value(self, store):
        store.add("x", "1")
        with pytest.raises(AlreadyExistsError):
            store.add("x", "2")
        with pytest.raises(AlreadyExistsError):
            store.add("x", "1")
        assert store.list() == {"x": "1"}

    def test_names_are_case_sensitive(self, store):
        store.add("x", "1")
        store.add("X", "2")
        assert store.list() == {"x": "1", "X": "2"}

    def test_add_rejects_whitespace(self, store):
        with pytest.raises(FormatError):
            store.add("name", "va lue")
        assert store.list() == {}

    def test_remove(self, store):
        store.add("x", "1")
        store.add("y", "2")
        store.remove("x")
        assert store.list() == {"y": "2"}

    def test_remove_is_idempotent(self, store):
        store.add("y", "2")
        store.remove("x")
        store.remove("x")
        assert store.list() == {"y": "2"}

    def test_remove_on_missing_store(self, store):
        store.remove("x")
        assert not store.path.exists()

    def test_remove_does_not_touch_prefixed_names(self, store):
        store.add("x", "1")
        store.add("xy", "2")
        store.remove("x")
        assert store.list() == {"xy": "2"}

    def test_malformed_lines_skipped(self, store):
        store.ensure_exists()
        store.path.write_text("good=1\nthis is junk\n\nbad= spaced\nalso=2\n")
        assert store.list() == {"good": "1", "also": "2"}

    def test_add_after_file_without_trailing_newline(self, store):
        store.ensure_exists()
        store.path.write_text("a=1")
        store.add("b", "2")
        assert store.list() == {"a": "1", "b": "2"}

    def test_get(self, store):
        store.add("x", "1")
        assert store.get("x") == "1"
        with pytest.raises(PatternNotFoundError):
            store.get("y")

    def test_add_entry_splits_on_first_equals(self, store):
        store.add_entry("  q=a=b  ")
        assert store.get("q") == "a=b"

    def test_add_entry_without_equals(self, store):
        with pytest.raises(FormatError):
            store.add_entry("novalue")

    def test_initialize(self, store):
        path = store.initialize(["a=1", "b=2"])
        assert path == store.path
        assert store.list() == {"a": "1", "b": "2"}

    def test_initialize_empty_creates_file(self, store):
        store.initialize([])
        assert store.path.exists()

    def test_default_path_under_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert PatternStore().path == tmp_path / ".wdapty" / "config.ini"
