"""Tests for filesystem path completion."""

import os

import pytest

from rich_prompt.completion import complete_path, list_matches, longest_common_prefix, split_path


@pytest.fixture
def tree(tmp_path, monkeypatch):
    (tmp_path / "foo.json").write_text("{}")
    (tmp_path / "foobar.json").write_text("{}")
    (tmp_path / "other.txt").write_text("")
    (tmp_path / ".hidden").write_text("")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.py").write_text("")
    (tmp_path / "src" / "models").mkdir()
    (tmp_path / "settings").mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_longest_common_prefix():
    assert longest_common_prefix(["foo.json", "foobar.json"]) == "foo"
    assert longest_common_prefix(["abc"]) == "abc"
    assert longest_common_prefix([]) == ""


def test_split_path():
    assert split_path("src/ma") == ("src/", "ma")
    assert split_path("foo") == ("", "foo")
    assert split_path("/etc/") == ("/etc/", "")


class TestListMatches:
    def test_directories_first_with_slash(self, tree):
        assert list_matches(".", "s") == ["settings/", "src/"]

    def test_hidden_only_for_dot_prefix(self, tree):
        assert ".hidden" not in list_matches(".", "")
        assert list_matches(".", ".h") == [".hidden"]

    def test_missing_directory_raises(self, tree):
        with pytest.raises(OSError):
            list_matches("missing", "")


class TestCompletePath:
    def test_two_files_common_prefix(self, tree):
        result = complete_path("fo")
        assert list(result.matches) == ["foo.json", "foobar.json"]
        assert result.completed == "foo"
        assert result.prefix == ""

    def test_single_match(self, tree):
        result = complete_path("oth")
        assert list(result.matches) == ["other.txt"]
        assert result.completed == "other.txt"

    def test_single_directory_gets_slash(self, tree):
        result = complete_path("se")
        assert result.completed == "settings/"

    def test_inside_directory(self, tree):
        result = complete_path("src/m")
        assert list(result.matches) == ["models/", "main.py"]
        assert result.completed == "src/m"
        assert result.prefix == "src/"

    def test_no_matches(self, tree):
        result = complete_path("zzz")
        assert list(result.matches) == []
        assert result.completed == "zzz"

    def test_unreadable_directory_returns_none(self, tree):
        assert complete_path("missing/x") is None

    def test_home_expansion(self, tree, monkeypatch):
        monkeypatch.setenv("HOME", str(tree))
        result = complete_path("~/foob")
        assert list(result.matches) == ["foobar.json"]
        assert result.completed == "~/foobar.json"

    @pytest.mark.skipif(os.name != "posix" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
    def test_permission_denied_returns_none(self, tree):
        locked = tree / "locked"
        locked.mkdir()
        locked.chmod(0)
        try:
            assert complete_path("locked/") is None
        finally:
            locked.chmod(0o755)
