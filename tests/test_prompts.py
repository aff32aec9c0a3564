"""Tests for value, path and confirm prompts."""

import pytest

from rich_prompt import keys
from rich_prompt.prompts import ask_confirm, ask_path, ask_value, display_value, is_placeholder


def typed(text):
    return [keys.char(c) for c in text]


class TestDisplayValue:
    def test_placeholder(self):
        assert is_placeholder("{PGPASSWORD}")
        assert not is_placeholder("secret")
        assert not is_placeholder("{}")

    def test_mask(self):
        assert display_value("secret", mask=True) == "****"
        assert display_value("{PGPASSWORD}", mask=True) == "{PGPASSWORD}"
        assert display_value("", mask=True) == ""
        assert display_value("secret") == "secret"


class TestAskValue:
    def test_new_value(self, feed_keys):
        feed_keys(*typed("  db.local "), keys.ENTER)
        assert ask_value("Host", "localhost") == "db.local"

    def test_empty_keeps_current(self, feed_keys):
        feed_keys(keys.ENTER)
        assert ask_value("Host", "localhost") == "localhost"

    def test_cancel_keeps_current(self, feed_keys):
        feed_keys(*typed("x"), keys.ESCAPE)
        assert ask_value("Host", "localhost") == "localhost"

    def test_masked_prompt(self, feed_keys, output):
        feed_keys(keys.ENTER)
        assert ask_value("Password", "hunter2", mask=True) == "hunter2"
        text = output.getvalue()
        assert "[****]>" in text
        assert "hunter2" not in text

    def test_fallback(self, noninteractive, answers):
        answers("5433")
        assert ask_value("Port", "5432") == "5433"


class TestAskPath:
    def test_tab_completes_directory(self, feed_keys, tmp_path, monkeypatch):
        (tmp_path / "configs").mkdir()
        monkeypatch.chdir(tmp_path)
        feed_keys(*typed("con"), keys.TAB, keys.ENTER)
        assert ask_path("Where?", ".") == "configs"

    def test_empty_uses_default(self, feed_keys):
        feed_keys(keys.ENTER)
        assert ask_path("Where?", "out/") == "out"

    def test_cancel_uses_default(self, feed_keys):
        feed_keys(keys.ESCAPE)
        assert ask_path("Where?", "build") == "build"

    def test_root_slashes_become_dot(self, feed_keys):
        feed_keys(*typed("//"), keys.ENTER)
        assert ask_path("Where?", "x") == "."

    def test_question_printed(self, feed_keys, output):
        feed_keys(keys.ENTER)
        ask_path("Output directory", ".")
        assert "Output directory" in output.getvalue()


class TestAskConfirm:
    @pytest.mark.parametrize("answer", ["y", "Y", "yes", " YES "])
    def test_yes(self, answers, answer):
        answers(answer)
        assert ask_confirm("Continue?") is True

    @pytest.mark.parametrize("answer", ["n", "no", "maybe"])
    def test_no(self, answers, answer):
        answers(answer)
        assert ask_confirm("Continue?", default_yes=True) is False

    def test_empty_uses_default(self, answers):
        answers("", "")
        assert ask_confirm("Continue?") is False
        assert ask_confirm("Continue?", default_yes=True) is True

    def test_eof_uses_default(self, answers):
        answers()
        assert ask_confirm("Continue?", default_yes=True) is True

    def test_hint(self, answers, output):
        answers("")
        ask_confirm("Continue?", default_yes=True)
        assert "[Y/n]" in output.getvalue()
