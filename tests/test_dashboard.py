"""Tests for the dashboard prompt."""

import pytest

from rich_prompt import keys
from rich_prompt.components import DashboardAction, DashboardItem, DashboardResult, DashboardSection
from rich_prompt.dashboard import Dashboard, ask_dashboard

SECTIONS = [
    DashboardSection(
        title="Connection",
        items=[
            DashboardItem("host", "Host", "localhost", help="Server name"),
            DashboardItem("port", "Port", "5432"),
        ],
    ),
    DashboardSection(
        title="Auth",
        items=[DashboardItem("user", "User", "admin", help="Login\nused for every query")],
    ),
]
ACTIONS = [DashboardAction("q", "Back"), DashboardAction("t", "Test connection")]


class TestComponents:
    def test_action_key_must_be_one_char(self):
        with pytest.raises(ValueError):
            DashboardAction("qq", "Bad")
        with pytest.raises(ValueError):
            DashboardAction("", "Bad")

    def test_action_matches_case_insensitive(self):
        assert DashboardAction("q", "Back").matches("Q")
        assert DashboardAction("Q", "Back").matches("q")

    def test_result_tags(self):
        assert DashboardResult.item("host").is_item
        assert DashboardResult.action("q").is_action
        assert DashboardResult.item("host") == DashboardResult(type="item", key="host")


class TestDashboard:
    def test_rejects_no_items(self):
        with pytest.raises(ValueError):
            Dashboard([DashboardSection(title="Empty")])

    def test_rejects_duplicate_keys(self):
        with pytest.raises(ValueError):
            Dashboard([DashboardSection(items=[DashboardItem("a", "A"), DashboardItem("a", "B")])])

    def test_selected_restores_cursor(self):
        assert Dashboard(SECTIONS, selected="user").cursor == 2

    def test_unknown_selected_starts_at_top(self):
        assert Dashboard(SECTIONS, selected="nope").cursor == 0

    def test_cursor_clamped(self):
        board = Dashboard(SECTIONS)
        board.handle_key(keys.UP)
        assert board.cursor == 0
        for _ in range(5):
            board.handle_key(keys.DOWN)
        assert board.cursor == 2

    def test_enter_returns_item(self):
        board = Dashboard(SECTIONS)
        board.handle_key(keys.DOWN)
        assert board.handle_key(keys.ENTER) is True
        assert board.result == DashboardResult.item("port")

    def test_action_hotkey(self):
        board = Dashboard(SECTIONS, ACTIONS)
        assert board.handle_key(keys.char("T")) is True
        assert board.result == DashboardResult.action("t")

    def test_action_wins_over_digit(self):
        board = Dashboard(SECTIONS, [DashboardAction("1", "Run first")])
        board.handle_key(keys.char("1"))
        assert board.result == DashboardResult.action("1")

    def test_digit_picks_item(self):
        board = Dashboard(SECTIONS, ACTIONS)
        assert board.handle_key(keys.char("3")) is True
        assert board.result == DashboardResult.item("user")
        assert board.cursor == 2

    @pytest.mark.parametrize("key", [keys.ESCAPE, keys.BACKSPACE, keys.DELETE, keys.EOF])
    def test_back_keys_return_none(self, key):
        board = Dashboard(SECTIONS, ACTIONS)
        assert board.handle_key(key) is True
        assert board.result is None

    def test_other_chars_ignored(self):
        board = Dashboard(SECTIONS, ACTIONS)
        assert board.handle_key(keys.char("z")) is False

    @pytest.mark.parametrize("c", ["²", "³", "①"])
    def test_non_ascii_digit_ignored(self, c):
        board = Dashboard(SECTIONS, ACTIONS)
        assert board.handle_key(keys.char(c)) is False
        assert board.cursor == 0
        assert board.result is None

    @pytest.mark.parametrize("status", [None, "[green]Saved[/green]", "line 1\nline 2"])
    def test_render_height_matches_formula(self, status):
        board = Dashboard(SECTIONS, ACTIONS, status=status)
        for _ in range(3):
            assert len(board.render(80)) == board.height()
            board.handle_key(keys.DOWN)

    def test_render_height_without_actions_or_titles(self):
        sections = [DashboardSection(items=[DashboardItem("a", "A")]), DashboardSection(items=[DashboardItem("b", "B")])]
        board = Dashboard(sections)
        assert len(board.render(80)) == board.height() == 5

    def test_render_shows_titles_values_and_actions(self):
        lines = "\n".join(Dashboard(SECTIONS, ACTIONS).render(80))
        assert "Connection" in lines
        assert "localhost" in lines
        assert "Test connection" in lines
        assert "Server name" in lines

    def test_trailing_height(self):
        board = Dashboard(SECTIONS, ACTIONS, status="done")
        # help: blank + 2 rows; status: blank + 1 row
        assert board.trailing_height() == 5


class TestAskDashboard:
    def test_enter_on_restored_item(self, feed_keys):
        feed_keys(keys.ENTER)
        result = ask_dashboard("Settings", SECTIONS, ACTIONS, selected="port")
        assert result == DashboardResult.item("port")

    def test_action_precedence(self, feed_keys):
        feed_keys(keys.DOWN, keys.char("q"))
        result = ask_dashboard("Settings", SECTIONS, ACTIONS)
        assert result == DashboardResult.action("q")

    def test_superscript_two_key_ignored(self, feed_keys):
        feed_keys(keys.char("²"), keys.ENTER)
        assert ask_dashboard("Settings", SECTIONS, ACTIONS) == DashboardResult.item("host")

    def test_escape_returns_none(self, feed_keys):
        feed_keys(keys.ESCAPE)
        assert ask_dashboard("Settings", SECTIONS, ACTIONS) is None

    def test_trailing_rows_cleared(self, feed_keys, output):
        feed_keys(keys.ENTER)
        ask_dashboard("Settings", SECTIONS, ACTIONS, status="done")
        assert output.getvalue().endswith("\x1b[5A\x1b[J")

    def test_status_is_markup(self, feed_keys, output):
        feed_keys(keys.ESCAPE)
        ask_dashboard("Settings", SECTIONS, status="[green]Saved[/green]")
        text = output.getvalue()
        assert "Saved" in text
        assert "[green]" not in text


class TestDashboardFallback:
    def test_number(self, noninteractive, answers):
        answers("2")
        assert ask_dashboard("Settings", SECTIONS, ACTIONS) == DashboardResult.item("port")

    def test_action_key(self, noninteractive, answers):
        answers("T")
        assert ask_dashboard("Settings", SECTIONS, ACTIONS) == DashboardResult.action("t")

    def test_back(self, noninteractive, answers):
        answers("back")
        assert ask_dashboard("Settings", SECTIONS) is None

    def test_eof(self, noninteractive, answers):
        answers()
        assert ask_dashboard("Settings", SECTIONS, ACTIONS) is None

    def test_invalid_then_valid(self, noninteractive, answers, output):
        answers("9", "1")
        assert ask_dashboard("Settings", SECTIONS, ACTIONS) == DashboardResult.item("host")
        assert "Please enter a number between 1 and 3" in output.getvalue()
