"""Command line interface for rich-prompt.

Runs a single prompt from the shell and prints its result, which makes the
primitives usable from scripts and easy to try out:

    rich-prompt menu "Pick one" red green blue
    rich-prompt dashboard settings.yaml
    rich-prompt path "Config directory" --default .
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml

from . import __version__
from .components import DashboardAction, DashboardItem, DashboardSection, Option
from .console import console
from .dashboard import ask_dashboard
from .menu import EXIT, ask
from .multiselect import ask_multi_select
from .prompts import ask_confirm, ask_path, ask_value
from .themes import ThemeError, configure_from_env, load_theme_file, set_theme

logger = logging.getLogger(__name__)


class DashboardFileError(ValueError):
    """Raised when a dashboard definition file is malformed."""


def _print(msg: str = "") -> None:
    console.print(msg, highlight=False)


def _fail(msg: str) -> None:
    console.print(f"[red]Error:[/red] {msg}", highlight=False)
    sys.exit(1)


def load_dashboard_file(path: str | Path) -> dict:
    """Load a dashboard definition from YAML.

    Expected layout::

        title: Settings
        status: optional text
        sections:
          - title: Connection
            items:
              - {key: host, label: Host, value: localhost, help: "..."}
        actions:
          - {key: q, label: Back}

    Returns:
        Dict with "title", "sections", "actions" and "status".

    Raises:
        DashboardFileError: If the file is unreadable or malformed.
    """
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text())
    except OSError as e:
        raise DashboardFileError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise DashboardFileError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise DashboardFileError(f"{path} must contain a mapping")

    try:
        sections = [
            DashboardSection(
                title=section.get("title"),
                items=[
                    DashboardItem(
                        key=str(item["key"]),
                        label=str(item.get("label", item["key"])),
                        value=str(item.get("value", "")),
                        help=item.get("help"),
                    )
                    for item in section.get("items") or []
                ],
            )
            for section in data.get("sections") or []
        ]
        actions = [
            DashboardAction(key=str(action["key"]), label=str(action.get("label", action["key"])))
            for action in data.get("actions") or []
        ]
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise DashboardFileError(f"Malformed dashboard in {path}: {e}") from e

    if not any(section.items for section in sections):
        raise DashboardFileError(f"{path} defines no dashboard items")

    return {
        "title": str(data.get("title") or path.stem),
        "sections": sections,
        "actions": actions,
        "status": data.get("status"),
    }


def cmd_menu(args):
    """Ask a single-choice question."""
    choice = ask(args.question, [Option(label) for label in args.options], exit=args.exit)
    _print("back" if choice == EXIT else str(choice))


def cmd_dashboard(args):
    """Run a dashboard loop from a YAML file, editing values in memory."""
    try:
        definition = load_dashboard_file(args.file)
    except DashboardFileError as e:
        _fail(str(e))

    sections = definition["sections"]
    status = definition["status"]
    last_selected = None
    logger.debug(
        "Loaded dashboard %r: %d sections, %d actions",
        definition["title"],
        len(sections),
        len(definition["actions"]),
    )

    while True:
        choice = ask_dashboard(
            definition["title"],
            sections,
            definition["actions"],
            selected=last_selected,
            status=status,
        )
        if choice is None or (choice.is_action and choice.key.lower() == "q"):
            break

        if choice.is_action:
            status = f"[dim]Action:[/dim] {choice.key}"
            last_selected = None
            continue

        last_selected = choice.key
        sections, status = _edit_dashboard_item(sections, choice.key)

    values = {item.key: item.value for section in sections for item in section.items}
    _print(yaml.safe_dump(values, sort_keys=False).rstrip())


def _edit_dashboard_item(
    sections: list[DashboardSection], key: str
) -> tuple[list[DashboardSection], str | None]:
    """Ask for a new value of one item; return updated sections and status."""
    updated = []
    status = None
    for section in sections:
        items = []
        for item in section.items:
            if item.key == key:
                value = ask_value(item.label, item.value)
                if value != item.value:
                    status = f"[green]✓[/green] {item.label} = {value}"
                    item = DashboardItem(key=item.key, label=item.label, value=value, help=item.help)
            items.append(item)
        updated.append(DashboardSection(title=section.title, items=items))
    return updated, status


def cmd_value(args):
    """Ask for a value with a default."""
    _print(ask_value(args.label, args.current, mask=args.mask))


def cmd_path(args):
    """Ask for a path with Tab completion."""
    _print(ask_path(args.question, args.default))


def cmd_select(args):
    """Pick any number of items from a filterable grid."""
    selected = set(args.checked or [])
    unknown = selected.difference(args.items)
    if unknown:
        _fail(f"Not among the items: {', '.join(sorted(unknown))}")
    ask_multi_select(args.question, args.items, selected)
    for item in args.items:
        if item in selected:
            _print(item)


def cmd_confirm(args):
    """Ask a yes/no question; exit status 0 for yes, 1 for no."""
    if not ask_confirm(args.question, default_yes=args.yes):
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="rich-prompt",
        description="rich-prompt: keyboard-driven terminal prompts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"rich-prompt {__version__}")
    parser.add_argument("--theme", help="Built-in theme name (default, mono)")
    parser.add_argument("--theme-file", help="YAML theme file")
    parser.add_argument("--debug", action="store_true", help="Log debug output to stderr")

    subparsers = parser.add_subparsers(dest="command")

    # menu
    menu_p = subparsers.add_parser("menu", help="Single-choice menu; prints the index")
    menu_p.add_argument("question", help="Question shown above the options")
    menu_p.add_argument("options", nargs="+", help="Option labels")
    menu_p.add_argument("--exit", action="store_true", help="Label the last option Exit instead of Back")
    menu_p.set_defaults(func=cmd_menu)

    # dashboard
    dash_p = subparsers.add_parser("dashboard", help="Dashboard loop from a YAML definition")
    dash_p.add_argument("file", help="Dashboard definition (YAML)")
    dash_p.set_defaults(func=cmd_dashboard)

    # value
    value_p = subparsers.add_parser("value", help="Ask for a value")
    value_p.add_argument("label", help="Field label")
    value_p.add_argument("--current", default="", help="Value kept on empty input")
    value_p.add_argument("--mask", action="store_true", help="Mask the current value")
    value_p.set_defaults(func=cmd_value)

    # path
    path_p = subparsers.add_parser("path", help="Ask for a path with Tab completion")
    path_p.add_argument("question", help="Question shown above the input")
    path_p.add_argument("--default", default=".", help="Path used on empty input (default: .)")
    path_p.set_defaults(func=cmd_path)

    # select
    select_p = subparsers.add_parser("select", help="Filterable multi-select; prints chosen items")
    select_p.add_argument("question", help="Question shown above the grid")
    select_p.add_argument("items", nargs="+", help="Items to choose from")
    select_p.add_argument("--checked", action="append", help="Item selected initially (repeatable)")
    select_p.set_defaults(func=cmd_select)

    # confirm
    confirm_p = subparsers.add_parser("confirm", help="Yes/no question; exit status 1 for no")
    confirm_p.add_argument("question", help="Question to ask")
    confirm_p.add_argument("--yes", action="store_true", help="Default to yes")
    confirm_p.set_defaults(func=cmd_confirm)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        configure_from_env()
        if args.theme_file:
            set_theme(load_theme_file(args.theme_file))
        elif args.theme:
            set_theme(args.theme)
    except ThemeError as e:
        _fail(str(e))

    if not hasattr(args, "func"):
        parser.print_help()
        return

    try:
        args.func(args)
    except KeyboardInterrupt:
        print()
        sys.exit(130)


if __name__ == "__main__":
    main()
