"""Command-line front door for fileman.

Parses CLI options, loads configuration and either runs a single command or
the interactive menu loop. Operation errors are printed and never end the
program; only configuration problems and interrupts change the exit status.
"""

from __future__ import annotations

import argparse
import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Sequence

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from . import __version__
from .config.parser import (
    ConfigParser,
    ConfigurationError,
    create_config_template,
    load_config,
    validate_config_file
)
from .errors import InvalidOperationError
from .models.config import FileManConfig, LOG_LEVELS
from .models.requests import CommandResult, TransferKind
from .service import FileManager


logger = logging.getLogger(__name__)

MENU_TITLE = "What operation do you want to perform?"
SOURCE_PATH = "Enter source file path"
DESTINATION_PATH = "Enter destination file path"
FILE_NAME = "Enter file name"
TRANSFER_KIND = "Which operation do you want to perform copy or move"

DEFAULT_CONFIG_FILE = "fileman.yaml"


class MenuChoice(Enum):
    """Entries of the interactive menu, keyed by the letter the user types."""
    LIST = "a"
    SEARCH = "b"
    TRANSFER = "c"
    DELETE = "d"
    QUIT = "q"


MENU_OPTIONS = [
    (MenuChoice.LIST, "List all files"),
    (MenuChoice.SEARCH, "Search file"),
    (MenuChoice.TRANSFER, "Copy or move file"),
    (MenuChoice.DELETE, "Delete file"),
    (MenuChoice.QUIT, "Exit"),
]

Ask = Callable[..., str]


def create_menu_table() -> Table:
    """Build the table listing menu choices."""
    table = Table(title=MENU_TITLE, box=None, title_style="bold cyan")
    table.add_column("Option", style="cyan", justify="right")
    table.add_column("Description")
    for choice, description in MENU_OPTIONS:
        table.add_row(choice.value.upper(), description)
    return table


def print_result(result: CommandResult, console: Console, err_console: Optional[Console] = None) -> None:
    """Print a command result as plain text, errors to ``err_console`` when given."""
    target = err_console if (err_console is not None and not result.ok) else console
    text = result.render()
    if text:
        target.print(text, markup=False, highlight=False, soft_wrap=True)


def _ask(ask: Ask, prompt: str) -> str:
    return ask(prompt, default="", show_default=False).strip()


def _run_menu_choice(choice: MenuChoice, manager: FileManager, ask: Ask) -> CommandResult:
    """Collect fresh input for one menu choice and run it."""
    if choice is MenuChoice.LIST:
        source = _ask(ask, SOURCE_PATH)
        return manager.run("list", source)

    if choice is MenuChoice.SEARCH:
        source = _ask(ask, SOURCE_PATH)
        file_name = _ask(ask, FILE_NAME)
        return manager.run("search", source, file_name=file_name)

    if choice is MenuChoice.TRANSFER:
        source = _ask(ask, SOURCE_PATH)
        destination = _ask(ask, DESTINATION_PATH)
        file_name = _ask(ask, FILE_NAME)
        keyword = _ask(ask, TRANSFER_KIND)
        try:
            kind = TransferKind.parse(keyword)
        except InvalidOperationError as e:
            return CommandResult(error=str(e))
        return manager.run(kind.value, source, destination, file_name)

    if choice is MenuChoice.DELETE:
        source = _ask(ask, SOURCE_PATH)
        file_name = _ask(ask, FILE_NAME)
        return manager.run("delete", source, file_name=file_name)

    raise AssertionError(f"Unhandled menu choice: {choice}")


def run_menu(manager: FileManager, console: Console, ask: Ask = Prompt.ask) -> int:
    """
    Run the interactive menu until the user quits.

    Every iteration starts from fresh input; nothing typed for one command is
    reused by the next.
    """
    while True:
        console.print(create_menu_table())
        try:
            answer = _ask(ask, "Choose an option").lower()
        except EOFError:
            console.print("Exiting...")
            return 0

        try:
            choice = MenuChoice(answer)
        except ValueError:
            console.print("invalid option")
            continue

        if choice is MenuChoice.QUIT:
            console.print("Exiting...")
            return 0

        try:
            result = _run_menu_choice(choice, manager, ask)
        except EOFError:
            console.print("Exiting...")
            return 0

        print_result(result, console)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="fileman",
        description="List, search, copy, move and delete files and directories."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", metavar="PATH", default=None, help="Path to a YAML configuration file.")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        default=None,
        help="Override the configured log level."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Shortcut for --log-level DEBUG.")

    subparsers = parser.add_subparsers(dest="command")

    list_parser = subparsers.add_parser("list", help="List every file under a directory.")
    list_parser.add_argument("source", help="Directory to list.")

    search_parser = subparsers.add_parser("search", help="Check whether a file name occurs under a directory.")
    search_parser.add_argument("source", help="Directory to search.")
    search_parser.add_argument("name", help="Exact file name to look for.")

    for command, verb in (("copy", "Copy"), ("move", "Move")):
        transfer_parser = subparsers.add_parser(command, help=f"{verb} a file, or a whole directory when NAME is omitted.")
        transfer_parser.add_argument("source", help="Source directory.")
        transfer_parser.add_argument("destination", help="Destination directory.")
        transfer_parser.add_argument("name", nargs="?", default="", help="File name; omit for the whole directory.")

    delete_parser = subparsers.add_parser("delete", help="Delete a file, or a whole directory when NAME is omitted.")
    delete_parser.add_argument("source", help="Directory holding the file, or the directory to delete.")
    delete_parser.add_argument("name", nargs="?", default="", help="File name; omit for the whole directory.")

    subparsers.add_parser("menu", help="Start the interactive menu (default).")

    config_parser = subparsers.add_parser("config", help="Create, check or show configuration files.")
    config_commands = config_parser.add_subparsers(dest="config_command", required=True)

    init_parser = config_commands.add_parser("init", help="Write a configuration file with default settings.")
    init_parser.add_argument("path", nargs="?", default=DEFAULT_CONFIG_FILE, help="File to write.")
    init_parser.add_argument("--force", action="store_true", help="Overwrite an existing file.")

    check_parser = config_commands.add_parser("check", help="Validate a configuration file.")
    check_parser.add_argument("path", nargs="?", default=None, help="File to check; defaults to --config.")

    show_parser = config_commands.add_parser("show", help="Print the configuration in effect.")
    show_parser.add_argument("--defaults", action="store_true", help="Print the built-in defaults instead.")

    return parser


def run_config_command(args: argparse.Namespace, console: Console, err_console: Console) -> int:
    """Run one of the ``config`` subcommands and return the exit status."""
    parser = ConfigParser()

    if args.config_command == "init":
        path = Path(args.path)
        if path.exists() and not args.force:
            err_console.print(f"{path} already exists, use --force to overwrite", markup=False, soft_wrap=True)
            return 1
        try:
            create_config_template(path)
        except ConfigurationError as e:
            err_console.print(str(e), markup=False, soft_wrap=True)
            return 1
        console.print(f"Configuration template written to {path}", markup=False, soft_wrap=True)
        return 0

    if args.config_command == "check":
        path = args.path or args.config or DEFAULT_CONFIG_FILE
        errors = validate_config_file(path)
        for error in errors:
            err_console.print(error, markup=False, soft_wrap=True)
        if errors:
            return 1
        console.print(f"{path}: configuration is valid", markup=False, soft_wrap=True)
        return 0

    if args.defaults:
        text = parser.get_config_template()
    else:
        try:
            text = parser.dump_config(load_config(args.config).config)
        except ConfigurationError as e:
            err_console.print(str(e), markup=False, soft_wrap=True)
            return 2
    console.print(text, markup=False, highlight=False, soft_wrap=True)
    return 0


def configure_logging(config: FileManConfig, level_override: Optional[str] = None) -> None:
    """Configure the root logger from configuration and command-line overrides."""
    level = level_override or config.logging.level
    logging.basicConfig(level=getattr(logging, level), format=config.logging.format)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse CLI arguments and run the requested command.

    Returns the process exit status: 0 on success, 1 when a one-shot command
    failed, 2 for configuration errors and 130 when interrupted.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console(highlight=False)
    err_console = Console(stderr=True, highlight=False)

    if args.command == "config":
        return run_config_command(args, console, err_console)

    try:
        config_result = load_config(args.config)
    except ConfigurationError as e:
        err_console.print(str(e), markup=False, soft_wrap=True)
        return 2

    level_override = "DEBUG" if args.verbose else args.log_level
    configure_logging(config_result.config, level_override)
    for warning in config_result.warnings:
        logger.debug(warning)

    manager = FileManager(config_result.config)

    try:
        if args.command in (None, "menu"):
            return run_menu(manager, console)

        if args.command == "list":
            result = manager.run("list", args.source)
        elif args.command == "search":
            result = manager.run("search", args.source, file_name=args.name)
        elif args.command in ("copy", "move"):
            result = manager.run(args.command, args.source, args.destination, args.name)
        else:
            result = manager.run("delete", args.source, file_name=args.name)
    except KeyboardInterrupt:
        err_console.print("Interrupted by user.")
        return 130

    print_result(result, console, err_console)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
