"""Command-line interface for Carpool Tracker."""

import argparse
import shlex
import sys
from typing import Iterable, List, Optional, Sequence, TextIO, Tuple

from . import __version__
from .commands import (
    ALL_COMMANDS,
    AddCommand,
    ClearCommand,
    Command,
    CommandError,
    DeleteCommand,
    EditCommand,
    EditPassengerDescriptor,
    ExitCommand,
    FindCommand,
    FindPoolCommand,
    HelpCommand,
    Index,
    ListCommand,
    PoolCommand,
    UnpoolCommand,
)
from .display import format_passengers, format_pools
from .domain.entities import UNASSIGNED, Assigned, Driver, Passenger
from .domain.predicates import (
    AddressContainsKeywords,
    AllOf,
    AnyOf,
    DriverNameContainsKeywords,
    NameContainsKeywords,
    PooledPassengerContainsKeywords,
    PriceAtLeast,
    TagContainsKeywords,
    TripDayMatches,
)
from .domain.values import Address, Name, Phone, Price, Tag, TripTime, parse_trip_day
from .logic import LogicManager
from .main import create_app
from .storage import StorageError
from .utils.logging_config import get_logger, log_exception

logger = get_logger('cli')

EXIT_OK = 0
EXIT_COMMAND_FAILED = 1
EXIT_USAGE = 2

SHELL_PROMPT = "carpool> "
SHELL_WELCOME = "Carpool Tracker shell. Type 'help' for the list of commands, 'exit' to quit."

# Which listing to print after each command
PASSENGER_LISTINGS = {"add", "delete", "edit", "find"}
POOL_LISTINGS = {"pool", "unpool", "findpool"}
FULL_LISTINGS = {"list", "clear"}


class CliUsageError(Exception):
    """The command line could not be parsed."""


class CarpoolArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting on bad input."""

    def error(self, message):
        raise CliUsageError(f"{self.prog}: {message}")


def _index(text: str) -> Index:
    try:
        return Index(int(text))
    except (TypeError, ValueError):
        raise argparse.ArgumentTypeError(f"invalid index: {text!r} (must be a positive integer)")


def _words(values: Optional[Sequence[str]]) -> Optional[str]:
    """Join a multi-token option such as ``--name John Doe``, trimming the ends."""
    if values is None:
        return None
    return " ".join(values).strip()


def _keywords(values: Optional[Sequence[str]], option: str) -> Tuple[str, ...]:
    keywords = tuple(values or ())
    for keyword in keywords:
        if not keyword.strip() or len(keyword.split()) > 1:
            raise ValueError(f"{option} keywords must be single non-empty words: {keyword!r}")
    return keywords


def _tags(values: Optional[Sequence[str]]):
    return frozenset(Tag(value) for value in values or ())


def build_parser() -> CarpoolArgumentParser:
    """Build the parser with one subcommand per command word."""
    parser = CarpoolArgumentParser(
        prog="carpool-tracker",
        description="Manage passengers, drivers and carpools from the command line",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    add = subparsers.add_parser("add", help="Add a passenger")
    add.add_argument("--name", nargs="+", required=True)
    add.add_argument("--phone", required=True)
    add.add_argument("--address", nargs="+", required=True)
    add.add_argument("--day", required=True, help="Full weekday name, e.g. monday")
    add.add_argument("--time", required=True, help="24-hour time, HHMM")
    add.add_argument("--price")
    add.add_argument("--tag", action="append", default=[])

    delete = subparsers.add_parser("delete", help="Delete passengers by index")
    delete.add_argument("indexes", nargs="+", type=_index, metavar="INDEX")

    edit = subparsers.add_parser("edit", help="Edit a passenger by index")
    edit.add_argument("index", type=_index)
    edit.add_argument("--name", nargs="+")
    edit.add_argument("--phone")
    edit.add_argument("--address", nargs="+")
    edit.add_argument("--day")
    edit.add_argument("--time")
    edit.add_argument("--price")
    edit.add_argument("--tag", action="append")
    edit.add_argument("--clear-tags", action="store_true")
    edit.add_argument("--driver-name", nargs="+")
    edit.add_argument("--driver-phone")
    edit.add_argument("--unassign-driver", action="store_true")

    find = subparsers.add_parser("find", help="Filter the passenger list")
    find.add_argument("--name", nargs="+", action="extend")
    find.add_argument("--address", nargs="+", action="extend")
    find.add_argument("--tag", nargs="+", action="extend")
    find.add_argument("--day")
    find.add_argument("--min-price")

    subparsers.add_parser("list", help="Show all passengers and pools")
    subparsers.add_parser("clear", help="Remove all passengers and pools")

    pool = subparsers.add_parser("pool", help="Pool passengers with a driver")
    pool.add_argument("--name", nargs="+", required=True, help="Driver name")
    pool.add_argument("--phone", required=True, help="Driver phone")
    pool.add_argument("--day", required=True)
    pool.add_argument("--time", required=True)
    pool.add_argument("--commuter", action="append", type=_index, default=[], metavar="INDEX")
    pool.add_argument("--tag", action="append", default=[])

    unpool = subparsers.add_parser("unpool", help="Remove a pool by index")
    unpool.add_argument("index", type=_index)

    findpool = subparsers.add_parser("findpool", help="Filter the pool list")
    findpool.add_argument("--driver", nargs="+", action="extend")
    findpool.add_argument("--passenger", nargs="+", action="extend")

    subparsers.add_parser("help", help="Show usage of every command")
    subparsers.add_parser("exit", help="Leave the shell")
    subparsers.add_parser("shell", help="Start an interactive session")

    return parser


def _build_passenger(ns: argparse.Namespace) -> Passenger:
    return Passenger(
        name=Name(_words(ns.name)),
        phone=Phone(ns.phone),
        address=Address(_words(ns.address)),
        trip_day=parse_trip_day(ns.day),
        trip_time=TripTime.parse(ns.time),
        tags=_tags(ns.tag),
        price=Price.parse(ns.price) if ns.price is not None else None,
    )


def _build_edit_descriptor(ns: argparse.Namespace) -> EditPassengerDescriptor:
    if ns.clear_tags and ns.tag:
        raise ValueError("--tag and --clear-tags cannot be used together")
    if ns.unassign_driver and (ns.driver_name or ns.driver_phone):
        raise ValueError("--unassign-driver cannot be combined with a new driver")
    if bool(ns.driver_name) != bool(ns.driver_phone):
        raise ValueError("--driver-name and --driver-phone must be given together")

    tags = None
    if ns.clear_tags:
        tags = frozenset()
    elif ns.tag:
        tags = _tags(ns.tag)

    driver = None
    if ns.unassign_driver:
        driver = UNASSIGNED
    elif ns.driver_name:
        driver = Assigned(Driver(Name(_words(ns.driver_name)), Phone(ns.driver_phone)))

    return EditPassengerDescriptor(
        name=Name(_words(ns.name)) if ns.name else None,
        phone=Phone(ns.phone) if ns.phone is not None else None,
        address=Address(_words(ns.address)) if ns.address else None,
        trip_day=parse_trip_day(ns.day) if ns.day is not None else None,
        trip_time=TripTime.parse(ns.time) if ns.time is not None else None,
        tags=tags,
        price=Price.parse(ns.price) if ns.price is not None else None,
        driver=driver,
    )


def _build_find_predicate(ns: argparse.Namespace):
    predicates = []
    if ns.name:
        predicates.append(NameContainsKeywords(_keywords(ns.name, "--name")))
    if ns.address:
        predicates.append(AddressContainsKeywords(_keywords(ns.address, "--address")))
    if ns.tag:
        predicates.append(TagContainsKeywords(_keywords(ns.tag, "--tag")))
    if ns.day is not None:
        predicates.append(TripDayMatches(parse_trip_day(ns.day)))
    if ns.min_price is not None:
        predicates.append(PriceAtLeast(Price.parse(ns.min_price)))

    if not predicates:
        raise ValueError("find needs at least one search criterion")
    if len(predicates) == 1:
        return predicates[0]
    return AllOf(tuple(predicates))


def _build_findpool_predicate(ns: argparse.Namespace):
    predicates = []
    if ns.driver:
        predicates.append(DriverNameContainsKeywords(_keywords(ns.driver, "--driver")))
    if ns.passenger:
        predicates.append(PooledPassengerContainsKeywords(_keywords(ns.passenger, "--passenger")))

    if not predicates:
        raise ValueError("findpool needs at least one search criterion")
    if len(predicates) == 1:
        return predicates[0]
    return AnyOf(tuple(predicates))


def build_command(ns: argparse.Namespace) -> Command:
    """
    Turn parsed arguments into a typed command.

    Raises:
        ValueError: If an argument is invalid (ValidationError included)
    """
    word = ns.command
    if word == "add":
        return AddCommand(_build_passenger(ns))
    if word == "delete":
        return DeleteCommand(tuple(ns.indexes))
    if word == "edit":
        return EditCommand(ns.index, _build_edit_descriptor(ns))
    if word == "find":
        return FindCommand(_build_find_predicate(ns))
    if word == "list":
        return ListCommand()
    if word == "clear":
        return ClearCommand()
    if word == "pool":
        return PoolCommand(
            driver=Driver(Name(_words(ns.name)), Phone(ns.phone)),
            passenger_indexes=tuple(ns.commuter),
            trip_day=parse_trip_day(ns.day),
            trip_time=TripTime.parse(ns.time),
            tags=_tags(ns.tag),
        )
    if word == "unpool":
        return UnpoolCommand(ns.index)
    if word == "findpool":
        return FindPoolCommand(_build_findpool_predicate(ns))
    if word == "help":
        return HelpCommand()
    if word == "exit":
        return ExitCommand()
    raise ValueError(f"Unknown command: {word}")


def help_text() -> str:
    return "\n\n".join(command.MESSAGE_USAGE for command in ALL_COMMANDS)


def _print_listing(logic: LogicManager, word: str, out: TextIO) -> None:
    if word in PASSENGER_LISTINGS or word in FULL_LISTINGS:
        print("Passengers:", file=out)
        print(format_passengers(logic.filtered_passengers()), file=out)
    if word in POOL_LISTINGS or word in FULL_LISTINGS:
        print("Pools:", file=out)
        print(format_pools(logic.filtered_pools()), file=out)


def run_command(
    logic: LogicManager,
    ns: argparse.Namespace,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> Tuple[int, bool]:
    """
    Build and execute one command, printing its feedback.

    Returns:
        The exit code and whether the session should end
    """
    out = out or sys.stdout
    err = err or sys.stderr

    try:
        command = build_command(ns)
    except ValueError as e:
        print(f"Invalid input: {e}", file=err)
        return EXIT_USAGE, False

    try:
        result = logic.execute(command)
    except CommandError as e:
        print(e.message, file=err)
        _print_listing(logic, ns.command, out)
        return EXIT_COMMAND_FAILED, False
    except StorageError as e:
        log_exception('cli', e, {"command": ns.command})
        print(f"Could not save the address book: {e}", file=err)
        return EXIT_COMMAND_FAILED, False

    print(result.feedback, file=out)
    if result.show_help:
        print(help_text(), file=out)
    _print_listing(logic, ns.command, out)
    return EXIT_OK, result.should_exit


def _read_lines(out: TextIO) -> Iterable[str]:
    while True:
        try:
            yield input(SHELL_PROMPT)
        except EOFError:
            print(file=out)
            return


def run_shell(
    logic: LogicManager,
    parser: argparse.ArgumentParser,
    lines: Optional[Iterable[str]] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """
    Interactive session. Filtered views persist between commands, so indexes
    refer to whatever the previous command listed.
    """
    out = out or sys.stdout
    err = err or sys.stderr
    print(SHELL_WELCOME, file=out)
    if lines is None:
        lines = _read_lines(out)

    for line in lines:
        try:
            tokens = shlex.split(line)
        except ValueError as e:
            print(f"Invalid input: {e}", file=err)
            continue
        if not tokens:
            continue

        try:
            ns = parser.parse_args(tokens)
        except CliUsageError as e:
            print(str(e), file=err)
            continue
        except SystemExit:
            # --help and --version print and ask to exit
            continue

        if ns.command == "shell":
            print("Already in a shell session.", file=err)
            continue

        logger.debug(f"Shell command: {line}")
        _, should_exit = run_command(logic, ns, out, err)
        if should_exit:
            break

    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entrypoint.

    Args:
        argv: Command line arguments (for testing)

    Returns:
        Exit code: 0 on success, 1 when a command fails, 2 on usage errors
    """
    parser = build_parser()
    try:
        ns = parser.parse_args(argv)
    except CliUsageError as e:
        parser.print_usage(sys.stderr)
        print(str(e), file=sys.stderr)
        return EXIT_USAGE

    app = create_app()
    if ns.command == "shell":
        return run_shell(app.logic, parser)

    code, _ = run_command(app.logic, ns)
    return code


if __name__ == "__main__":
    sys.exit(main())
