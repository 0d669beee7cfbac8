"""Tests for argument parsing, command building and the shell."""

import io
from unittest.mock import Mock, patch

import pytest

from carpool_tracker import cli
from carpool_tracker.cli import (
    EXIT_COMMAND_FAILED,
    EXIT_OK,
    EXIT_USAGE,
    CliUsageError,
    build_command,
    build_parser,
    run_command,
    run_shell,
)
from carpool_tracker.commands import (
    AddCommand,
    DeleteCommand,
    EditCommand,
    FindCommand,
    FindPoolCommand,
    Index,
    ListCommand,
    PoolCommand,
    UnpoolCommand,
)
from carpool_tracker.core.enums import TripDay
from carpool_tracker.domain.entities import UNASSIGNED, Assigned
from carpool_tracker.domain.predicates import (
    AllOf,
    AnyOf,
    DriverNameContainsKeywords,
    NameContainsKeywords,
    TripDayMatches,
)
from carpool_tracker.domain.values import Name, Tag, TripTime, ValidationError

from tests.fixtures.typical_data import CARL, DRIVER_BOB, HOON


@pytest.fixture
def parser():
    return build_parser()


def command_for(parser, line):
    return build_command(parser.parse_args(line.split()))


def run(logic, parser, line):
    out, err = io.StringIO(), io.StringIO()
    code, should_exit = run_command(logic, parser.parse_args(line.split()), out, err)
    return code, should_exit, out.getvalue(), err.getvalue()


@pytest.mark.unit
class TestParsing:
    """Test turning argument lists into commands."""

    def test_add(self, parser):
        command = command_for(
            parser,
            "add --name Hoon Meier --phone 8482424 --address little india --day monday --time 0830",
        )
        assert command == AddCommand(HOON)

    def test_add_with_tags_and_price(self, parser):
        command = command_for(
            parser,
            "add --name Hoon Meier --phone 8482424 --address little india --day monday "
            "--time 0830 --tag a --tag b --price 2.5",
        )
        assert command.passenger.tags == frozenset({Tag("a"), Tag("b")})
        assert str(command.passenger.price) == "2.50"

    def test_add_trims_quoted_values(self, parser):
        command = build_command(parser.parse_args([
            "add", "--name", "Hoon Meier ", "--phone", "8482424",
            "--address", " little india", "--day", "monday", "--time", "0830",
        ]))
        assert command == AddCommand(HOON)

    def test_add_invalid_value(self, parser):
        with pytest.raises(ValidationError):
            command_for(
                parser,
                "add --name Hoon --phone 12 --address x --day monday --time 0830",
            )

    def test_delete(self, parser):
        assert command_for(parser, "delete 1 3 1") == DeleteCommand((Index(1), Index(3)))

    @pytest.mark.parametrize("line", ["delete", "delete 0", "delete -1", "delete x", "unpool 0"])
    def test_bad_indexes_are_usage_errors(self, parser, line):
        with pytest.raises(CliUsageError):
            parser.parse_args(line.split())

    def test_missing_required_option(self, parser):
        with pytest.raises(CliUsageError):
            parser.parse_args("add --name Hoon".split())

    def test_no_command(self, parser):
        with pytest.raises(CliUsageError):
            parser.parse_args([])

    def test_edit(self, parser):
        command = command_for(parser, "edit 2 --time 0915 --driver-name Bob Choo --driver-phone 22222222")
        assert isinstance(command, EditCommand)
        assert command.index == Index(2)
        assert command.descriptor.trip_time == TripTime(9, 15)
        assert command.descriptor.driver == Assigned(DRIVER_BOB)
        assert command.descriptor.name is None

    def test_edit_clear_tags_and_unassign(self, parser):
        command = command_for(parser, "edit 1 --clear-tags --unassign-driver")
        assert command.descriptor.tags == frozenset()
        assert command.descriptor.driver == UNASSIGNED

    @pytest.mark.parametrize("line", [
        "edit 1 --tag a --clear-tags",
        "edit 1 --driver-name Bob",
        "edit 1 --unassign-driver --driver-name Bob --driver-phone 123",
    ])
    def test_edit_conflicting_options(self, parser, line):
        with pytest.raises(ValueError):
            command_for(parser, line)

    def test_find_combines_criteria(self, parser):
        command = command_for(parser, "find --name alex carl --day monday")
        assert command == FindCommand(
            AllOf((NameContainsKeywords(("alex", "carl")), TripDayMatches(TripDay.MONDAY)))
        )

    def test_find_single_criterion(self, parser):
        assert command_for(parser, "find --name carl") == FindCommand(NameContainsKeywords(("carl",)))

    def test_find_needs_criteria(self, parser):
        with pytest.raises(ValueError):
            command_for(parser, "find")

    def test_find_rejects_multi_word_keyword(self, parser):
        with pytest.raises(ValueError):
            build_command(parser.parse_args(["find", "--name", "carl kurz"]))

    def test_pool(self, parser):
        command = command_for(
            parser,
            "pool --name Bob Choo --phone 22222222 --day monday --time 0830 --commuter 3 --commuter 1 --tag x",
        )
        assert command == PoolCommand(
            DRIVER_BOB, (Index(3), Index(1)), TripDay.MONDAY, TripTime(8, 30), frozenset({Tag("x")})
        )

    def test_pool_without_commuters_parses(self, parser):
        command = command_for(parser, "pool --name Bob --phone 123 --day monday --time 0830")
        assert command.passenger_indexes == ()
        assert command.driver.name == Name("Bob")

    def test_unpool_and_findpool(self, parser):
        assert command_for(parser, "unpool 2") == UnpoolCommand(Index(2))
        assert command_for(parser, "findpool --driver amy") == FindPoolCommand(
            DriverNameContainsKeywords(("amy",))
        )
        both = command_for(parser, "findpool --driver amy --passenger carl")
        assert isinstance(both.predicate, AnyOf)

    def test_list(self, parser):
        assert command_for(parser, "list") == ListCommand()


@pytest.mark.unit
class TestRunCommand:
    """Test executing parsed commands and exit codes."""

    def test_success_prints_feedback_and_listing(self, logic, parser):
        code, should_exit, out, err = run(logic, parser, "delete 3")
        assert code == EXIT_OK
        assert not should_exit
        assert "Deleted Passenger(s): Carl Kurz" in out
        assert "1. Alice Pauline" in out
        assert err == ""
        assert not logic.address_book.has_passenger(CARL)

    def test_command_failure(self, logic, parser):
        code, _, out, err = run(logic, parser, "delete 1")
        assert code == EXIT_COMMAND_FAILED
        assert "Failed to delete" in err

    def test_invalid_value_is_usage_error(self, logic, parser):
        code, _, _, err = run(logic, parser, "pool --name Bob --phone 12 --day monday --time 0830 --commuter 3")
        assert code == EXIT_USAGE
        assert "Invalid input" in err

    def test_help_prints_usage(self, logic, parser):
        code, _, out, _ = run(logic, parser, "help")
        assert code == EXIT_OK
        assert PoolCommand.MESSAGE_USAGE in out
        assert DeleteCommand.MESSAGE_USAGE in out

    def test_exit(self, logic, parser):
        code, should_exit, _, _ = run(logic, parser, "exit")
        assert code == EXIT_OK
        assert should_exit

    def test_list_shows_pools(self, logic, parser):
        _, _, out, _ = run(logic, parser, "list")
        assert "Pools:" in out
        assert "1. Driver: Amy Bee" in out


@pytest.mark.unit
class TestShell:
    """Test the interactive session."""

    def test_filters_persist_between_lines(self, logic, parser):
        out, err = io.StringIO(), io.StringIO()
        lines = ["find --name meier", "delete 2", "exit", "delete 1"]

        assert run_shell(logic, parser, lines, out, err) == EXIT_OK

        # "delete 2" hit Daniel, the second Meier; the line after exit never ran
        assert "Deleted Passenger(s): Daniel Meier" in out.getvalue()
        assert len(logic.address_book.passengers) == 6

    def test_bad_lines_do_not_end_the_session(self, logic, parser):
        out, err = io.StringIO(), io.StringIO()
        lines = ["", "delete 0", "bogus", 'find --name "unclosed', "shell", "--help", "list"]

        run_shell(logic, parser, lines, out, err)

        assert "Listed all passengers and pools" in out.getvalue()
        assert "Already in a shell session." in err.getvalue()


@pytest.mark.unit
class TestMain:
    """Test the entrypoint."""

    def test_usage_error_exit_code(self, capsys):
        assert cli.main(["delete"]) == EXIT_USAGE
        assert "carpool-tracker" in capsys.readouterr().err

    def test_runs_one_command(self, logic, capsys):
        app = Mock(logic=logic)
        with patch.object(cli, "create_app", return_value=app):
            assert cli.main(["delete", "3"]) == EXIT_OK
        assert "Deleted Passenger(s): Carl Kurz" in capsys.readouterr().out

    def test_failed_command_exit_code(self, logic):
        app = Mock(logic=logic)
        with patch.object(cli, "create_app", return_value=app):
            assert cli.main(["unpool", "5"]) == EXIT_COMMAND_FAILED

    def test_shell(self, logic):
        app = Mock(logic=logic)
        with patch.object(cli, "create_app", return_value=app), \
                patch.object(cli, "run_shell", return_value=EXIT_OK) as run_shell_mock:
            assert cli.main(["shell"]) == EXIT_OK
        run_shell_mock.assert_called_once()
