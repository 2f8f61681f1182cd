# tests/test_engine.py
"""
Tests for the parse engine.

Covers:
    - flag and valued option semantics
    - grouped flags, attached values, '--' and '-' handling
    - unknown options and missing option arguments
    - positional-count validation
    - usage lines and reporting via UsageError.show()
"""

import pytest

from parseopts.compiler import compile_optstring
from parseopts.engine import ParseResult, parse
from parseopts.exceptions import (
    ArgumentCountError,
    InsufficientArguments,
    MissingOptionArgument,
    TooManyArguments,
    UnknownOption,
    UsageError,
)


def run(optstring, argv, min_args=0, max_args=None, usage=None):
    return parse(compile_optstring(optstring, min_args, max_args), argv, usage=usage)


# ---------------------------------------------------------------------------
# Successful parses
# ---------------------------------------------------------------------------


class TestOptionValues:

    def test_flag_present(self):
        result = run("a", ["-a"])
        assert result.options.a == 1

    def test_flag_absent(self):
        result = run("a", [])
        assert result.options.a == 0

    def test_value_option(self):
        result = run("f:", ["-f", "x"])
        assert result.options.f == "x"

    def test_value_option_absent(self):
        result = run("f:", [])
        assert result.options.f == ""

    def test_attached_value(self):
        result = run("f:", ["-fx"])
        assert result.options.f == "x"

    def test_grouped_flags(self):
        result = run("abc", ["-ac"])
        assert result.options == {"a": 1, "b": 0, "c": 1}

    def test_grouped_flags_then_value(self):
        result = run("af:", ["-af", "file", "rest"])
        assert result.options == {"a": 1, "f": "file"}
        assert result.args == ["rest"]

    def test_value_taken_verbatim(self):
        """The option argument is the next token, even if it looks like an option."""
        result = run("af:", ["-f", "-a"])
        assert result.options == {"a": 0, "f": "-a"}
        result = run("f:", ["-f", "--", "x"])
        assert result.options.f == "--"
        assert result.args == ["x"]

    def test_empty_value(self):
        result = run("f:", ["-f", ""])
        assert result.options.f == ""
        assert result.given == ("f",)

    def test_repeated_option_last_wins(self):
        result = run("f:", ["-f", "one", "-f", "two"])
        assert result.options.f == "two"
        assert result.given == ("f",)

    def test_digit_option(self):
        result = run("0a", ["-0"])
        assert result.options["0"] == 1
        assert result.options.o0 == 1
        assert result.options.a == 0

    def test_given_order(self):
        result = run("abc", ["-c", "-a"])
        assert result.given == ("c", "a")

    def test_result_type(self):
        assert isinstance(run("a", []), ParseResult)


class TestScanTermination:

    def test_no_options_leaves_args_untouched(self):
        argv = ["one", "two", "three"]
        result = run("ab:", argv)
        assert result.args == argv
        assert result.consumed == 0
        assert result.options == {"a": 0, "b": ""}

    def test_double_dash_stops_parsing(self):
        result = run("a", ["--", "-a"])
        assert result.options.a == 0
        assert result.args == ["-a"]
        assert result.consumed == 1

    def test_double_dash_after_options(self):
        result = run("ab", ["-a", "--", "-b"])
        assert result.options == {"a": 1, "b": 0}
        assert result.args == ["-b"]

    def test_only_first_double_dash_consumed(self):
        result = run("a", ["--", "--"])
        assert result.args == ["--"]

    def test_first_positional_stops_parsing(self):
        result = run("ab", ["-a", "file", "-b"])
        assert result.options == {"a": 1, "b": 0}
        assert result.args == ["file", "-b"]
        assert result.consumed == 1

    def test_single_dash_is_positional(self):
        result = run("a", ["-", "-a"])
        assert result.options.a == 0
        assert result.args == ["-", "-a"]

    def test_argv_not_mutated(self):
        argv = ["-a", "x"]
        run("a", argv)
        assert argv == ["-a", "x"]

    def test_accepts_tuple(self):
        result = run("a", ("-a", "x"))
        assert result.args == ["x"]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestScanErrors:

    def test_unknown_option(self):
        with pytest.raises(UnknownOption) as exc_info:
            run("ab:", ["-z"])
        assert exc_info.value.message == "Unknown option '-z'"
        assert exc_info.value.option == "z"
        assert exc_info.value.exit_code == 2

    def test_unknown_option_in_group(self):
        with pytest.raises(UnknownOption, match="'-x'"):
            run("ab", ["-axb"])

    def test_colon_is_not_an_option(self):
        with pytest.raises(UnknownOption, match="'-:'"):
            run("f:", ["-:"])

    def test_missing_argument(self):
        with pytest.raises(MissingOptionArgument) as exc_info:
            run("af:", ["-a", "-f"])
        assert exc_info.value.message == "Option '-f' requires an argument"

    def test_scan_error_skips_count_check(self):
        with pytest.raises(UnknownOption):
            run("a", ["-z"], min_args=3)


class TestPositionalCount:

    def test_insufficient(self):
        with pytest.raises(InsufficientArguments) as exc_info:
            run("a", ["-a", "one"], min_args=2, max_args=2)
        assert exc_info.value.message == "Insufficient arguments; minimum 2"
        assert exc_info.value.count == 1

    def test_too_many(self):
        with pytest.raises(TooManyArguments) as exc_info:
            run("a", ["one", "two", "three"], max_args=2)
        assert exc_info.value.message == "Too many arguments; maximum 2"
        assert isinstance(exc_info.value, ArgumentCountError)

    def test_within_bounds(self):
        result = run("a", ["-a", "one", "two"], min_args=1, max_args=2)
        assert result.args == ["one", "two"]

    def test_zero_maximum(self):
        with pytest.raises(TooManyArguments):
            run("a", ["x"], max_args=0)
        assert run("a", ["-a"], max_args=0).args == []

    def test_unbounded(self):
        result = run("", [str(i) for i in range(50)], min_args=1)
        assert len(result.args) == 50

    def test_args_after_double_dash_count(self):
        with pytest.raises(InsufficientArguments):
            run("a", ["-a", "--"], min_args=1)


class TestUsageReporting:

    def test_usage_line(self):
        with pytest.raises(UsageError) as exc_info:
            run("a", ["-z"], usage="foo [-a]")
        assert exc_info.value.format_lines() == ["Unknown option '-z'", "Usage: foo [-a]"]

    def test_no_usage_line(self):
        with pytest.raises(UsageError) as exc_info:
            run("a", [], min_args=1)
        assert exc_info.value.format_lines() == ["Insufficient arguments; minimum 1"]

    def test_show_writes_stderr(self, capsys):
        with pytest.raises(UsageError) as exc_info:
            run("f:", ["-f"], usage="foo -f FILE")
        exc_info.value.show()
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "Option '-f' requires an argument\nUsage: foo -f FILE\n"


class TestDeterminism:

    def test_repeated_parses_share_nothing(self):
        plan = compile_optstring("ab:")
        first = parse(plan, ["-a", "-b", "x"])
        second = parse(plan, [])
        assert first.options == {"a": 1, "b": "x"}
        assert second.options == {"a": 0, "b": ""}

    def test_same_input_same_result(self):
        argv = ["-a", "-b", "x", "pos"]
        one = run("ab:", argv)
        two = run("ab:", argv)
        assert one == two
