import pytest

from strata.sources.arguments import find_argument, parse_command_line_args


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["--key=value"], [("key", "value")]),
        (["--key", "value"], [("key", "value")]),
        (["--flag"], [("flag", "1")]),
        (["--flag", "--other=x"], [("flag", "1"), ("other", "x")]),
        (["-k"], [("k", "1")]),
        (["-k", "value"], [("k", "value")]),
        (["-k=value"], [("k", "value")]),
        (["-klm"], [("k", "1"), ("l", "1"), ("m", "1")]),
        (["-klm", "value"], [("k", "1"), ("l", "1"), ("m", "value")]),
        (["-klm=value"], [("k", "1"), ("l", "1"), ("m", "value")]),
        (["--Mixed__Case=Value"], [("mixed__case", "Value")]),
        (["--key="], [("key", "1")]),
    ],
)
def test_parse_command_line_args(argv: list[str], expected: list[tuple[str, str]]) -> None:
    assert parse_command_line_args(argv) == expected


def test_positional_args_before_flags_are_skipped() -> None:
    argv = ["run", "thing", "--key", "value", "--other"]
    assert parse_command_line_args(argv) == [("key", "value"), ("other", "1")]


def test_value_only_binds_once() -> None:
    argv = ["--key", "value", "stray", "-a=C", "extra"]
    assert parse_command_line_args(argv) == [("key", "value"), ("a", "C")]


def test_bare_separators_are_ignored() -> None:
    assert parse_command_line_args(["--", "value", "-"]) == []


def test_mixed_arguments() -> None:
    argv = ["-a=x", "--b=y", "--d", "w", "--config", "something", "-e=u"]
    pairs = parse_command_line_args(argv)
    assert pairs == [("a", "x"), ("b", "y"), ("d", "w"), ("config", "something"), ("e", "u")]


@pytest.mark.parametrize(
    "argv",
    [
        ["-a=x", "--b=y", "--d", "w", "--config=something", "-e=u"],
        ["-a=x", "--b=y", "--d", "w", "--config", "something", "-e=u"],
        ["-a=x", "--b=y", "-c", "something", "--d", "w", "-e=u"],
        ["-a=x", "--b=y", "-c=something", "--d", "w", "-e=u"],
    ],
)
def test_find_argument(argv: list[str]) -> None:
    assert find_argument(parse_command_line_args(argv), "config", "c") == "something"


def test_find_argument_missing() -> None:
    assert find_argument(parse_command_line_args(["--a=1"]), "config", "c") is None
