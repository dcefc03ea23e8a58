import pytest

from strata.paths import normalize_key, split_path


@pytest.mark.parametrize(
    "key, expected",
    [
        ("config__dog__cat", "config:dog:cat"),
        ("config__DOG__cat", "config:dog:cat"),
        ("config:dog:cat", "config:dog:cat"),
        (
            "CONFIG__FRIDGE__QUERY_SERVICE__FABRIC_ENDPOINT",
            "config:fridge:query_service:fabric_endpoint",
        ),
        ("single", "single"),
    ],
)
def test_normalize_key(key: str, expected: str) -> None:
    assert normalize_key(key) == expected


@pytest.mark.parametrize(
    "key", ["a:b", "A__B", "a__b:C", "Mixed_Case__Key", "x____y", "trailing__"]
)
def test_normalize_key_idempotent(key: str) -> None:
    assert normalize_key(normalize_key(key)) == normalize_key(key)


def test_split_path() -> None:
    assert split_path("a:b:c") == ("a", "b", "c")
    assert split_path("A__B:c") == ("a", "b", "c")
    assert split_path("single") == ("single",)


def test_split_path_sequence() -> None:
    assert split_path(["Environment", "test", "parent__child"]) == (
        "environment",
        "test",
        "parent",
        "child",
    )
    assert split_path(("a", "b")) == split_path("a:b")

