import pytest

from strata.templates import Template, TemplateEngine


@pytest.fixture
def engine() -> TemplateEngine:
    engine = TemplateEngine()
    engine.register("X", "Y")
    return engine


def test_template_token() -> None:
    assert Template("ConfigRoot", "..").token == "{ConfigRoot}"


def test_evaluate(engine: TemplateEngine) -> None:
    assert engine.evaluate("{X}/z") == "Y/z"
    assert engine.evaluate("{X}{X}-X") == "YY-X"
    assert engine.evaluate("no templates") == "no templates"


def test_evaluate_in_registration_order(engine: TemplateEngine) -> None:
    engine.register("Root", "{X}/root")
    engine.register("Y", "unused")
    # {Root} expands after {X} was already applied, so its {X} stays literal.
    assert engine.evaluate("{Root}") == "{X}/root"

    ordered = TemplateEngine()
    ordered.register("Root", "{Home}/root")
    ordered.register("Home", "/home")
    assert ordered.evaluate("{Root}") == "/home/root"


def test_evaluate_all(engine: TemplateEngine) -> None:
    value = {
        "people": [
            {"id": "a", "file": "{X}/file.ext", "age": 3, "active": True},
            {"id": "b", "file": "{X}/file2.ext", "score": 1.5, "extra": None},
        ],
        "name": "{X}",
    }
    assert engine.evaluate_all(value) == {
        "people": [
            {"id": "a", "file": "Y/file.ext", "age": 3, "active": True},
            {"id": "b", "file": "Y/file2.ext", "score": 1.5, "extra": None},
        ],
        "name": "Y",
    }


def test_evaluate_all_builds_new_structures(engine: TemplateEngine) -> None:
    value = {"list": ["{X}"], "map": {"key": "{X}"}}
    result = engine.evaluate_all(value)
    assert result["list"] is not value["list"]
    assert result["map"] is not value["map"]
    assert value == {"list": ["{X}"], "map": {"key": "{X}"}}


def test_templates_are_copied(engine: TemplateEngine) -> None:
    engine.templates.append(Template("A", "B"))
    assert len(engine) == 1
    assert engine.templates == [Template("X", "Y")]
