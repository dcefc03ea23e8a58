"""
==================
Template Variables
==================

Configuration strings may contain placeholders such as ``{ConfigRoot}``
that are filled in when the value is read rather than when it is stored.
A template registered after the configuration has been loaded therefore
still applies to every later read.

Substitution is plain literal text replacement, applied once per
registered template in registration order. Its cost grows with the number
of templates times the number of string leaves in the value read.

"""
from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from strata.types import Value


@dataclass(frozen=True)
class Template:
    search: str
    replace: str

    @property
    def token(self) -> str:
        """The literal placeholder text, e.g. ``{ConfigRoot}``."""
        return f"{{{self.search}}}"


class TemplateEngine:
    """An ordered table of template substitutions."""

    def __init__(self) -> None:
        self._templates: list[Template] = []

    @property
    def templates(self) -> list[Template]:
        return list(self._templates)

    def register(self, search: str, replace: str) -> None:
        """Append a substitution of ``{search}`` by ``replace``.

        Templates are applied in the order they are registered, so the
        replacement text of one template may itself contain the
        placeholder of a template registered later.
        """
        logger.debug(f"Registering template '{{{search}}}'.")
        self._templates.append(Template(search, replace))

    def evaluate(self, text: str) -> str:
        """Apply every registered template to ``text``."""
        for template in self._templates:
            text = text.replace(template.token, template.replace)
        return text

    def evaluate_all(self, value: Value) -> Value:
        """Apply every registered template to each string inside ``value``.

        Lists and maps are rebuilt, so the result never shares containers
        with the stored configuration.
        """
        if isinstance(value, str):
            return self.evaluate(value)
        elif isinstance(value, list):
            return [self.evaluate_all(item) for item in value]
        elif isinstance(value, dict):
            return {key: self.evaluate_all(item) for key, item in value.items()}
        else:
            # bool, int, float and None
            return value

    def __len__(self) -> int:
        return len(self._templates)
