"""CSS node model: declarations, rules and at-rules."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class Declaration:
    """A single ``property: value`` pair.

    A malformed chunk without a colon is kept with an empty *value* so it
    can be written back verbatim.
    """

    property: str
    value: str = ""
    important: bool = False

    @classmethod
    def parse(cls, text: str) -> Declaration:
        colon = text.find(":")
        if colon < 0:
            return cls(property=text.strip())
        name = text[:colon].strip()
        value = text[colon + 1 :].strip()
        match = _IMPORTANT_RE.search(value)
        if match:
            return cls(property=name, value=value[: match.start()].strip(), important=True)
        return cls(property=name, value=value)

    @property
    def is_custom(self) -> bool:
        return self.property.startswith("--")

    @property
    def is_malformed(self) -> bool:
        return not self.property or not self.value

    def serialize(self) -> str:
        if self.is_malformed:
            return self.property or self.value
        suffix = " !important" if self.important else ""
        return f"{self.property}: {self.value}{suffix}"


@dataclass(frozen=True)
class Rule:
    """A qualified rule: ``selector { declarations }``."""

    selector: str
    declarations: list[Declaration] = field(default_factory=list)


@dataclass(frozen=True)
class AtRule:
    """An at-rule.

    Block at-rules carry either parsed *children* (``@media``, ``@supports``)
    or a *raw_body* of declarations (``@font-face``, ``@page``).  Statement
    at-rules terminated by ``;`` are *standalone* and pass through as-is.
    """

    prelude: str
    children: list[Node] = field(default_factory=list)
    raw_body: str = ""
    standalone: bool = False


Node = Rule | AtRule


@dataclass(frozen=True)
class Stylesheet:
    """Parsed top-level nodes plus any unparseable trailing text."""

    nodes: list[Node]
    trailing: str = ""
