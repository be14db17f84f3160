from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Union


class RuleTableError(Exception):
    """Raised when a rule pattern cannot be compiled."""


@dataclass(frozen=True)
class Present:
    value: str


@dataclass(frozen=True)
class Absent:
    pass


Capture = Union[Present, Absent]
Render = Union[str, Callable[["re.Match[str]"], str]]


def capture(match: re.Match[str], slot: str) -> Capture:
    """Return the named group ``slot`` of ``match`` as a present/absent capture."""

    value = match.group(slot)
    if value is None:
        return Absent()
    return Present(value)


@dataclass(frozen=True)
class TagRule:
    """One tag family: a pattern plus the policy that renders each match.

    ``render`` is either a template whose ``{slot}`` placeholders are filled
    from the pattern's named groups, or a callable receiving the match.
    """

    name: str
    pattern: re.Pattern[str]
    render: Render

    def replace(self, match: re.Match[str]) -> str:
        if callable(self.render):
            return self.render(match)
        return self.render.format(**match.groupdict())

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replace, text)


def make_rule(name: str, pattern: str, render: Render) -> TagRule:
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        raise RuleTableError(f"Invalid pattern for rule '{name}': {exc}") from exc
    return TagRule(name=name, pattern=compiled, render=render)


__all__ = [
    "Absent",
    "Capture",
    "Present",
    "RuleTableError",
    "TagRule",
    "capture",
    "make_rule",
]
