"""The ordered rule table for 5eTools-style inline tags.

Rules run strictly top to bottom, each one over the output of the previous
one.  Several grammars overlap (``{@dice 2d6}`` vs ``{@dice 2d6|7}``,
``{@h +5}`` vs ``{@h}``, bold vs note), so the order below is part of the
behaviour and must not be sorted or regrouped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

from .rule import Present, TagRule, capture, make_rule

# Reference kinds rendered as italic links, e.g. {@spell fireball|phb}
ENTITY_KINDS: Tuple[str, ...] = (
    "spell",
    "item",
    "creature",
    "background",
    "race",
    "optfeature",
    "condition",
    "disease",
    "reward",
    "alert",
    "psionic",
    "object",
    "boon",
    "hazard",
    "variantrule",
    "vehicle",
    "table",
    "action",
    "sense",
    "skill",
)

ATTACK_TYPES = {
    "m": "Melee Attack",
    "mw": "Melee Weapon Attack",
    "ms": "Melee Spell Attack",
    "mw,rw": "Melee or Ranged Weapon Attack",
    "rs": "Ranged Spell Attack",
    "rw": "Ranged Weapon Attack",
    "ms,rs": "Melee or Ranged Spell Attack",
}

# Repeats are possessive (``++``, ``*+``, ``?+``) so a failing tag is given
# up after one scan instead of retrying every way to split its digits.

# 2d6, d20, 1d8 + 3
DICE_TERM = r"(?:\d++)?d\d++(?: ?[+\-] ?\d++)?+"
# one or more terms joined by optional signs/spaces: 1d6 + 2d8 - 1
DICE_EXPR = r"(?:(?:" + DICE_TERM + r")(?: ?+[+\-]?+ ?+))++"
# alternative scaling base after a semicolon: 1d8;2d8
DICE_ALT = r"(?:(?:;" + DICE_TERM + r")(?: ?+[+\-]?+ ?+))++"
# 3-9 or 1,3,5
LEVELS = r"(?:\d++-\d++|(?:,?+\d++)*+)"

EMPHASIS_TEXT = r"[\w\s'().?!\-]++"
# greedy but not possessive: the body may contain "}" and ends at the last one
NOTE_TEXT = r"[\w\s.!?,|='{@}]+"
LINK_FIELD = r"[\w\s'()\-+,]"

_KINDS = "|".join(ENTITY_KINDS)
_ATTACK_CODES = "|".join(re.escape(code) for code in ATTACK_TYPES)


def _render_recharge(match: re.Match[str]) -> str:
    roll = capture(match, "roll")
    if isinstance(roll, Present):
        return f"Recharge {roll.value}-6"
    return "Recharge 6"


def _render_health(match: re.Match[str]) -> str:
    digits = capture(match, "digits")
    if isinstance(digits, Present):
        return digits.value
    return ""


def _render_attack(match: re.Match[str]) -> str:
    return ATTACK_TYPES[match.group("code")]


@dataclass(frozen=True)
class RuleTable:
    """Immutable, ordered sequence of :class:`TagRule`."""

    rules: Tuple[TagRule, ...]

    def __post_init__(self) -> None:
        # accept any iterable but always store a tuple
        object.__setattr__(self, "rules", tuple(self.rules))

    def __iter__(self) -> Iterator[TagRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __getitem__(self, name: str) -> TagRule:
        for rule in self.rules:
            if rule.name == name:
                return rule
        raise KeyError(name)

    def names(self) -> list[str]:
        return [rule.name for rule in self.rules]


def _rule_specs() -> Iterable[tuple]:
    yield "dice", r"\{@(?:dice|damage) (?P<expr>" + DICE_EXPR + r")\}", "**{expr}**"
    yield "computed_dice", r"\{@dice " + DICE_TERM + r"\|(?P<average>\d++)\}", "{average}"
    yield "multiplicative_dice", r"\{@dice (?P<expr>\d*+d\d++ × \d*+d?+\d*+)\}", "{expr}"
    yield (
        "scaled_dice",
        r"\{@(?:scaledamage|scaledice) "
        + DICE_EXPR
        + r"(?:"
        + DICE_ALT
        + r")?+\|"
        + LEVELS
        + r"\|(?P<per_level>"
        + DICE_EXPR
        + r")(?:\|[\w\s]++)?+\}",
        "{per_level}",
    )
    yield "hit", r"\{@h(?:it)? (?P<bonus>[+\-]?+\d++)\}", "_{bonus}_"
    yield "chance", r"\{@chance (?P<percent>\d+)\}", "{percent} percent"
    yield "recharge", r"\{@recharge(?: (?P<roll>\d))?\}", _render_recharge
    yield "health", r"\{@h\}(?P<digits>\d+)?", _render_health
    yield "dc", r"\{@dc (?P<dc>\d+)\}", "DC {dc}"
    yield "bold", r"\{@b(?:old)? (?P<text>" + EMPHASIS_TEXT + r")\}", "**{text}**"
    yield "italic", r"\{@i(?:talic)? (?P<text>" + EMPHASIS_TEXT + r")\}", "_{text}_"
    yield "strike", r"\{@s(?:trike)? (?P<text>" + EMPHASIS_TEXT + r")\}", "~{text}~"
    yield "note", r"\{@note (?P<text>" + NOTE_TEXT + r")\}", "{text}"
    yield (
        "link",
        r"\{@(?:" + _KINDS + r") (?P<name>" + LINK_FIELD + r"++)(?:\|" + LINK_FIELD + r"*+)?+\}",
        "_{name}_",
    )
    yield (
        "labelled_link",
        r"\{@(?:" + _KINDS + r") (?:" + LINK_FIELD + r"*+\|){2}(?P<display>" + LINK_FIELD + r"++)\}",
        "_{display}_",
    )
    yield (
        "filter",
        r"\{@filter (?P<label>[\w\s'()\-/+]++)(?:\|[\w\s'!=;()&\[\]/+]++)*+\}",
        "{label}",
    )
    yield (
        "book",
        r"\{@(?:book|adventure) (?P<name>[\w\s'()\-+]++)(?:\|[\w\s'()\-+\d]++)*+\}",
        "{name}",
    )
    yield "attack", r"\{@atk (?P<code>" + _ATTACK_CODES + r")\}", _render_attack


def build_rule_table() -> RuleTable:
    """Compile every rule in application order.

    Raises :class:`~grimscribe.tags.rule.RuleTableError` if a pattern is
    invalid.
    """

    return RuleTable(tuple(make_rule(name, pattern, render) for name, pattern, render in _rule_specs()))


RULE_TABLE = build_rule_table()


__all__ = ["ATTACK_TYPES", "ENTITY_KINDS", "RULE_TABLE", "RuleTable", "build_rule_table"]
