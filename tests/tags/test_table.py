import dataclasses
import re

import pytest

from grimscribe.tags import (
    Absent,
    Present,
    RULE_TABLE,
    RuleTableError,
    build_rule_table,
    capture,
)
from grimscribe.tags.rule import make_rule


EXPECTED_ORDER = [
    "dice",
    "computed_dice",
    "multiplicative_dice",
    "scaled_dice",
    "hit",
    "chance",
    "recharge",
    "health",
    "dc",
    "bold",
    "italic",
    "strike",
    "note",
    "link",
    "labelled_link",
    "filter",
    "book",
    "attack",
]


def test_table_order_is_fixed():
    assert RULE_TABLE.names() == EXPECTED_ORDER
    assert build_rule_table().names() == EXPECTED_ORDER


def test_table_is_immutable():
    assert isinstance(RULE_TABLE.rules, tuple)
    with pytest.raises(dataclasses.FrozenInstanceError):
        RULE_TABLE.rules = ()
    with pytest.raises(dataclasses.FrozenInstanceError):
        RULE_TABLE["dc"].render = "x"


def test_lookup_by_name():
    assert RULE_TABLE["note"].name == "note"
    assert len(RULE_TABLE) == len(EXPECTED_ORDER)
    with pytest.raises(KeyError):
        RULE_TABLE["deity"]


def test_invalid_pattern_fails_at_build_time():
    with pytest.raises(RuleTableError) as exc:
        make_rule("broken", r"\{@broken (", "x")
    assert "broken" in str(exc.value)


def test_template_rule_fills_named_slots():
    rule = make_rule("dc", r"\{@dc (?P<dc>\d+)\}", "DC {dc}")
    assert rule.apply("save {@dc 13} or fall") == "save DC 13 or fall"


def test_callable_rule_receives_match():
    rule = make_rule("shout", r"\{@shout (?P<text>\w+)\}", lambda m: m.group("text").upper())
    assert rule.apply("{@shout hey}") == "HEY"


def test_capture_present_and_absent():
    pattern = re.compile(r"\{@recharge(?: (?P<roll>\d))?\}")
    assert capture(pattern.match("{@recharge 4}"), "roll") == Present("4")
    assert capture(pattern.match("{@recharge}"), "roll") == Absent()


def test_empty_digits_are_absent_not_empty_string():
    pattern = RULE_TABLE["health"].pattern
    assert isinstance(capture(pattern.match("{@h}"), "digits"), Absent)
