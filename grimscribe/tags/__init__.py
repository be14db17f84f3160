from .engine import transform
from .rule import Absent, Present, RuleTableError, TagRule, capture
from .table import ATTACK_TYPES, ENTITY_KINDS, RULE_TABLE, RuleTable, build_rule_table

__all__ = [
    "ATTACK_TYPES",
    "Absent",
    "ENTITY_KINDS",
    "Present",
    "RULE_TABLE",
    "RuleTable",
    "RuleTableError",
    "TagRule",
    "build_rule_table",
    "capture",
    "transform",
]
