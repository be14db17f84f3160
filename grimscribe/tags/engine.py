from __future__ import annotations

from .table import RULE_TABLE, RuleTable


def transform(text: str, table: RuleTable = RULE_TABLE) -> str:
    """Rewrite every inline tag in ``text`` into its display form.

    Each rule of ``table`` runs once, in order, over the output of the
    previous rule.  Text that no rule matches, including malformed tags, is
    copied through unchanged.  Output produced by one rule is never fed back
    to an earlier one, so ``{@note ...}`` bodies keep any tag-like text they
    surface.
    """

    out = text
    for rule in table:
        out = rule.apply(out)
    return out


__all__ = ["transform"]
