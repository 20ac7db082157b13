"""
Parser for deck search criteria.

Criterion format:
    [<count>] <card name>

Examples:
    "4 Lightning Bolt"  -> Lightning Bolt, exactly/at least 4
    "Lightning Bolt"    -> Lightning Bolt, any count

A card name that itself starts with digits followed by a space is read as a
count prefix. This is a known limitation of the format.
"""

import re

from metascan.models.search import CardCriterion

# Groups: (count, remainder). Remainder must be non-empty.
CRITERION_PATTERN = re.compile(r"^(\d+)(\D.*)$", re.DOTALL)


def parse_criterion(text: str) -> CardCriterion:
    """
    Parse one criterion string.

    A leading run of digits followed by at least one non-digit character is
    the required count; the rest, after one run of whitespace, is the name.
    Anything else is a bare name with no required count.
    """
    text = text.strip()
    match = CRITERION_PATTERN.match(text)
    if match:
        count, name = match.groups()
        return CardCriterion(name=name.lstrip(), count=int(count))
    return CardCriterion(name=text)


def parse_criteria(texts: list[str]) -> list[CardCriterion]:
    return [parse_criterion(text) for text in texts]
