"""Split a normalized rule into threshold comparisons joined by one combinator."""
import logging
import re
from typing import List, Optional

from .schemas import CombinatorKind, Comparison, DecomposedExpression

logger = logging.getLogger(__name__)

# #name, #name['field'], #name.field
REFERENCE_PATTERN = r"#\w+(?:\['[^']+'\]|\.\w+)*"
OPERATOR_PATTERN = r">=|<=|==|!=|>|<"
NUMBER_PATTERN = r"\d+(?:\.\d+)?"

COMPARISON_RE = re.compile(
    rf"^({REFERENCE_PATTERN})\s*({OPERATOR_PATTERN})\s*({NUMBER_PATTERN})$"
)

_SPLITTERS = [
    ("&&", re.compile(r"\s*&&\s*"), CombinatorKind.AND),
    ("||", re.compile(r"\s*\|\|\s*"), CombinatorKind.OR),
]


def match_comparison(text: str) -> Optional[Comparison]:
    """Match ``#ref <op> <number>`` against the whole (trimmed) text."""
    match = COMPARISON_RE.match(text.strip())
    if not match:
        return None
    reference, operator, threshold = match.groups()
    return Comparison(
        reference=reference[1:],
        operator=operator,
        threshold=float(threshold),
        threshold_text=threshold,
    )


def decompose(normalized: str) -> DecomposedExpression:
    """Decompose a normalized rule.

    Returns a single comparison (NONE), or an AND / OR group when every part of
    the split matches. Anything else yields an empty comparison list.
    """
    if not normalized or not normalized.strip():
        return DecomposedExpression()

    single = match_comparison(normalized)
    if single is not None:
        return DecomposedExpression(combinator=CombinatorKind.NONE, comparisons=[single])

    for token, splitter, kind in _SPLITTERS:
        if token not in normalized:
            continue
        comparisons: List[Comparison] = []
        for part in splitter.split(normalized.strip()):
            comp = match_comparison(part)
            if comp is None:
                logger.debug("Part %r of %s group is not a comparison", part, kind.name)
                return DecomposedExpression(combinator=kind)
            comparisons.append(comp)
        return DecomposedExpression(combinator=kind, comparisons=comparisons)

    logger.debug("Unsupported condition shape: %r", normalized)
    return DecomposedExpression()
