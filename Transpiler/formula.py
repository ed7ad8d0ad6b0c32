"""Percentage formula synthesis: comparisons -> 0~100 progress expression."""
import logging
from typing import List, Optional

from .config import TranspilerConfig
from .schemas import (
    AndNode,
    CombinatorKind,
    Comparison,
    ComparisonNode,
    ConditionNode,
    DecomposedExpression,
    NotNode,
    OrNode,
)

logger = logging.getLogger(__name__)


def format_number(value: float) -> str:
    """Fallback rendering for thresholds without source text: 50 not 50.0."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def call(name: str, args: List[str], config: TranspilerConfig) -> str:
    """Render a min/max call, n-ary or folded into two-argument calls."""
    fn = f"{config.function_prefix}{name}"
    if len(args) == 1:
        return args[0]
    if not config.binary_calls:
        return f"{fn}({', '.join(args)})"
    result = args[0]
    for arg in args[1:]:
        result = f"{fn}({result}, {arg})"
    return result


def comparison_formula(comp: Comparison, config: Optional[TranspilerConfig] = None) -> Optional[str]:
    """``min(#ref * 100 / T, 100)``, or None when T <= 0 (no safe scaling)."""
    config = config or TranspilerConfig()
    if comp.threshold <= 0:
        logger.debug("No percentage formula for %s %s %s: threshold must be positive",
                     comp.reference, comp.operator, format_number(comp.threshold))
        return None
    divisor = comp.threshold_text or format_number(comp.threshold)
    scaled = f"{comp.prefixed} * 100 / {divisor}"
    return f"{config.function_prefix}min({scaled}, 100)"


def synthesize(decomposed: DecomposedExpression, config: Optional[TranspilerConfig] = None) -> str:
    """Combine per-comparison formulas: AND -> min, OR -> max, NONE -> as is.

    Returns "" when decomposition failed or any threshold is not positive.
    """
    config = config or TranspilerConfig()
    if decomposed.failed:
        return ""

    parts: List[str] = []
    for comp in decomposed.comparisons:
        formula = comparison_formula(comp, config)
        if formula is None:
            return ""
        parts.append(formula)

    if decomposed.combinator == CombinatorKind.NONE:
        return parts[0]
    if decomposed.combinator == CombinatorKind.AND:
        return call("min", parts, config)
    return call("max", parts, config)


def synthesize_tree(node: Optional[ConditionNode], config: Optional[TranspilerConfig] = None) -> str:
    """Recursive synthesis over a parsed condition tree. "" on any failure."""
    config = config or TranspilerConfig()
    if node is None:
        return ""
    return _synthesize_node(node, config) or ""


def _synthesize_node(node: ConditionNode, config: TranspilerConfig) -> Optional[str]:
    if isinstance(node, ComparisonNode):
        return comparison_formula(node.comparison, config)

    if isinstance(node, NotNode):
        inner = _synthesize_node(node.child, config)
        return None if inner is None else f"(100 - {inner})"

    parts: List[str] = []
    for child in node.children:
        formula = _synthesize_node(child, config)
        if formula is None:
            return None
        parts.append(formula)
    if isinstance(node, AndNode):
        return call("min", parts, config)
    if isinstance(node, OrNode):
        return call("max", parts, config)
    return None
