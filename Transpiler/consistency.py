"""Z3 satisfiability check over decomposed threshold comparisons."""
from typing import Dict, List, Optional

from z3 import And, Not, Or, Real, Solver, sat

from .parser import flatten
from .schemas import (
    AndNode,
    CombinatorKind,
    Comparison,
    ComparisonNode,
    ConditionNode,
    ConsistencyResult,
    DecomposedExpression,
    NotNode,
)


def encode_comparison(z3v, comp: Comparison):
    """Encode a single comparison against its threshold as a Z3 constraint."""
    op = comp.operator
    val = comp.threshold

    if op == "==":
        return z3v == val
    if op == "!=":
        return z3v != val
    if op == "<=":
        return z3v <= val
    if op == ">=":
        return z3v >= val
    if op == ">":
        return z3v > val
    if op == "<":
        return z3v < val
    raise ValueError(f"Unsupported operator: {op}")


def build_z3_vars(comparisons: List[Comparison]) -> Dict[str, object]:
    """One Real per distinct reference."""
    return {c.reference: Real(c.reference) for c in comparisons}


def check_consistency(decomposed: DecomposedExpression) -> ConsistencyResult:
    """Can the condition ever be met? Returns a witness assignment when it can.

    AND groups need every comparison to hold at once; OR and single
    comparisons need at least one.
    """
    if decomposed.failed:
        return ConsistencyResult(satisfiable=True, witness=None)

    z3vars = build_z3_vars(decomposed.comparisons)
    constraints = [encode_comparison(z3vars[c.reference], c) for c in decomposed.comparisons]

    solver = Solver()
    if decomposed.combinator == CombinatorKind.AND or len(constraints) == 1:
        solver.add(*constraints)
    else:
        solver.add(Or(*constraints))

    if solver.check() != sat:
        return ConsistencyResult(satisfiable=False, witness=None)

    return ConsistencyResult(satisfiable=True, witness=_witness(solver.model(), z3vars))


def _witness(model, z3vars: Dict[str, object]) -> Dict[str, float]:
    witness: Dict[str, float] = {}
    for ref, z3v in z3vars.items():
        val = model.eval(z3v, model_completion=True)
        witness[ref] = float(val.numerator_as_long()) / float(val.denominator_as_long())
    return witness


def encode_node(node: ConditionNode, z3vars: Dict[str, object]):
    """Encode a condition tree as a Z3 boolean expression."""
    if isinstance(node, ComparisonNode):
        comp = node.comparison
        return encode_comparison(z3vars[comp.reference], comp)
    if isinstance(node, NotNode):
        return Not(encode_node(node.child, z3vars))
    children = [encode_node(child, z3vars) for child in node.children]
    if isinstance(node, AndNode):
        return And(*children)
    return Or(*children)


def check_tree_consistency(node: Optional[ConditionNode]) -> ConsistencyResult:
    """Same question as check_consistency, for a parsed (nested) condition."""
    if node is None:
        return ConsistencyResult(satisfiable=True, witness=None)

    z3vars = build_z3_vars([c.comparison for c in flatten(node)])
    solver = Solver()
    solver.add(encode_node(node, z3vars))
    if solver.check() != sat:
        return ConsistencyResult(satisfiable=False, witness=None)
    return ConsistencyResult(satisfiable=True, witness=_witness(solver.model(), z3vars))
