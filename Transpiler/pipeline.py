"""Recompute pipeline run on every editor change, plus the rule load path."""
import logging
from typing import Optional

from .catalog import VariableCatalog, default_catalog, unknown_references
from .config import TranspilerConfig
from .consistency import check_consistency, check_tree_consistency
from .decomposer import decompose
from .formula import synthesize, synthesize_tree
from .interpret import interpret
from .normalizer import normalize
from .parser import parse_condition
from .reverse import reverse
from .schemas import TranspileResult

logger = logging.getLogger(__name__)


def transpile(
    source: str,
    catalog: Optional[VariableCatalog] = None,
    config: Optional[TranspilerConfig] = None,
) -> TranspileResult:
    """Authoring-language source -> boolean rule, progress formula and gloss.

    Never raises on text input: an unsupported shape leaves ``formula`` empty
    and the caller shows ``rule`` alone.
    """
    config = config or TranspilerConfig()
    catalog = catalog if catalog is not None else default_catalog()

    if not source or not source.strip():
        return TranspileResult(source=source or "")

    rule = normalize(source, catalog)
    decomposed = decompose(rule)

    tree = None
    if config.nested:
        tree = parse_condition(rule)
        formula = synthesize_tree(tree, config)
    else:
        formula = synthesize(decomposed, config)

    logger.debug("Transpiled %r: combinator=%s comparisons=%d formula=%s",
                 source, decomposed.combinator.value, len(decomposed.comparisons),
                 "yes" if formula else "no")

    warnings = unknown_references(rule, catalog)
    for w in warnings:
        logger.warning("%s", w)

    consistency = None
    if config.check_consistency and tree is not None:
        consistency = check_tree_consistency(tree)
    elif config.check_consistency and not decomposed.failed:
        consistency = check_consistency(decomposed)
    if consistency is not None and not consistency.satisfiable:
        warnings.append("Condition can never be satisfied")
        logger.warning("Condition can never be satisfied: %s", rule)

    return TranspileResult(
        source=source,
        rule=rule,
        formula=formula,
        interpretation=interpret(source, config.interpretation_separator),
        decomposed=decomposed,
        warnings=warnings,
        consistency=consistency,
    )


def load_rule(stored_rule: str, config: Optional[TranspilerConfig] = None) -> str:
    """Stored SpEL rule -> text for the edit form."""
    config = config or TranspilerConfig()
    return reverse(stored_rule, progress_field=config.progress_field)
