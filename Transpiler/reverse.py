"""Reverse transpilation: stored SpEL boolean rule -> editable authoring text."""
import re
from decimal import ROUND_HALF_UP, Decimal

from .catalog import PROGRESS_FIELD

REFERENCE_MARK_RE = re.compile(r"#(?=[A-Za-z_])")
LITERAL_REPLACEMENTS = [
    (re.compile(r"\btrue\b"), "True"),
    (re.compile(r"\bfalse\b"), "False"),
]
OPERATOR_REPLACEMENTS = [
    (re.compile(r"\s*&&\s*"), " and "),
    (re.compile(r"\s*\|\|\s*"), " or "),
    (re.compile(r"!(?!=)\s*"), "not "),
]


def rescale_fraction(threshold: str) -> str:
    """0.5 -> 50, 0.125 -> 13. Integers and values above 1 are returned unchanged."""
    if "." not in threshold:
        return threshold
    value = Decimal(threshold)
    if value > 1:
        return threshold
    return str((value * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _rescale_progress_field(text: str, progress_field: str) -> str:
    pattern = re.compile(
        rf"(?<![\w.'])({re.escape(progress_field)}\s*(?:>=|<=|==|!=|>|<)\s*)(\d+(?:\.\d+)?|\.\d+)"
    )
    return pattern.sub(lambda m: m.group(1) + rescale_fraction(m.group(2)), text)


def reverse(stored_rule: str, progress_field: str = PROGRESS_FIELD) -> str:
    """Rebuild authoring-language source from a stored rule (best effort)."""
    if not stored_rule or not stored_rule.strip():
        return ""

    text = REFERENCE_MARK_RE.sub("", stored_rule)
    for pattern, replacement in LITERAL_REPLACEMENTS + OPERATOR_REPLACEMENTS:
        text = pattern.sub(replacement, text)
    return _rescale_progress_field(text, progress_field)
