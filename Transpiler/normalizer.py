"""Lexical normalization: authoring-language text -> SpEL surface syntax."""
import re
from typing import Iterable, List, Union

from .catalog import VariableCatalog
from .schemas import VariableDescriptor

# (pattern, replacement), applied globally in order
OPERATOR_REPLACEMENTS = [
    (re.compile(r"\band\b"), "&&"),
    (re.compile(r"\bor\b"), "||"),
    (re.compile(r"\bnot\s+"), "!"),
    (re.compile(r"\bTrue\b"), "true"),
    (re.compile(r"\bFalse\b"), "false"),
]


def _roots(variables: Union[VariableCatalog, Iterable[VariableDescriptor]]) -> List[str]:
    if isinstance(variables, VariableCatalog):
        return list(variables.roots)
    roots: List[str] = []
    for desc in variables:
        if desc.root not in roots:
            roots.append(desc.root)
    return roots


def prefix_variables(text: str, variables: Union[VariableCatalog, Iterable[VariableDescriptor]]) -> str:
    """Mark every free occurrence of a catalog root identifier with '#'.

    Occurrences already prefixed, used as a member (``x.name``) or quoted as a
    bracket key (``x['name']``) are left alone.
    """
    for root in _roots(variables):
        pattern = re.compile(rf"(?<![#.'\"])\b{re.escape(root)}\b")
        text = pattern.sub(f"#{root}", text)
    return text


def replace_operators(text: str) -> str:
    for pattern, replacement in OPERATOR_REPLACEMENTS:
        text = pattern.sub(replacement, text)
    return text


def normalize(source: str, variables: Union[VariableCatalog, Iterable[VariableDescriptor]]) -> str:
    """Convert authoring-language source into a SpEL boolean rule."""
    if not source or not source.strip():
        return ""
    return replace_operators(prefix_variables(source, variables))
