"""Variable catalog: load permitted condition variables, build lookup indexes."""
import json
import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional

import yaml
from pydantic import TypeAdapter

from .interpret import CONDITION_RE
from .schemas import CompletionItem, VariableDescriptor

logger = logging.getLogger(__name__)

PROGRESS_FIELD = "progressField"

KEYWORD_COMPLETIONS = [
    CompletionItem(label="and", kind="keyword", insert_text="and", detail="logical AND (&&)"),
    CompletionItem(label="or", kind="keyword", insert_text="or", detail="logical OR (||)"),
    CompletionItem(label="not", kind="keyword", insert_text="not ", detail="logical NOT (!)"),
    CompletionItem(label="True", kind="keyword", insert_text="True", detail="true"),
    CompletionItem(label="False", kind="keyword", insert_text="False", detail="false"),
]

_descriptor_list = TypeAdapter(List[VariableDescriptor])


class VariableCatalog:
    """In-memory indexes over the permitted variables of one editing session."""

    def __init__(self, descriptors: Iterable[VariableDescriptor]):
        self.descriptors: List[VariableDescriptor] = []
        self.by_path: Dict[str, VariableDescriptor] = {}
        self.roots: List[str] = []

        for desc in descriptors:
            if desc.path in self.by_path:
                logger.warning("Catalog integrity: duplicate variable path '%s'", desc.path)
                continue
            self.descriptors.append(desc)
            self.by_path[desc.path] = desc
            if desc.root not in self.roots:
                self.roots.append(desc.root)

    def __len__(self) -> int:
        return len(self.descriptors)

    def __iter__(self) -> Iterator[VariableDescriptor]:
        return iter(self.descriptors)

    def __contains__(self, path: object) -> bool:
        return path in self.by_path

    def lookup(self, path: str) -> Optional[VariableDescriptor]:
        return self.by_path.get(path.lstrip("#"))

    def match_prefix(self, prefix: str) -> List[VariableDescriptor]:
        prefix = prefix.lstrip("#")
        return [d for d in self.descriptors if d.path.startswith(prefix)]

    def has_root(self, name: str) -> bool:
        return name in self.roots


def default_catalog() -> VariableCatalog:
    """Catalog used when the caller supplies none: just the generic progress field."""
    return VariableCatalog([
        VariableDescriptor(
            path=PROGRESS_FIELD,
            description="Challenge progress value",
            declared_type="number",
        )
    ])


def _parse_catalog(raw: Any) -> VariableCatalog:
    if isinstance(raw, dict):
        raw = raw.get("variables", [])
    return VariableCatalog(_descriptor_list.validate_python(raw))


def load_catalog(path: str) -> VariableCatalog:
    """Load a variable catalog from a JSON or YAML file.

    The file holds either a list of descriptors or ``{"variables": [...]}``.

    Raises:
        FileNotFoundError: If path doesn't exist.
        pydantic.ValidationError: On schema mismatch.
    """
    with open(path, encoding="utf-8") as f:
        if path.endswith((".yaml", ".yml")):
            raw = yaml.safe_load(f) or []
        else:
            raw = json.load(f)

    catalog = _parse_catalog(raw)
    logger.debug("Loaded %d condition variables from %s", len(catalog), path)
    return catalog


def suggest(prefix: str, catalog: VariableCatalog) -> List[CompletionItem]:
    """Editor completion items: matching variables first, then keywords."""
    items = [
        CompletionItem(
            label=d.path,
            kind="variable",
            insert_text=d.path,
            detail=d.description or d.declared_type,
        )
        for d in catalog.match_prefix(prefix)
    ]
    items.extend(k for k in KEYWORD_COMPLETIONS if k.label.startswith(prefix))
    return items


def unknown_references(rule: str, catalog: VariableCatalog) -> List[str]:
    """Return warnings for compared variables whose root is not in the catalog.

    Scans the rule text itself, so operands the normalizer left unmarked
    (typos, variables outside the catalog) are reported too.
    """
    warnings: List[str] = []
    seen = set()
    for match in CONDITION_RE.finditer(rule or ""):
        root = VariableDescriptor(path=match.group(1)).root
        if root in seen or catalog.has_root(root):
            continue
        seen.add(root)
        warnings.append(f"Condition references unknown variable '{root}'")
    return warnings
