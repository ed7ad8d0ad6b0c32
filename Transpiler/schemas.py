"""All Pydantic models for the Transpiler module — single source of truth."""
import re
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

_ROOT_RE = re.compile(r"^\s*#?(\w+)")


# ---------------------------------------------------------------------------
# Catalog types (supplied by the "list condition variables" API)
# ---------------------------------------------------------------------------

class VariableDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    path: str  # progressField | activity['commits'] | stats.totalCommits
    description: str = ""
    declared_type: str = Field(default="number", alias="declaredType")

    @property
    def root(self) -> str:
        """Leading identifier before any bracket or dot."""
        match = _ROOT_RE.match(self.path)
        return match.group(1) if match else self.path.strip()


class CompletionItem(BaseModel):
    label: str
    kind: str  # "variable" | "keyword"
    insert_text: str
    detail: str = ""


# ---------------------------------------------------------------------------
# Decomposition types
# ---------------------------------------------------------------------------

class Comparison(BaseModel):
    reference: str  # raw path, unprefixed
    operator: str  # ">=" | "<=" | ">" | "<" | "==" | "!="
    threshold: float
    threshold_text: str = ""  # as typed, emitted verbatim in formulas

    @property
    def prefixed(self) -> str:
        return f"#{self.reference}"


class CombinatorKind(str, Enum):
    AND = "and"
    OR = "or"
    NONE = "none"


class DecomposedExpression(BaseModel):
    combinator: CombinatorKind = CombinatorKind.NONE
    comparisons: List[Comparison] = Field(default_factory=list)

    @property
    def failed(self) -> bool:
        return not self.comparisons


# ---------------------------------------------------------------------------
# Condition tree (nested mode)
# ---------------------------------------------------------------------------

class ComparisonNode(BaseModel):
    kind: str = "comparison"
    comparison: Comparison


class AndNode(BaseModel):
    kind: str = "and"
    children: List["ConditionNode"]


class OrNode(BaseModel):
    kind: str = "or"
    children: List["ConditionNode"]


class NotNode(BaseModel):
    kind: str = "not"
    child: "ConditionNode"


ConditionNode = Union[ComparisonNode, AndNode, OrNode, NotNode]

AndNode.model_rebuild()
OrNode.model_rebuild()
NotNode.model_rebuild()


# ---------------------------------------------------------------------------
# Pipeline results
# ---------------------------------------------------------------------------

class ConsistencyResult(BaseModel):
    satisfiable: bool = True
    witness: Optional[Dict[str, float]] = None


class TranspileResult(BaseModel):
    source: str = ""
    rule: str = ""  # normalized boolean rule
    formula: str = ""  # percentage formula, "" when not convertible
    interpretation: str = ""
    decomposed: DecomposedExpression = Field(default_factory=DecomposedExpression)
    warnings: List[str] = Field(default_factory=list)
    consistency: Optional[ConsistencyResult] = None

    @property
    def convertible(self) -> bool:
        return bool(self.formula)

    @property
    def display_formula(self) -> str:
        """What the editor shows under the source: the formula, else the raw rule."""
        return self.formula or self.rule

    def summary(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json")
        data["convertible"] = self.convertible
        return data
