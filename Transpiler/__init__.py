"""Transpiler — challenge condition authoring language to SpEL rule and progress formula."""

from .pipeline import load_rule, transpile
from .catalog import VariableCatalog, default_catalog, load_catalog, suggest
from .schemas import DecomposedExpression, TranspileResult, VariableDescriptor
