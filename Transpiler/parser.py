"""Recursive-descent parser for nested conditions.

Grammar (lowest precedence first)::

    or_expr  := and_expr ("||" and_expr)*
    and_expr := unary ("&&" unary)*
    unary    := "!" unary | primary
    primary  := "(" or_expr ")" | comparison
"""
import re
from typing import List, Optional, Tuple

from .decomposer import NUMBER_PATTERN, OPERATOR_PATTERN, REFERENCE_PATTERN, match_comparison
from .schemas import AndNode, ComparisonNode, ConditionNode, NotNode, OrNode

TOKEN_RE = re.compile(
    rf"\s*(?:(?P<cmp>{REFERENCE_PATTERN}\s*(?:{OPERATOR_PATTERN})\s*{NUMBER_PATTERN})"
    r"|(?P<and>&&)|(?P<or>\|\|)|(?P<not>!(?!=))|(?P<lparen>\()|(?P<rparen>\)))"
)


class ParseError(ValueError):
    pass


def tokenize(text: str) -> List[Tuple[str, str]]:
    tokens: List[Tuple[str, str]] = []
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        match = TOKEN_RE.match(text, pos)
        if not match or match.end() == pos:
            raise ParseError(f"Unexpected input at {pos}: {text[pos:pos + 10]!r}")
        tokens.append((match.lastgroup, match.group(match.lastgroup)))
        pos = match.end()
    return tokens


class _Parser:
    def __init__(self, tokens: List[Tuple[str, str]]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Optional[str]:
        return self.tokens[self.pos][0] if self.pos < len(self.tokens) else None

    def take(self, kind: str) -> str:
        if self.peek() != kind:
            raise ParseError(f"Expected {kind}, got {self.peek()}")
        value = self.tokens[self.pos][1]
        self.pos += 1
        return value

    def parse(self) -> ConditionNode:
        node = self.or_expr()
        if self.peek() is not None:
            raise ParseError(f"Trailing token {self.peek()}")
        return node

    def or_expr(self) -> ConditionNode:
        children = [self.and_expr()]
        while self.peek() == "or":
            self.take("or")
            children.append(self.and_expr())
        return children[0] if len(children) == 1 else OrNode(children=children)

    def and_expr(self) -> ConditionNode:
        children = [self.unary()]
        while self.peek() == "and":
            self.take("and")
            children.append(self.unary())
        return children[0] if len(children) == 1 else AndNode(children=children)

    def unary(self) -> ConditionNode:
        if self.peek() == "not":
            self.take("not")
            return NotNode(child=self.unary())
        return self.primary()

    def primary(self) -> ConditionNode:
        if self.peek() == "lparen":
            self.take("lparen")
            node = self.or_expr()
            self.take("rparen")
            return node
        comp = match_comparison(self.take("cmp"))
        if comp is None:
            raise ParseError("Malformed comparison")
        return ComparisonNode(comparison=comp)


def parse_condition(normalized: str) -> Optional[ConditionNode]:
    """Parse a normalized rule into a condition tree, or None if it does not fit."""
    if not normalized or not normalized.strip():
        return None
    try:
        return _Parser(tokenize(normalized)).parse()
    except ParseError:
        return None


def flatten(node: Optional[ConditionNode]) -> List[ComparisonNode]:
    """Comparisons of a tree in source order."""
    if node is None:
        return []
    if isinstance(node, ComparisonNode):
        return [node]
    if isinstance(node, NotNode):
        return flatten(node.child)
    result: List[ComparisonNode] = []
    for child in node.children:
        result.extend(flatten(child))
    return result
