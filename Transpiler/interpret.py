"""Human-readable gloss of the comparisons in a condition (display only)."""
import re

CONDITION_RE = re.compile(r"(\w+(?:\['[^']+'\]|\.\w+)*)\s*(>=|<=|>|<|==|!=)\s*(\d+(?:\.\d+)?)")
BRACKET_KEY_RE = re.compile(r"\['([^']+)'\]")
MEMBER_RE = re.compile(r"\.(\w+)$")

OPERATOR_GLOSS = {
    ">=": "이상",  # at least
    "<=": "이하",  # at most
    ">": "초과",  # over
    "<": "미만",  # under
    "==": "달성",  # reached
    "!=": "제외",  # excluded
}


def display_name(variable: str) -> str:
    """activity['commits'] -> commits, stats.totalCommits -> totalCommits."""
    bracket = BRACKET_KEY_RE.search(variable)
    if bracket:
        return bracket.group(1)
    member = MEMBER_RE.search(variable)
    if member:
        return member.group(1)
    return variable


def interpret(source: str, separator: str = ", ") -> str:
    if not source or not source.strip():
        return ""
    glosses = []
    for match in CONDITION_RE.finditer(source):
        variable, operator, value = match.groups()
        glosses.append(f"{display_name(variable)} {value} {OPERATOR_GLOSS.get(operator, operator)}")
    return separator.join(glosses)
