"""Tests for decomposer.py — single comparisons and flat AND / OR groups."""
from Transpiler.decomposer import decompose, match_comparison
from Transpiler.schemas import CombinatorKind


class TestMatchComparison:
    def test_bare_reference(self):
        comp = match_comparison("#progressField >= 50")
        assert comp.reference == "progressField"
        assert comp.operator == ">="
        assert comp.threshold == 50

    def test_bracket_reference(self):
        comp = match_comparison("  #activity['commits']>10 ")
        assert comp.reference == "activity['commits']"
        assert comp.operator == ">"

    def test_decimal_threshold(self):
        assert match_comparison("#progressField <= 0.5").threshold == 0.5

    def test_threshold_text_kept(self):
        comp = match_comparison("#x >= 0.00001")
        assert comp.threshold_text == "0.00001"
        assert comp.threshold == 0.00001

    def test_all_operators(self):
        for op in (">=", "<=", ">", "<", "==", "!="):
            assert match_comparison(f"#x {op} 3").operator == op

    def test_unprefixed_reference_rejected(self):
        assert match_comparison("x >= 3") is None

    def test_reference_on_right_rejected(self):
        assert match_comparison("3 <= #x") is None


class TestDecompose:
    def test_single(self):
        result = decompose("#progressField >= 50")
        assert result.combinator == CombinatorKind.NONE
        assert len(result.comparisons) == 1

    def test_and_group(self):
        result = decompose("#activity['commits'] >= 10 && #activity['prs'] >= 2")
        assert result.combinator == CombinatorKind.AND
        assert [c.reference for c in result.comparisons] == ["activity['commits']", "activity['prs']"]
        assert [c.threshold for c in result.comparisons] == [10, 2]

    def test_or_group(self):
        result = decompose("#x > 5 || #x < 2")
        assert result.combinator == CombinatorKind.OR
        assert [c.operator for c in result.comparisons] == [">", "<"]

    def test_three_way_and(self):
        result = decompose("#a >= 1 && #b >= 2 && #c >= 3")
        assert len(result.comparisons) == 3

    def test_and_with_irregular_part_fails(self):
        result = decompose("#a >= 1 && #b")
        assert result.failed
        assert result.comparisons == []

    def test_mixed_and_or_fails(self):
        assert decompose("#a >= 1 && #b >= 2 || #c >= 3").failed

    def test_nested_fails(self):
        assert decompose("(#a >= 1) && (#b >= 2 || #c >= 3)").failed

    def test_zero_threshold_is_accepted(self):
        result = decompose("#x >= 0")
        assert result.comparisons[0].threshold == 0

    def test_blank(self):
        assert decompose("").failed
        assert decompose("  ").failed

    def test_unsupported_shape(self):
        assert decompose("#flag == true").failed
