"""Tests for reverse.py — stored rule back to authoring text."""
import pytest

from Transpiler.normalizer import normalize
from Transpiler.reverse import rescale_fraction, reverse
from Transpiler.schemas import VariableDescriptor


class TestRescaleFraction:
    @pytest.mark.parametrize("given,expected", [
        ("0.5", "50"),
        ("0.125", "13"),
        ("1.0", "100"),
        (".3", "30"),
        ("1.5", "1.5"),
        ("1", "1"),
        ("50", "50"),
    ])
    def test_values(self, given, expected):
        assert rescale_fraction(given) == expected


class TestReverse:
    def test_scenario_fraction_rescaled(self):
        assert reverse("#progressField >= 0.5") == "progressField >= 50"

    def test_operators_and_literals(self):
        assert reverse("#a >= 1 && #b == true || !#c") == "a >= 1 and b == True or not c"

    def test_compact_operators(self):
        assert reverse("#a>=1&&#b>=2") == "a>=1 and b>=2"

    def test_not_equal_preserved(self):
        assert reverse("#a != 3") == "a != 3"

    def test_only_progress_field_rescaled(self):
        assert reverse("#activity['commits'] >= 0.5") == "activity['commits'] >= 0.5"

    def test_large_threshold_untouched(self):
        assert reverse("#progressField >= 70") == "progressField >= 70"

    def test_custom_progress_field(self):
        assert reverse("#ratio <= 0.25", progress_field="ratio") == "ratio <= 25"

    def test_blank(self):
        assert reverse("") == ""
        assert reverse("  ") == ""

    def test_malformed_passes_through(self):
        assert reverse("#a >=") == "a >="

    @pytest.mark.parametrize("field,op,n", [
        ("progressField", ">=", 50),
        ("streak", "<", 7),
        ("activity['prs']", "==", 3),
    ])
    def test_round_trip(self, field, op, n):
        variables = [VariableDescriptor(path=field)]
        source = f"{field} {op} {n}"
        assert reverse(normalize(source, variables)) == source
