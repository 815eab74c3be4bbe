"""
Tests for the path assignment parser.
"""

import pytest

from r2medsim.utils.parsers import _parser

NAMES = ["a", "c_prime", "b", "sigma_em"]


class TestAssignmentParser:
    """Test _AssignmentParser._parse."""

    def test_basic(self):
        parsed, errors = _parser._parse("a=0.5, c_prime=0.3, b=0", NAMES)
        assert errors == []
        assert parsed == {"a": 0.5, "c_prime": 0.3, "b": 0.0}

    def test_whitespace_and_empty_pieces(self):
        parsed, errors = _parser._parse("  a = -0.1 ,, b=0.2 ,", NAMES)
        assert errors == []
        assert parsed == {"a": -0.1, "b": 0.2}

    @pytest.mark.parametrize("spelling", ["c'", "cp", "C_PRIME"])
    def test_c_prime_aliases(self, spelling):
        parsed, errors = _parser._parse(f"{spelling}=0.4", NAMES)
        assert errors == []
        assert parsed == {"c_prime": 0.4}

    def test_sigma_alias(self):
        parsed, _ = _parser._parse("sd_em=0.1", NAMES)
        assert parsed == {"sigma_em": 0.1}

    def test_scientific_notation(self):
        parsed, _ = _parser._parse("a=1e-2", NAMES)
        assert parsed["a"] == pytest.approx(0.01)

    def test_unknown_name(self):
        parsed, errors = _parser._parse("z=1", NAMES)
        assert parsed == {}
        assert "'z' not found" in errors[0]

    def test_bad_number(self):
        _, errors = _parser._parse("a=abc", NAMES)
        assert "Invalid value 'abc'" in errors[0]

    def test_missing_equals(self):
        _, errors = _parser._parse("a 0.5", NAMES)
        assert "Expected 'name=value'" in errors[0]

    def test_duplicate(self):
        parsed, errors = _parser._parse("a=0.1, a=0.2", NAMES)
        assert parsed == {"a": 0.1}
        assert "more than once" in errors[0]

    def test_duplicate_through_alias(self):
        _, errors = _parser._parse("c'=0.1, cp=0.2", NAMES)
        assert len(errors) == 1

    def test_errors_collected(self):
        parsed, errors = _parser._parse("a=x, q=1, b=0.2", NAMES)
        assert parsed == {"b": 0.2}
        assert len(errors) == 2
