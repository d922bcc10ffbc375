"""
Unit tests for rational intervals
Canonical form, equality/hash, ratio combination, rejection of bad terms
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from harmonic_drift.errors import InvalidIntervalError, ZeroDenominatorError
from harmonic_drift.interval import (
    Interval, as_chord, canonicalize, chord_pairs, combine_ratio, format_chord,
)


class TestCanonicalForm:
    
    def test_reduces_to_lowest_terms(self):
        """Reduces to lowest terms"""
        assert canonicalize(2, 4).as_pair() == (1, 2)
        assert canonicalize(6, 4).as_pair() == (3, 2)
        assert canonicalize(7, 7).as_pair() == (1, 1)
    
    def test_idempotent(self):
        """Canonicalizing a canonical interval returns it unchanged"""
        once = canonicalize(9, 6)
        twice = canonicalize(once.numerator, once.denominator)
        assert once == twice
        assert twice.as_pair() == (3, 2)
    
    @pytest.mark.parametrize("k", [1, 2, 3, 17, 1000])
    def test_scaled_terms_same_result(self, k):
        """Scaling both terms by k does not change the result"""
        assert canonicalize(5 * k, 3 * k) == canonicalize(5, 3)
    
    def test_equal_ratios_equal_and_hash_alike(self):
        """Equal ratios equal and hash alike"""
        a = Interval(2, 4)
        b = Interval(3, 6)
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b, Interval(1, 2)}) == 1
    
    def test_distinct_ratios_differ(self):
        """Distinct ratios differ"""
        assert Interval(1, 2) != Interval(2, 1)
    
    def test_immutable(self):
        """Intervals cannot be modified after construction"""
        note = Interval(3, 2)
        with pytest.raises(AttributeError):
            note.numerator = 5


class TestRejection:
    
    def test_zero_denominator(self):
        """Zero denominator is rejected at construction"""
        with pytest.raises(ZeroDenominatorError):
            canonicalize(1, 0)
    
    def test_zero_denominator_is_zero_division(self):
        """Zero denominator is zero division"""
        with pytest.raises(ZeroDivisionError):
            Interval(3, 0)
    
    @pytest.mark.parametrize("n, d", [(0, 1), (-1, 2), (1, -2), (1.5, 2), (True, 1), ("1", 2)])
    def test_invalid_terms(self, n, d):
        """Non-positive or non-integer terms are rejected"""
        with pytest.raises(InvalidIntervalError):
            Interval(n, d)
    
    def test_invalid_is_value_error(self):
        """Invalid is value error"""
        with pytest.raises(ValueError):
            Interval(0, 3)


class TestCombineRatio:
    
    def test_against_unison(self):
        """Against unison"""
        assert combine_ratio(Interval(1, 2), Interval(1, 1)) == Interval(1, 2)
    
    def test_cross_product(self):
        """Test (2/3) / (3/2) = 4/9"""
        # (2/3) / (3/2) = 4/9
        assert combine_ratio(Interval(2, 3), Interval(3, 2)).as_pair() == (4, 9)
    
    def test_result_is_reduced(self):
        """Result is reduced"""
        # (1/2) / (1/4) = 4/2 -> 2/1
        assert combine_ratio(Interval(1, 2), Interval(1, 4)).as_pair() == (2, 1)
    
    def test_same_pitch_is_unison(self):
        """Same pitch is unison"""
        fifth = Interval(3, 2)
        assert combine_ratio(fifth, fifth) == Interval(1, 1)


class TestHelpers:
    
    def test_parse(self):
        """Test parsing n/d text"""
        assert Interval.parse("6/4") == Interval(3, 2)
        assert Interval.parse(" 5 ") == Interval(5, 1)
        with pytest.raises(InvalidIntervalError):
            Interval.parse("a/b")
        with pytest.raises(InvalidIntervalError):
            Interval.parse("1/2/3")
        with pytest.raises(ZeroDenominatorError):
            Interval.parse("1/0")
    
    def test_ratio_and_str(self):
        """Test float ratio and n/d string form"""
        assert Interval(3, 2).ratio == 1.5
        assert str(Interval(4, 6)) == "2/3"
    
    def test_chord_from_pairs(self):
        """Chord from pairs"""
        chord = as_chord([(2, 4), Interval(1, 1), (3, 1)])
        assert chord == (Interval(1, 2), Interval(1, 1), Interval(3, 1))
        assert chord_pairs(chord) == ((1, 2), (1, 1), (3, 1))
        assert format_chord(chord) == "1/2 1/1 3/1"
    
    def test_chord_rejects_non_pairs(self):
        """Chord rejects non pairs"""
        with pytest.raises(InvalidIntervalError):
            as_chord([(1, 2, 3)])
