"""
Rational intervals - exact pitch ratios over a base frequency.

An Interval is always stored in lowest terms, so equal ratios compare
and hash equal no matter how they were written down (2/4 == 1/2).
"""

from dataclasses import dataclass
from math import gcd
from typing import Iterable, Tuple, Union

from .errors import InvalidIntervalError, ZeroDenominatorError


def _check_term(name: str, value) -> int:
    # bool is an int subclass; 1/True is not a pitch ratio
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidIntervalError(f"{name} must be an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class Interval:
    """
    Frequency ratio numerator/denominator relative to a base pitch.
    
    Construction canonicalizes: Interval(3, 6) is stored as 1/2.
    
    Raises:
        ZeroDenominatorError: denominator is 0
        InvalidIntervalError: either term is not a positive integer
    """
    numerator: int
    denominator: int
    
    def __post_init__(self):
        n = _check_term("numerator", self.numerator)
        d = _check_term("denominator", self.denominator)
        if d == 0:
            raise ZeroDenominatorError(f"interval {n}/0 has no value")
        if n <= 0 or d < 0:
            raise InvalidIntervalError(f"interval {n}/{d} must be strictly positive")
        
        common = gcd(n, d)
        if common > 1:
            object.__setattr__(self, "numerator", n // common)
            object.__setattr__(self, "denominator", d // common)
    
    @property
    def ratio(self) -> float:
        """Floating point value of the ratio"""
        return self.numerator / self.denominator
    
    def as_pair(self) -> Tuple[int, int]:
        return (self.numerator, self.denominator)
    
    @classmethod
    def parse(cls, text: str) -> 'Interval':
        """Parse "n/d" (or a bare integer "n", meaning n/1)."""
        parts = text.strip().split("/")
        if len(parts) > 2:
            raise InvalidIntervalError(f"cannot parse interval {text!r}")
        try:
            terms = [int(p) for p in parts]
        except ValueError:
            raise InvalidIntervalError(f"cannot parse interval {text!r}") from None
        if len(terms) == 1:
            terms.append(1)
        return cls(terms[0], terms[1])
    
    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


Chord = Tuple[Interval, ...]
IntervalLike = Union[Interval, Tuple[int, int]]


def canonicalize(n: int, d: int) -> Interval:
    """Reduce n/d by its greatest common divisor."""
    return Interval(n, d)


def combine_ratio(a: Interval, b: Interval) -> Interval:
    """
    Ratio between two pitches: (n1 * d2) / (n2 * d1), reduced.
    
    Measures the harmonic relationship of a sounding against b.
    """
    numerator = a.numerator * b.denominator
    denominator = b.numerator * a.denominator
    if denominator == 0:
        raise ZeroDenominatorError(f"combining {a} with {b} divides by zero")
    return Interval(numerator, denominator)


def as_interval(value: IntervalLike) -> Interval:
    if isinstance(value, Interval):
        return value
    try:
        n, d = value
    except (TypeError, ValueError):
        raise InvalidIntervalError(f"expected Interval or (n, d) pair, got {value!r}") from None
    return Interval(n, d)


def as_chord(notes: Iterable[IntervalLike]) -> Chord:
    """Build a chord from Intervals or (numerator, denominator) pairs."""
    return tuple(as_interval(note) for note in notes)


def chord_pairs(chord: Iterable[Interval]) -> Tuple[Tuple[int, int], ...]:
    """Chord as ordered (numerator, denominator) pairs for synthesis."""
    return tuple(note.as_pair() for note in chord)


def format_chord(chord: Iterable[Interval]) -> str:
    return " ".join(str(note) for note in chord)
