"""
Chord search - single-note substitution hill climb.

Exhaustive scan over every position and every small-integer ratio
a/b with a, b in 1..11. Scan order is fixed (position, numerator,
denominator ascending) and the first strictly-better candidate for a
score wins, so results are reproducible.
"""

from typing import Iterator, Mapping, Sequence

from .interval import Chord, Interval, IntervalLike, as_chord, canonicalize
from .judges import judge

CANDIDATE_RANGE = range(1, 12)

# Worst score a chord can get; anything strictly below replaces it
WORST_SCORE = 1.0


def candidate_intervals() -> Iterator[Interval]:
    """All 121 candidates in scan order (duplicates after reduction included)."""
    for a in CANDIDATE_RANGE:
        for b in CANDIDATE_RANGE:
            yield canonicalize(a, b)


def step(chord: Sequence[IntervalLike], memory: Mapping[Interval, float]) -> Chord:
    """
    Best single-note substitution of chord under the combined judge.
    
    Candidates already present anywhere in the chord are skipped, so the
    result never contains a repeated note. The chord length never
    changes. If nothing scores below 1.0 the original chord is returned.
    
    Args:
        chord: Current notes (Intervals or (n, d) pairs); order is kept, position i is replaced in place
        memory: Familiarity store, read only
        
    Returns:
        New chord as a tuple
    """
    current = as_chord(chord)
    present = set(current)
    
    best = current
    best_score = WORST_SCORE
    
    for i in range(len(current)):
        for candidate in candidate_intervals():
            if candidate in present:
                continue
            trial = current[:i] + (candidate,) + current[i + 1:]
            score = judge(trial, memory)
            if score < best_score:
                best = trial
                best_score = score
    
    return best
