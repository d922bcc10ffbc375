"""
Chord judges - scoring functions for candidate chords.

Every judge returns a penalty in [0, 1]; lower is better. Judges only
read the chord and the memory, they never mutate either.

Sums run in chord order, then memory insertion order. A different
memory order gives the same score up to float summation rounding.
"""

import math
from dataclasses import dataclass
from typing import Mapping, Sequence

from .errors import EmptyChordError
from .interval import Interval, combine_ratio

# Roughness scale for the harmony squashing curve
HARMONY_SCALE = 5.0

# Average familiarity a chord should aim for
TARGET_FAMILIARITY = 0.1


def _squash(value: float) -> float:
    """Map [0, inf) onto [0, 1) as 1 - 1/exp(value), clamped."""
    return min(1.0, max(0.0, 1.0 - 1.0 / math.exp(value)))


def judge_harmony(chord: Sequence[Interval], memory: Mapping[Interval, float]) -> float:
    """
    Consonance penalty of chord against familiar intervals.
    
    For each note and each remembered interval the combined ratio n/d
    contributes familiarity * n * d. Simple ratios (1/2, 2/3) add little,
    complex ones add a lot. The average over all pairs is squashed to
    [0, 1] with 1 - 1/exp(avg / HARMONY_SCALE).
    
    An empty memory carries no dissonance signal and scores 0.0.
    
    Raises:
        EmptyChordError: chord is empty while memory is not
    """
    if not memory:
        return 0.0
    if not chord:
        raise EmptyChordError("judge_harmony: need at least 1 note")
    
    harmony_sum = 0.0
    for note in chord:
        for remembered, familiarity in memory.items():
            combined = combine_ratio(note, remembered)
            harmony_sum += familiarity * combined.numerator * combined.denominator
    
    avg_harmony = harmony_sum / (len(chord) * len(memory))
    
    # exp overflows past ~709; the score has long saturated by then
    if avg_harmony / HARMONY_SCALE > 700.0:
        return 1.0
    return _squash(avg_harmony / HARMONY_SCALE)


def judge_novelty(chord: Sequence[Interval], memory: Mapping[Interval, float]) -> float:
    """
    Familiarity/novelty balance penalty.
    
    Average familiarity of the chord's notes (0 for unseen notes) is
    compared to TARGET_FAMILIARITY; the absolute disparity is squashed
    with 1 - 1/exp(disparity).
    
    Raises:
        EmptyChordError: chord is empty
    """
    if not chord:
        raise EmptyChordError("judge_novelty: need at least 1 note")
    
    familiarity_sum = 0.0
    for note in chord:
        familiarity_sum += memory.get(note, 0.0)
    
    avg_familiarity = familiarity_sum / len(chord)
    disparity = abs(TARGET_FAMILIARITY - avg_familiarity)
    
    if disparity > 700.0:
        return 1.0
    return _squash(disparity)


def judge(chord: Sequence[Interval], memory: Mapping[Interval, float]) -> float:
    """Mean of harmony and novelty penalties."""
    return (judge_harmony(chord, memory) + judge_novelty(chord, memory)) / 2.0


@dataclass
class JudgeReport:
    """Breakdown of a chord's scores"""
    harmony: float
    novelty: float
    
    @property
    def combined(self) -> float:
        return (self.harmony + self.novelty) / 2.0
    
    def __str__(self):
        return (f"harmony={self.harmony:.4f} novelty={self.novelty:.4f} "
                f"combined={self.combined:.4f}")


def judge_report(chord: Sequence[Interval], memory: Mapping[Interval, float]) -> JudgeReport:
    return JudgeReport(
        harmony=judge_harmony(chord, memory),
        novelty=judge_novelty(chord, memory),
    )
