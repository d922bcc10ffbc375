"""
Harmonic Drift - Evolving just-intonation drone
Chord evolution by memory-guided hill climbing over rational intervals
"""

__version__ = "0.1.0"

from .errors import DriftError, EmptyChordError, InvalidIntervalError, ZeroDenominatorError
from .interval import Interval, canonicalize, combine_ratio, chord_pairs
from .memory import MemoryStore
from .judges import judge, judge_harmony, judge_novelty
from .search import step
from .evolution import EvolutionLoop, advance, initial_chord

__all__ = [
    'Interval', 'canonicalize', 'combine_ratio', 'chord_pairs',
    'MemoryStore', 'judge', 'judge_harmony', 'judge_novelty',
    'step', 'advance', 'initial_chord', 'EvolutionLoop',
    'DriftError', 'EmptyChordError', 'InvalidIntervalError', 'ZeroDenominatorError',
]
