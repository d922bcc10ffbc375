"""
Memory store - decaying familiarity per interval.

Familiarity is bumped every time an interval is played and shrinks
geometrically every window. Entries are never removed.
"""

from collections.abc import Mapping
from typing import Dict, Iterable, Iterator, Optional

from .interval import Interval, IntervalLike, as_interval

# Fraction of familiarity kept across one window
RETENTION = 0.75

# Familiarity added per played note
REINFORCEMENT = 0.1


class MemoryStore(Mapping):
    """
    Mapping of Interval -> familiarity (float >= 0).
    
    Read access follows the Mapping protocol so judges can iterate it
    without touching the mutators. Iteration order is insertion order.
    """
    
    def __init__(self, entries: Optional[Dict[Interval, float]] = None):
        self._familiarity: Dict[Interval, float] = {}
        if entries:
            for note, value in entries.items():
                value = float(value)
                if not value >= 0.0:
                    raise ValueError(f"familiarity for {note} must be >= 0, got {value}")
                self._familiarity[as_interval(note)] = value
    
    def __getitem__(self, note: Interval) -> float:
        return self._familiarity[note]
    
    def __iter__(self) -> Iterator[Interval]:
        return iter(self._familiarity)
    
    def __len__(self) -> int:
        return len(self._familiarity)
    
    def decay(self, retention: float = RETENTION) -> None:
        """Multiply every familiarity by retention."""
        if not 0.0 <= retention <= 1.0:
            raise ValueError(f"retention must be in [0, 1], got {retention}")
        for note in self._familiarity:
            self._familiarity[note] *= retention
    
    def reinforce(self, chord: Iterable[IntervalLike], increment: float = REINFORCEMENT) -> None:
        """
        Add increment for every note occurrence in chord.
        
        A note repeated twice in the chord is reinforced twice. Unseen
        notes enter the store with the increment as their familiarity.
        """
        if not increment >= 0.0:
            raise ValueError(f"increment must be >= 0, got {increment}")
        for note in chord:
            note = as_interval(note)
            self._familiarity[note] = self._familiarity.get(note, 0.0) + increment
    
    def total_familiarity(self) -> float:
        return sum(self._familiarity.values())
    
    def copy(self) -> 'MemoryStore':
        return MemoryStore(self._familiarity)
    
    def snapshot(self) -> Dict[Interval, float]:
        """Plain dict copy of the current state"""
        return dict(self._familiarity)
    
    def __repr__(self) -> str:
        entries = ', '.join(f"{note}={value:.3f}" for note, value in self._familiarity.items())
        return f"MemoryStore({entries})"
