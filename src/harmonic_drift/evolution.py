"""
Evolution loop - advances the chord once per time window.

Each window boundary runs decay -> search -> reinforce as one step.
The loop owns its chord and memory; nothing here is global, so a
loop can be driven tick by tick from tests without any audio.
"""

import sys
from enum import Enum
from typing import Iterator, Optional, Sequence

from .errors import EmptyChordError
from .interval import Chord, Interval, IntervalLike, as_chord, format_chord
from .memory import MemoryStore
from .search import step

SEED_CHORD: Chord = as_chord([(1, 2), (1, 1), (1, 3), (1, 5), (1, 7)])


def initial_chord() -> Chord:
    """Seed chord: an octave-below drone with the first few subharmonics"""
    return SEED_CHORD


def advance(chord: Sequence[IntervalLike], memory: MemoryStore) -> Chord:
    """
    One full evolution step.
    
    Decays memory, searches for the next chord against the decayed
    memory, then reinforces memory with that chord. Memory is mutated
    in place; the new chord is returned.
    
    Raises:
        EmptyChordError: chord is empty (memory is left untouched)
    """
    chord = as_chord(chord)
    if not chord:
        raise EmptyChordError("advance: need at least 1 note")
    memory.decay()
    next_chord = step(chord, memory)
    memory.reinforce(next_chord)
    return next_chord


class LoopState(Enum):
    ACTIVE = "ACTIVE"    # Synthesizing the current chord
    ADVANCE = "ADVANCE"  # Window boundary, evolving


class EvolutionLoop:
    """
    Window-based driver of chord evolution.
    
    tick() counts synthesis steps; after window_length ticks the loop
    advances the chord and restarts the window. If an advance raises,
    the exception propagates, the chord is left as it was and the loop
    should be discarded.
    """
    
    def __init__(self, window_length: int, chord: Optional[Sequence[Interval]] = None,
                 memory: Optional[MemoryStore] = None, verbose: bool = False):
        if isinstance(window_length, bool) or not isinstance(window_length, int) or window_length < 1:
            raise ValueError(f"window_length must be a positive integer, got {window_length!r}")
        
        self.window_length = window_length
        self.chord: Chord = as_chord(chord) if chord is not None else initial_chord()
        if not self.chord:
            raise EmptyChordError("EvolutionLoop: seed chord needs at least 1 note")
        self.memory = memory if memory is not None else MemoryStore()
        
        self.state = LoopState.ACTIVE
        self.window_position = 0
        self.windows_completed = 0
        
        self.verbose = verbose
    
    def advance(self) -> Chord:
        """Force a window boundary now and return the new chord."""
        self.state = LoopState.ADVANCE
        next_chord = advance(self.chord, self.memory)
        
        self.chord = next_chord
        self.window_position = 0
        self.windows_completed += 1
        self.state = LoopState.ACTIVE
        
        if self.verbose:
            print(f"[EVOLVE] window {self.windows_completed}: {format_chord(next_chord)} "
                  f"(memory {len(self.memory)} intervals)", file=sys.stderr)
        return next_chord
    
    def tick(self, count: int = 1) -> int:
        """
        Advance the window clock by count synthesis steps.
        
        Returns:
            Number of window boundaries crossed (chord advances performed)
        """
        if count < 0:
            raise ValueError(f"tick count must be >= 0, got {count}")
        
        advances = 0
        remaining = count
        while remaining > 0:
            until_boundary = self.window_length - self.window_position
            if remaining < until_boundary:
                self.window_position += remaining
                break
            remaining -= until_boundary
            self.window_position = self.window_length
            self.advance()
            advances += 1
        return advances
    
    def windows(self) -> Iterator[Chord]:
        """Yield the current chord, then each following chord, forever."""
        yield self.chord
        while True:
            self.tick(self.window_length - self.window_position)
            yield self.chord
    
    def __repr__(self):
        return (f"EvolutionLoop(state={self.state.value}, window={self.window_position}/"
                f"{self.window_length}, chord=[{format_chord(self.chord)}])")
