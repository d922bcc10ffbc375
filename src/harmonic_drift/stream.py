"""
DroneStream - couples the evolution loop to the synthesizer and
emits raw s16le mono PCM.
"""

import sys
from typing import BinaryIO, Iterator, Optional, Tuple

import numpy as np

from .config import EngineConfig, get_config
from .evolution import EvolutionLoop
from .interval import Chord, format_chord
from .synth import DroneSynth, encode_pcm, to_pcm16


class DroneStream:
    """
    Window-at-a-time PCM generator.
    
    Each window plays the loop's current chord for window_length
    samples, then ticks the loop across the boundary so the next window
    plays the evolved chord.
    """
    
    def __init__(self, config: Optional[EngineConfig] = None, loop: Optional[EvolutionLoop] = None):
        self.config = config or get_config()
        self.loop = loop or EvolutionLoop(self.config.window_length, verbose=self.config.verbose > 0)
        self.synth = DroneSynth(self.config.sample_rate, self.config.base_frequency)
        self.verbose = self.config.verbose > 0
        self.bytes_written = 0
    
    @property
    def window_length(self) -> int:
        return self.loop.window_length
    
    def windows(self, limit: Optional[int] = None) -> Iterator[Tuple[Chord, np.ndarray]]:
        """
        Yield (chord, int16 samples) per window.
        
        Args:
            limit: Number of windows, None for no end
        """
        produced = 0
        while limit is None or produced < limit:
            chord = self.loop.chord
            frames = self.window_length - self.loop.window_position
            samples = self.synth.render(chord, frames, envelope_length=self.window_length,
                                        envelope_start=self.loop.window_position)
            pcm = to_pcm16(samples)
            
            # Cross the boundary before handing the window out
            self.loop.tick(frames)
            produced += 1
            yield chord, pcm
    
    def write_to(self, out: BinaryIO, limit: Optional[int] = None) -> int:
        """
        Write raw PCM for limit windows (or forever) to out.
        
        Returns:
            Bytes written
        """
        written = 0
        for index, (chord, pcm) in enumerate(self.windows(limit)):
            data = encode_pcm(pcm)
            out.write(data)
            written += len(data)
            
            if self.verbose:
                print(f"[STREAM] window {index}: {format_chord(chord)} "
                      f"({len(pcm)} samples)", file=sys.stderr)
        
        out.flush()
        self.bytes_written += written
        return written
