"""
DroneSynth - additive sine rendering of a chord
- Each interval n/d sounds at base_frequency * n / d
- Equal-weight mix normalized by chord size
- Phase follows an absolute sample clock, continuous across windows
- Linear fade-in per window, then int16 PCM conversion
"""

from typing import Optional, Sequence

import numpy as np

from .errors import EmptyChordError
from .interval import Interval

PCM_MAX = np.iinfo(np.int16).max
PCM_MIN = np.iinfo(np.int16).min


def chord_frequencies(chord: Sequence[Interval], base_frequency: float) -> np.ndarray:
    """Frequencies in Hz for each note of chord"""
    return np.array([base_frequency * note.ratio for note in chord],
                    dtype=np.float64)


def linear_envelope(frames: int, duration: Optional[int] = None, start: int = 0) -> np.ndarray:
    """Fade-in ramp: progress / duration for progress = start .. start+frames-1"""
    duration = duration or frames
    return np.arange(start, start + frames, dtype=np.float64) / float(duration)


def to_pcm16(samples: np.ndarray) -> np.ndarray:
    """
    Scale [-1, 1] float samples to int16, clamped one step inside the
    int16 range.
    """
    scaled = np.asarray(samples, dtype=np.float64) * PCM_MAX
    np.clip(scaled, PCM_MIN + 1, PCM_MAX - 1, out=scaled)
    return scaled.astype(np.int16)


def encode_pcm(samples: np.ndarray) -> bytes:
    """int16 samples as little-endian raw bytes"""
    return np.asarray(samples, dtype='<i2').tobytes()


class DroneSynth:
    """
    Renders chords to float samples.
    
    Keeps a running sample index so consecutive render() calls join
    without phase jumps, whatever chord each call plays.
    """
    
    def __init__(self, sample_rate: int = 44100, base_frequency: float = 250.0):
        if sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {sample_rate}")
        if base_frequency <= 0:
            raise ValueError(f"base_frequency must be positive, got {base_frequency}")
        
        self.sr = sample_rate
        self.base_frequency = base_frequency
        self._two_pi_over_sr = 2.0 * np.pi / float(sample_rate)
        self._sample_index = 0
    
    @property
    def sample_index(self) -> int:
        return self._sample_index
    
    def prepare(self) -> None:
        """Reset the sample clock before playback."""
        self._sample_index = 0
    
    def render(self, chord: Sequence[Interval], frames: int,
               envelope_length: Optional[int] = None, envelope_start: int = 0) -> np.ndarray:
        """
        Render frames samples of chord with a linear fade-in.
        
        Args:
            chord: Notes to sound, must not be empty
            frames: Number of samples
            envelope_length: Ramp duration in samples (default: frames)
            envelope_start: Ramp position of the first sample
            
        Returns:
            float64 array in [-1, 1]
        """
        if not chord:
            raise EmptyChordError("render: need at least 1 note")
        if frames < 0:
            raise ValueError(f"frames must be >= 0, got {frames}")
        
        freqs = chord_frequencies(chord, self.base_frequency)
        steps = np.arange(self._sample_index, self._sample_index + frames, dtype=np.float64)
        
        # (notes, frames) phase grid, summed over notes
        phases = np.outer(freqs * self._two_pi_over_sr, steps)
        mix = np.sin(phases).sum(axis=0) / len(freqs)
        mix *= linear_envelope(frames, envelope_length, envelope_start)
        
        self._sample_index += frames
        return mix
