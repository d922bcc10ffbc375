"""
Configuration for the drone driver
Reads DRIFT_* environment variables; the evolution engine itself has no knobs
"""

import os
from dataclasses import dataclass, asdict
from typing import Any, Dict, Tuple

# name -> (environment variable, default, type, (min, max))
CONFIG_SPEC: Dict[str, Tuple[str, Any, type, Tuple[float, float]]] = {
    'sample_rate': ('DRIFT_SAMPLE_RATE', 44100, int, (8000, 192000)),
    'steps_per_second': ('DRIFT_STEPS_PER_SEC', 4, int, (1, 1000)),
    'base_frequency': ('DRIFT_BASE_NOTE', 250.0, float, (1.0, 20000.0)),
    'verbose': ('DRIFT_VERBOSE', 0, int, (0, 2)),
}


@dataclass
class EngineConfig:
    """Effective driver configuration"""
    sample_rate: int = 44100
    steps_per_second: int = 4
    base_frequency: float = 250.0
    verbose: int = 0
    
    def __post_init__(self):
        for name, (_, _, kind, (low, high)) in CONFIG_SPEC.items():
            value = getattr(self, name)
            if not low <= value <= high:
                raise ValueError(f"{name}={value} out of range [{low}, {high}]")
        if self.sample_rate // self.steps_per_second < 1:
            raise ValueError("steps_per_second must not exceed sample_rate")
    
    @property
    def window_length(self) -> int:
        """Samples per evolution window"""
        return self.sample_rate // self.steps_per_second
    
    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['window_length'] = self.window_length
        return data


def get_config() -> EngineConfig:
    """Get parsed configuration values from the environment"""
    values = {}
    for name, (env_name, default, kind, _) in CONFIG_SPEC.items():
        raw = os.environ.get(env_name)
        if raw is None or raw.strip() == '':
            values[name] = default
            continue
        try:
            values[name] = kind(raw.strip())
        except ValueError:
            raise ValueError(f"{env_name}={raw!r} is not a valid {kind.__name__}") from None
    return EngineConfig(**values)


def print_config(config: EngineConfig = None):
    """Print current configuration"""
    config = config or get_config()
    data = config.to_dict()
    
    print("\n" + "="*60)
    print("HARMONIC DRIFT - CONFIGURATION")
    print("="*60)
    
    sections = {
        'Audio': ['sample_rate', 'base_frequency'],
        'Evolution': ['steps_per_second', 'window_length'],
        'Debug': ['verbose'],
    }
    
    for section, keys in sections.items():
        print(f"\n{section}:")
        for key in keys:
            print(f"  {key}: {data[key]}")
    
    print("\n" + "="*60 + "\n")
