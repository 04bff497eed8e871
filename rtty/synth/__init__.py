from .oscillator import Oscillator, OscillatorState
from .tables import AMPLITUDE_MAX, build_table

__all__ = [
    "AMPLITUDE_MAX",
    "Oscillator",
    "OscillatorState",
    "build_table",
]
