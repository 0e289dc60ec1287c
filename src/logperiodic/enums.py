"""Type-safe enums for the antenna calculator."""

from enum import Enum


class FrequencyUnit(Enum):
    """Frequency unit for seed input and result display"""
    HZ = "Hz"
    KHZ = "kHz"
    MHZ = "MHz"
    GHZ = "GHz"

    @property
    def multiplier(self) -> float:
        """Hertz per one of this unit."""
        return _FREQUENCY_MULTIPLIERS[self]


_FREQUENCY_MULTIPLIERS = {
    FrequencyUnit.HZ: 1.0,
    FrequencyUnit.KHZ: 1e3,
    FrequencyUnit.MHZ: 1e6,
    FrequencyUnit.GHZ: 1e9,
}


class InputMode(Enum):
    """Which seed value starts the radius recurrence"""
    RADIUS = "r1"      # Inner radius of the first tooth pair
    FREQUENCY = "f1"   # Resonant frequency of the first tooth pair


class Quadrant(Enum):
    """Angular sector a shape occupies.

    Q1 spans [0, alpha], BETA spans [alpha, 90], Q3 spans [90, 90 + alpha].
    The *_MIRROR members are the same sectors rotated by 180 degrees.
    """
    Q1 = "Q1"
    Q3 = "Q3"
    BETA = "beta"
    Q1_MIRROR = "Q1-mirror"
    Q3_MIRROR = "Q3-mirror"
    BETA_MIRROR = "beta-mirror"
