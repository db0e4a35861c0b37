"""
Current Profiles

Applied cell current as a function of simulation time.
Sign convention: positive = discharge, negative = charge.
"""

import math
from typing import Any, Dict


class CurrentProfile:
    """Base class: current_at(time_s) returns the applied current in A."""

    def current_at(self, time_s: float) -> float:
        raise NotImplementedError

    def __call__(self, time_s: float) -> float:
        return self.current_at(time_s)


class ConstantCurrentProfile(CurrentProfile):
    """Same current at every time."""

    def __init__(self, current_a: float):
        self.current_a = float(current_a)

    def current_at(self, time_s: float) -> float:
        return self.current_a

    def __repr__(self) -> str:
        return f"ConstantCurrentProfile(current_a={self.current_a})"


class PulsedLoadProfile(CurrentProfile):
    """
    Repeating load pulses.

    Each cycle of period_s draws current_a from pulse_delay_s through
    pulse_delay_s + pulse_duration_s (both bounds inclusive), and zero otherwise.

    Parameters:
        current_a: Pulse current in A (default: 1.8)
        period_s: Time between pulse starts in s (default: 17 minutes)
        pulse_duration_s: Pulse length in s (default: 5 minutes)
        pulse_delay_s: Offset of each pulse into its cycle in s (default: 10)
    """

    def __init__(
        self,
        current_a: float = 1.8,
        period_s: float = 17.0 * 60.0,
        pulse_duration_s: float = 5.0 * 60.0,
        pulse_delay_s: float = 10.0
    ):
        if not period_s > 0.0:
            raise ValueError(f"period_s must be positive, got {period_s}")
        if pulse_duration_s < 0.0 or pulse_delay_s < 0.0:
            raise ValueError("pulse_duration_s and pulse_delay_s must be non-negative")

        self.current_a = float(current_a)
        self.period_s = float(period_s)
        self.pulse_duration_s = float(pulse_duration_s)
        self.pulse_delay_s = float(pulse_delay_s)

    def current_at(self, time_s: float) -> float:
        time_cycle = math.fmod(time_s, self.period_s)
        if time_cycle < self.pulse_delay_s or time_cycle > self.pulse_delay_s + self.pulse_duration_s:
            return 0.0
        return self.current_a

    def __repr__(self) -> str:
        return (
            f"PulsedLoadProfile(current_a={self.current_a}, period_s={self.period_s}, "
            f"pulse_duration_s={self.pulse_duration_s}, pulse_delay_s={self.pulse_delay_s})"
        )


PROFILE_TYPES = {
    'constant': ConstantCurrentProfile,
    'pulsed': PulsedLoadProfile,
}


def create_current_profile(config: Dict[str, Any]) -> CurrentProfile:
    """
    Create a current profile from a configuration mapping.

    Args:
        config: Mapping with 'type' ('constant' or 'pulsed', default 'pulsed')
                and the profile's keyword arguments

    Returns:
        Configured CurrentProfile

    Raises:
        ValueError: Unknown profile type
    """
    profile_type = str(config.get('type', 'pulsed')).lower()
    if profile_type not in PROFILE_TYPES:
        raise ValueError(f"Unknown profile type: {profile_type}. Must be one of {sorted(PROFILE_TYPES)}")

    if profile_type == 'constant':
        return ConstantCurrentProfile(current_a=float(config.get('current_a', 0.0)))

    kwargs = {}
    for key in ('current_a', 'period_s', 'pulse_duration_s', 'pulse_delay_s'):
        if key in config:
            kwargs[key] = float(config[key])
    return PulsedLoadProfile(**kwargs)
