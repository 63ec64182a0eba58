"""Half-up rounding shared by the profile, efficiency and stats layers."""

import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, ties rounding up.

    Python's round() uses banker's rounding (round(10.5) == 10); focus
    numbers must round 10.5 to 11.
    """
    return int(math.floor(value + 0.5))


def round_half_up_to(value: float, decimals: int) -> float:
    """Half-up rounding to a fixed number of decimals."""
    factor = 10 ** decimals
    return round_half_up(value * factor) / factor
