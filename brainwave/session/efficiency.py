"""
Session Efficiency Scorer

One concentration break is expected per 30 minutes. Every break beyond
that costs 10 points; the result is clamped to [0, 100].
"""

SECONDS_PER_EXPECTED_BREAK = 30 * 60
PENALTY_PER_EXCESS_BREAK = 10


def expected_breaks(total_duration: int) -> int:
    return total_duration // SECONDS_PER_EXPECTED_BREAK


def score_efficiency(total_duration: int, concentration_breaks: int) -> int:
    """
    Efficiency score for a completed session.

    Args:
        total_duration: Session length in seconds
        concentration_breaks: Lapses recorded during the session

    Returns:
        Integer score in [0, 100]
    """
    excess = concentration_breaks - expected_breaks(total_duration)
    score = 100 - excess * PENALTY_PER_EXCESS_BREAK
    return max(0, min(100, score))
