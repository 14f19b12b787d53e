"""
Training calculations shared by the completion engine.
"""

# Reference body weight for the calorie heuristic
REFERENCE_BODY_WEIGHT_KG = 75.0

BASE_CALORIES_PER_MINUTE = 5.0
MAX_INTENSITY_FACTOR = 1.5
VOLUME_INTENSITY_DIVISOR = 5000.0


def calculate_volume(weight: float, reps: int) -> float:
    """Volume of one set: weight x reps."""
    return float(weight) * reps


def estimate_calories_burned(
    total_volume: float,
    duration_minutes: float,
    body_weight_kg: float,
) -> int:
    """
    Rough calorie estimate for a strength session.

    This is a declared heuristic, not a physiological model:
    5 kcal per minute, scaled up to 1.5x by session volume (volume / 5000
    as the intensity proxy) and linearly by body weight relative to 75 kg.

    Args:
        total_volume: Session volume (kg)
        duration_minutes: Session duration in minutes
        body_weight_kg: User body weight

    Returns:
        Estimated calories, rounded to the nearest integer (never negative)
    """
    if duration_minutes <= 0 or body_weight_kg <= 0:
        return 0

    intensity_factor = min(
        MAX_INTENSITY_FACTOR, 1 + max(total_volume, 0.0) / VOLUME_INTENSITY_DIVISOR
    )
    weight_factor = body_weight_kg / REFERENCE_BODY_WEIGHT_KG

    return round(
        BASE_CALORIES_PER_MINUTE * duration_minutes * intensity_factor * weight_factor
    )
