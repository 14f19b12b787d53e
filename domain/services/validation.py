"""
Business validation for logged sets.

Runs before a session is completed so that malformed set data is rejected
without touching the store.
"""

import math
from typing import List

from domain.models import WorkoutSession

MIN_RPE = 1.0
MAX_RPE = 10.0


def validate_session_sets(session: WorkoutSession) -> List[str]:
    """
    Validate every exercise entry and set in a session.

    Args:
        session: Session about to be completed

    Returns:
        List of validation error messages (empty if valid)
    """
    errors: List[str] = []

    for i, entry in enumerate(session.exercises):
        label = f"Exercise {i + 1}"
        if not entry.exercise_id or not entry.exercise_id.strip():
            errors.append(f"{label} is missing an exercise id")

        for j, workout_set in enumerate(entry.sets):
            where = f"{label}, set {j + 1}"

            if not math.isfinite(workout_set.weight):
                errors.append(f"{where}: weight must be a finite number")
            elif workout_set.weight < 0:
                errors.append(f"{where}: weight cannot be negative")

            if workout_set.reps < 0:
                errors.append(f"{where}: reps cannot be negative")
            elif workout_set.reps == 0 and workout_set.completed:
                errors.append(f"{where}: a completed set needs at least one rep")

            if workout_set.duration_seconds is not None and workout_set.duration_seconds < 0:
                errors.append(f"{where}: duration cannot be negative")

            if workout_set.rpe is not None and not MIN_RPE <= workout_set.rpe <= MAX_RPE:
                errors.append(f"{where}: rpe must be between 1 and 10")

    return errors
