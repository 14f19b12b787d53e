"""
Domain services: pure functions over domain models.

- pr_detector: personal record decisions
- calculators: volume and calorie heuristics
- validation: business validation of logged sets
"""

from domain.services.calculators import (
    calculate_volume,
    estimate_calories_burned,
)
from domain.services.pr_detector import Baseline, RecordDecision, is_new_record
from domain.services.validation import validate_session_sets

__all__ = [
    "Baseline",
    "RecordDecision",
    "is_new_record",
    "calculate_volume",
    "estimate_calories_burned",
    "validate_session_sets",
]
