"""
Personal record detection.

Pure decision function: given the running baseline for a (user, exercise)
and a completed set, decide whether the set is a new record. The detector
keeps no state; the caller passes the stored record values for the first set
of a session and the advanced baseline for every set after that.

Rules:
- 1 rep: the candidate is the weight, compared with the weight record
- more than 1 rep: the candidate is weight x reps, compared with the
  volume record
- strictly greater wins; ties are never records; a missing baseline
  counts as negative infinity
"""

from dataclasses import dataclass, replace
from typing import Optional

from domain.models import RecordType, WorkoutSet
from domain.services.calculators import calculate_volume


@dataclass(frozen=True)
class Baseline:
    """Best known weight and volume for one exercise."""

    weight: Optional[float] = None
    volume: Optional[float] = None

    def value_for(self, record_type: RecordType) -> Optional[float]:
        if record_type is RecordType.WEIGHT:
            return self.weight
        if record_type is RecordType.VOLUME:
            return self.volume
        raise ValueError(f"Baseline does not track {record_type.value} records")

    def advanced(self, decision: "RecordDecision") -> "Baseline":
        """Return the baseline after accepting ``decision``."""
        if not decision.is_record:
            return self
        if decision.record_type is RecordType.WEIGHT:
            return replace(self, weight=decision.new_value)
        return replace(self, volume=decision.new_value)


@dataclass(frozen=True)
class RecordDecision:
    is_record: bool
    record_type: RecordType
    new_value: float


def is_new_record(baseline: Baseline, workout_set: WorkoutSet) -> RecordDecision:
    """
    Decide whether a set beats the baseline.

    Args:
        baseline: Most current baseline for the set's exercise
        workout_set: A completed set

    Returns:
        RecordDecision with the record type the set competes in and its
        candidate value

    Raises:
        ValueError: If the set has fewer than one rep
    """
    if workout_set.reps < 1:
        raise ValueError(f"Cannot evaluate a set with {workout_set.reps} reps")

    if workout_set.reps == 1:
        record_type = RecordType.WEIGHT
        candidate = float(workout_set.weight)
    else:
        record_type = RecordType.VOLUME
        candidate = calculate_volume(workout_set.weight, workout_set.reps)

    current = baseline.value_for(record_type)
    is_record = current is None or candidate > current

    return RecordDecision(
        is_record=is_record,
        record_type=record_type,
        new_value=candidate,
    )
