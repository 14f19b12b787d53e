"""
CompleteSession Use Case.

Finalizes an in-progress workout session and, in one unit of work, derives
and persists:
1. the session aggregates (volume, reps, calories, record count)
2. personal record ledger entries
3. progress time-series entries

Two concurrent completions of the same session cannot both succeed: the
session is re-loaded inside the unit of work and its status is checked again
atomically at commit.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from application.exceptions import (
    ConcurrentCompletionError,
    ConditionalWriteError,
    InternalCompletionError,
    SessionNotFoundError,
    SetValidationError,
    TransactionAbortedError,
    TransientStoreError,
    WorkoutSessionError,
)
from application.ports import (
    AuditLogger,
    CacheInvalidator,
    MetricsJournal,
    ProfileRepository,
    RecordLedger,
    SessionStore,
    UnitOfWork,
    UnitOfWorkFactory,
)
from application.use_cases.session_guards import (
    PostCommitScheduler,
    load_open_session,
    notify_after_commit,
    run_now,
)
from domain.models import (
    ExerciseEntry,
    PersonalRecord,
    ProgressCategory,
    ProgressContext,
    ProgressEntry,
    ProgressSource,
    RecordKey,
    RecordType,
    SessionMetrics,
    SessionStatus,
    WorkoutSession,
)
from domain.services import (
    Baseline,
    calculate_volume,
    estimate_calories_burned,
    is_new_record,
    validate_session_sets,
)
from domain.services.calculators import REFERENCE_BODY_WEIGHT_KG

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

WEIGHT_UNIT = "kg"
DURATION_UNIT = "seconds"
WORKOUT_DURATION_METRIC = "workout_duration"
WORKOUT_VOLUME_METRIC = "workout_volume"

SESSION_COMPLETED_EVENT = "session.completed"


def exercise_volume_metric(exercise_id: str) -> str:
    """Progress metric key for an exercise's per-session volume."""
    return f"{exercise_id}_volume"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CompleteSessionResult:
    """Result of the CompleteSession use case execution."""

    success: bool
    session: Optional[WorkoutSession] = None
    new_records: List[PersonalRecord] = field(default_factory=list)
    progress_entries: List[ProgressEntry] = field(default_factory=list)
    error: Optional[WorkoutSessionError] = None

    @property
    def error_code(self) -> Optional[str]:
        return self.error.error_code if self.error else None


@dataclass
class _SetTally:
    """Running totals while walking the session's sets."""

    exercises: List[ExerciseEntry] = field(default_factory=list)
    exercise_volumes: List[Tuple[str, float]] = field(default_factory=list)
    total_volume: float = 0.0
    total_reps: int = 0
    personal_records: int = 0
    records: Dict[RecordKey, PersonalRecord] = field(default_factory=dict)


class CompletionCoordinator:
    """
    Use case for completing a workout session.

    Orchestrates the following workflow:
    1. Pre-check on a plain load: exists, owned, in progress, valid sets
    2. Open a unit of work and re-load the session inside it
    3. Walk completed sets, detecting records against a running baseline
    4. Compute session metrics and mark the session completed
    5. Append progress entries
    6. Conditionally update the session and commit
    7. Schedule cache invalidation and audit (best effort, after commit)

    Dependencies are injected via constructor for testability.

    Usage:
        >>> coordinator = CompletionCoordinator(
        ...     session_store=session_store,
        ...     record_ledger=record_ledger,
        ...     metrics_journal=metrics_journal,
        ...     uow_factory=uow_factory,
        ...     profile_repo=profile_repo,
        ... )
        >>> result = coordinator.complete("session-1", "user-1")
        >>> if result.success:
        ...     print(result.session.metrics.total_volume)
    """

    def __init__(
        self,
        session_store: SessionStore,
        record_ledger: RecordLedger,
        metrics_journal: MetricsJournal,
        uow_factory: UnitOfWorkFactory,
        profile_repo: ProfileRepository,
        *,
        cache_invalidator: Optional[CacheInvalidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        timeout_seconds: Optional[float] = None,
        default_body_weight_kg: float = REFERENCE_BODY_WEIGHT_KG,
        clock: Optional[Clock] = None,
        schedule: Optional[PostCommitScheduler] = None,
    ) -> None:
        """
        Initialize the coordinator with required dependencies.

        Args:
            session_store: Session persistence
            record_ledger: Personal record ledger
            metrics_journal: Progress time series
            uow_factory: Opens units of work on the backing store
            profile_repo: Body weight lookups for the calorie estimate
            cache_invalidator: Purged after a successful commit
            audit_logger: Notified after a successful commit
            timeout_seconds: Unit of work deadline (None = no deadline)
            default_body_weight_kg: Used when the profile has no body weight
            clock: Returns the current time (UTC); injectable for tests
            schedule: Runs the post-commit notifications; inline by default,
                BackgroundTasks.add_task behind the HTTP layer
        """
        self._session_store = session_store
        self._record_ledger = record_ledger
        self._metrics_journal = metrics_journal
        self._uow_factory = uow_factory
        self._profile_repo = profile_repo
        self._cache_invalidator = cache_invalidator
        self._audit_logger = audit_logger
        self._timeout_seconds = timeout_seconds
        self._default_body_weight_kg = default_body_weight_kg
        self._clock = clock or _utcnow
        self._schedule = schedule or run_now

    def complete(self, session_id: str, user_id: str) -> CompleteSessionResult:
        """
        Complete a session.

        Args:
            session_id: Session to complete
            user_id: Requesting user, must own the session

        Returns:
            CompleteSessionResult with the completed session, or the
            WorkoutSessionError that stopped it
        """
        try:
            session = load_open_session(self._session_store, session_id, user_id)

            validation_errors = validate_session_sets(session)
            if validation_errors:
                raise SetValidationError(
                    "Session contains invalid sets", errors=validation_errors
                )

            body_weight_kg = self._body_weight_kg(user_id)
            result = self._complete_in_unit_of_work(session_id, body_weight_kg)

        except WorkoutSessionError as e:
            logger.warning(
                "Completion of session %s rejected (%s): %s",
                session_id,
                e.error_code,
                e.message,
            )
            return CompleteSessionResult(success=False, error=e)

        except Exception as e:
            logger.exception(f"Completing session {session_id} failed: {e}")
            return CompleteSessionResult(
                success=False,
                error=InternalCompletionError("Failed to complete workout session"),
            )

        completed = result.session
        logger.info(
            f"Session {completed.id} completed: volume={completed.metrics.total_volume} "
            f"reps={completed.metrics.total_reps} "
            f"records={completed.metrics.personal_records}"
        )
        self._schedule(
            notify_after_commit,
            SESSION_COMPLETED_EVENT,
            completed,
            cache_invalidator=self._cache_invalidator,
            audit_logger=self._audit_logger,
            details={
                "total_volume": completed.metrics.total_volume,
                "personal_records": completed.metrics.personal_records,
            },
        )
        return result

    def _body_weight_kg(self, user_id: str) -> float:
        body_weight = self._profile_repo.get_body_weight_kg(user_id)
        if body_weight is None or body_weight <= 0:
            return self._default_body_weight_kg
        return body_weight

    def _complete_in_unit_of_work(
        self,
        session_id: str,
        body_weight_kg: float,
    ) -> CompleteSessionResult:
        try:
            with self._uow_factory.begin(timeout_seconds=self._timeout_seconds) as uow:
                session = self._session_store.get(session_id, uow=uow)
                if session is None:
                    raise SessionNotFoundError(f"Session {session_id} not found")
                if session.status is not SessionStatus.IN_PROGRESS:
                    raise ConcurrentCompletionError(
                        f"Session {session_id} was {session.status.value} by another request"
                    )

                now = self._clock()
                tally = self._tally_sets(uow, session, now)

                duration_seconds = session.elapsed_seconds(now)
                metrics = SessionMetrics(
                    total_volume=tally.total_volume,
                    total_reps=tally.total_reps,
                    personal_records=tally.personal_records,
                    calories_burned=estimate_calories_burned(
                        tally.total_volume,
                        duration_seconds / 60,
                        body_weight_kg,
                    ),
                )
                completed = session.complete(
                    end_time=now,
                    exercises=tally.exercises,
                    metrics=metrics,
                )

                entries = self._append_progress(uow, completed, tally, now)

                self._session_store.update_conditionally(
                    uow,
                    completed,
                    expected_status=SessionStatus.IN_PROGRESS,
                )
                uow.commit()

        except ConditionalWriteError as e:
            raise ConcurrentCompletionError(
                f"Session {session_id} was completed by another request"
            ) from e
        except TransientStoreError as e:
            raise TransactionAbortedError(
                f"Completion of session {session_id} aborted, safe to retry: {e}"
            ) from e

        return CompleteSessionResult(
            success=True,
            session=completed,
            new_records=list(tally.records.values()),
            progress_entries=entries,
        )

    def _tally_sets(
        self,
        uow: UnitOfWork,
        session: WorkoutSession,
        now: datetime,
    ) -> _SetTally:
        tally = _SetTally()
        baselines: Dict[str, Baseline] = {}

        for entry in session.exercises:
            baseline = baselines.get(entry.exercise_id)
            if baseline is None:
                baseline = self._load_baseline(uow, session.user_id, entry.exercise_id)

            sets = []
            exercise_volume = 0.0
            for workout_set in entry.sets:
                if not workout_set.completed:
                    sets.append(workout_set.model_copy(update={"is_personal_record": False}))
                    continue

                volume = calculate_volume(workout_set.weight, workout_set.reps)
                exercise_volume += volume
                tally.total_volume += volume
                tally.total_reps += workout_set.reps

                decision = is_new_record(baseline, workout_set)
                if decision.is_record:
                    record = self._record_ledger.write(
                        uow,
                        PersonalRecord(
                            user_id=session.user_id,
                            exercise_id=entry.exercise_id,
                            record_type=decision.record_type,
                            value=decision.new_value,
                            achieved_at=now,
                            session_id=session.id,
                        ),
                    )
                    tally.records[record.key] = record
                    tally.personal_records += 1
                    baseline = baseline.advanced(decision)

                sets.append(
                    workout_set.model_copy(update={"is_personal_record": decision.is_record})
                )

            baselines[entry.exercise_id] = baseline
            tally.exercises.append(entry.model_copy(update={"sets": sets}))
            tally.exercise_volumes.append((entry.exercise_id, exercise_volume))

        return tally

    def _load_baseline(self, uow: UnitOfWork, user_id: str, exercise_id: str) -> Baseline:
        weight = self._record_ledger.get_current(uow, user_id, exercise_id, RecordType.WEIGHT)
        volume = self._record_ledger.get_current(uow, user_id, exercise_id, RecordType.VOLUME)
        return Baseline(
            weight=weight.value if weight else None,
            volume=volume.value if volume else None,
        )

    def _append_progress(
        self,
        uow: UnitOfWork,
        session: WorkoutSession,
        tally: _SetTally,
        now: datetime,
    ) -> List[ProgressEntry]:
        entries = [
            ProgressEntry(
                user_id=session.user_id,
                category=ProgressCategory.EXERCISE,
                metric=exercise_volume_metric(exercise_id),
                recorded_at=now,
                value=volume,
                unit=WEIGHT_UNIT,
                context=ProgressContext(session_id=session.id, exercise_id=exercise_id),
                source=ProgressSource.WORKOUT,
            )
            for exercise_id, volume in tally.exercise_volumes
        ]

        # Session-level performance entries
        context = ProgressContext(session_id=session.id)
        entries.append(
            ProgressEntry(
                user_id=session.user_id,
                category=ProgressCategory.PERFORMANCE,
                metric=WORKOUT_DURATION_METRIC,
                recorded_at=now,
                value=session.duration_seconds or 0,
                unit=DURATION_UNIT,
                context=context,
                source=ProgressSource.WORKOUT,
            )
        )
        entries.append(
            ProgressEntry(
                user_id=session.user_id,
                category=ProgressCategory.PERFORMANCE,
                metric=WORKOUT_VOLUME_METRIC,
                recorded_at=now,
                value=session.metrics.total_volume,
                unit=WEIGHT_UNIT,
                context=context,
                source=ProgressSource.WORKOUT,
            )
        )

        return [self._metrics_journal.append(uow, entry) for entry in entries]
