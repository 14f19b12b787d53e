"""
Unit tests for SessionQueryService.
"""

from datetime import timedelta

import pytest

from domain.models import SessionStatus
from tests.fakes import SESSION_END, SESSION_START, create_completion_stack, make_session, make_set

USER_ID = "user-1"


@pytest.fixture
def stack():
    return create_completion_stack()


def _seed_completed(stack, session_id, *, days_ago, sets):
    start = SESSION_START - timedelta(days=days_ago)
    stack.db.seed_session(make_session(session_id=session_id, sets=sets, start_time=start))
    stack.coordinator(clock=lambda: start + timedelta(minutes=30)).complete(session_id, USER_ID)


class TestGetSession:

    @pytest.mark.unit
    def test_get_own_session(self, stack):
        stack.db.seed_session(make_session())

        result = stack.query_service().get_session("session-1", USER_ID)

        assert result.success is True
        assert result.session.id == "session-1"

    @pytest.mark.unit
    def test_get_other_users_session(self, stack):
        stack.db.seed_session(make_session())

        result = stack.query_service().get_session("session-1", "intruder")

        assert result.success is False
        assert result.error.error_code == "FORBIDDEN"

    @pytest.mark.unit
    def test_get_missing_session(self, stack):
        result = stack.query_service().get_session("missing", USER_ID)

        assert result.error.error_code == "NOT_FOUND"


class TestListSessions:

    @pytest.mark.unit
    def test_newest_first_with_total(self, stack):
        for i in range(3):
            stack.db.seed_session(
                make_session(
                    session_id=f"s-{i}",
                    start_time=SESSION_START + timedelta(days=i),
                )
            )
        stack.db.seed_session(make_session(session_id="other", user_id="user-2"))

        result = stack.query_service().list_sessions(USER_ID, limit=2)

        assert [s.id for s in result.sessions] == ["s-2", "s-1"]
        assert result.total == 3

    @pytest.mark.unit
    def test_filter_by_status(self, stack):
        stack.db.seed_session(make_session(session_id="open"))
        stack.db.seed_session(make_session(session_id="done", status=SessionStatus.COMPLETED))

        result = stack.query_service().list_sessions(USER_ID, status=SessionStatus.COMPLETED)

        assert [s.id for s in result.sessions] == ["done"]

    @pytest.mark.unit
    def test_offset(self, stack):
        for i in range(3):
            stack.db.seed_session(
                make_session(session_id=f"s-{i}", start_time=SESSION_START + timedelta(days=i))
            )

        result = stack.query_service().list_sessions(USER_ID, limit=2, offset=2)

        assert [s.id for s in result.sessions] == ["s-0"]
        assert result.offset == 2


class TestSessionStats:

    @pytest.mark.unit
    def test_week_stats_cover_recent_completed_sessions(self, stack):
        _seed_completed(stack, "recent-1", days_ago=1, sets=[make_set(80, 10)])
        _seed_completed(stack, "recent-2", days_ago=3, sets=[make_set(100, 5)])
        _seed_completed(stack, "old", days_ago=20, sets=[make_set(100, 10)])
        stack.db.seed_session(make_session(session_id="open"))

        stats = stack.query_service().get_stats(USER_ID, "week")

        assert stats.session_count == 2
        assert stats.total_volume == 1300.0
        assert stats.total_duration_seconds == 2 * 30 * 60
        assert stats.average_duration_seconds == 30 * 60
        assert stats.personal_records == 1
        assert stats.since == SESSION_END - timedelta(days=7)

    @pytest.mark.unit
    def test_month_includes_older_sessions(self, stack):
        _seed_completed(stack, "recent", days_ago=1, sets=[make_set(80, 10)])
        _seed_completed(stack, "old", days_ago=20, sets=[make_set(100, 10)])

        stats = stack.query_service().get_stats(USER_ID, "month")

        assert stats.session_count == 2

    @pytest.mark.unit
    def test_empty_period(self, stack):
        stats = stack.query_service().get_stats(USER_ID, "year")

        assert stats.session_count == 0
        assert stats.average_duration_seconds == 0.0

    @pytest.mark.unit
    def test_invalid_period(self, stack):
        with pytest.raises(ValueError):
            stack.query_service().get_stats(USER_ID, "decade")
