"""
API tests for the session lifecycle endpoints.

The app is built with create_app() and every store dependency is overridden
with fakes sharing one FakeDatabase, so completion runs end to end through
the real routers, use cases and error mapping.
"""
import pytest
from fastapi.testclient import TestClient

from api.deps import (
    get_audit_logger,
    get_cache_invalidator,
    get_current_user,
    get_metrics_journal,
    get_profile_repo,
    get_record_ledger,
    get_session_store,
    get_settings,
    get_uow_factory,
)
from application.exceptions import StoreError, TransientStoreError
from backend.main import create_app
from backend.settings import Settings
from domain.models import SessionStatus
from tests.fakes import create_completion_stack, make_record, make_session, make_set

# All tests in this module use TestClient - mark as integration tests
pytestmark = pytest.mark.integration

USER_ID = "user-1"


@pytest.fixture
def stack():
    return create_completion_stack()


@pytest.fixture
def settings():
    return Settings(environment="test", completion_timeout_seconds=5, _env_file=None)


@pytest.fixture
def client(stack, settings):
    app = create_app(settings=settings)
    app.dependency_overrides.update({
        get_settings: lambda: settings,
        get_current_user: lambda: USER_ID,
        get_session_store: lambda: stack.session_store,
        get_record_ledger: lambda: stack.record_ledger,
        get_metrics_journal: lambda: stack.metrics_journal,
        get_profile_repo: lambda: stack.profile_repo,
        get_uow_factory: lambda: stack.uow_factory,
        get_cache_invalidator: lambda: stack.cache_invalidator,
        get_audit_logger: lambda: stack.audit_logger,
    })
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestCompleteEndpoint:

    def test_complete_returns_metrics_and_records(self, client, stack):
        stack.db.seed_session(
            make_session(sets=[make_set(100, 1), make_set(80, 10)])
        )

        resp = client.post("/sessions/session-1/complete")

        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["session"]["status"] == "completed"
        assert data["session"]["metrics"]["total_volume"] == 900
        assert data["session"]["metrics"]["personal_records"] == 2
        assert {r["record_type"] for r in data["new_records"]} == {"weight", "volume"}
        metrics = {e["metric"] for e in data["progress_entries"]}
        assert metrics == {"bench-press_volume", "workout_duration", "workout_volume"}

    def test_unit_of_work_uses_configured_timeout(self, client, stack):
        stack.db.seed_session(make_session())

        client.post("/sessions/session-1/complete")

        assert stack.uow_factory.opened[0].timeout_seconds == 5

    def test_post_commit_notifications_run_as_background_tasks(self, client, stack):
        stack.db.seed_session(make_session())

        resp = client.post("/sessions/session-1/complete")

        assert resp.status_code == 200
        assert stack.audit_logger.event_names() == ["session.completed"]
        assert stack.cache_invalidator.calls == [(USER_ID, "session-1")]

    def test_complete_twice_conflicts(self, client, stack):
        stack.db.seed_session(make_session())
        client.post("/sessions/session-1/complete")

        resp = client.post("/sessions/session-1/complete")

        assert resp.status_code == 409
        detail = resp.json()["detail"]
        assert detail["error_code"] == "ALREADY_COMPLETED"
        assert detail["retryable"] is False

    def test_missing_session_is_404(self, client):
        resp = client.post("/sessions/missing/complete")

        assert resp.status_code == 404
        assert resp.json()["detail"]["error_code"] == "NOT_FOUND"

    def test_other_users_session_is_403(self, client, stack):
        stack.db.seed_session(make_session(user_id="user-2"))

        resp = client.post("/sessions/session-1/complete")

        assert resp.status_code == 403

    def test_invalid_sets_are_422_with_details(self, client, stack):
        stack.db.seed_session(make_session(sets=[make_set(-5, 10), make_set(80, 0)]))

        resp = client.post("/sessions/session-1/complete")

        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert detail["error_code"] == "VALIDATION_ERROR"
        assert len(detail["errors"]) == 2
        assert stack.db.get_session("session-1").status is SessionStatus.IN_PROGRESS

    def test_transient_failure_is_503_with_retry_after(self, client, stack):
        stack.db.seed_session(make_session())
        stack.db.fail_next_commit = TransientStoreError("serialization failure")

        resp = client.post("/sessions/session-1/complete")

        assert resp.status_code == 503
        assert resp.headers["retry-after"] == "1"
        assert resp.json()["detail"]["retryable"] is True

        retry = client.post("/sessions/session-1/complete")
        assert retry.status_code == 200


class TestAbortEndpoint:

    def test_abort(self, client, stack):
        stack.db.seed_session(make_session())

        resp = client.post("/sessions/session-1/abort")

        assert resp.status_code == 200
        assert resp.json()["session"]["status"] == "aborted"
        assert stack.db.records == {}

    def test_complete_after_abort_conflicts(self, client, stack):
        stack.db.seed_session(make_session())
        client.post("/sessions/session-1/abort")

        resp = client.post("/sessions/session-1/complete")

        assert resp.status_code == 409


class TestSessionQueries:

    def test_get_session(self, client, stack):
        stack.db.seed_session(make_session())

        resp = client.get("/sessions/session-1")

        assert resp.status_code == 200
        assert resp.json()["session"]["id"] == "session-1"

    def test_list_sessions(self, client, stack):
        stack.db.seed_session(make_session(session_id="a"))
        stack.db.seed_session(make_session(session_id="b", status=SessionStatus.COMPLETED))

        resp = client.get("/sessions", params={"status": "completed"})

        assert resp.status_code == 200
        data = resp.json()
        assert [s["id"] for s in data["sessions"]] == ["b"]
        assert data["total"] == 1

    def test_list_limit_is_bounded(self, client):
        resp = client.get("/sessions", params={"limit": 500})

        assert resp.status_code == 422

    def test_stats_is_not_a_session_id(self, client):
        resp = client.get("/sessions/stats", params={"period": "month"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["period"] == "month"
        assert data["session_count"] == 0

    def test_stats_rejects_unknown_period(self, client):
        resp = client.get("/sessions/stats", params={"period": "decade"})

        assert resp.status_code == 422


class TestRecordsAndProgress:

    def test_records_include_previous_value(self, client, stack):
        stack.db.seed_record(make_record(90))
        stack.db.seed_session(make_session(sets=[make_set(100, 1)]))
        client.post("/sessions/session-1/complete")

        resp = client.get("/records", params={"exercise_id": "bench-press"})

        assert resp.status_code == 200
        records = resp.json()["records"]
        weight = next(r for r in records if r["record_type"] == "weight")
        assert weight["value"] == 100
        assert weight["previous"]["value"] == 90

    def test_progress_entries_filtered_by_metric(self, client, stack):
        stack.db.seed_session(make_session())
        client.post("/sessions/session-1/complete")

        resp = client.get("/progress/entries", params={"metric": "workout_volume"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["count"] == 1
        assert data["entries"][0]["value"] == 800
        assert data["entries"][0]["unit"] == "kg"


class TestReadFailures:

    @pytest.mark.parametrize("path", ["/sessions", "/sessions/stats", "/sessions/session-1"])
    def test_transient_session_read_is_503(self, client, stack, path):
        stack.db.seed_session(make_session())
        stack.session_store.fail_on_read = TransientStoreError("connection reset")

        resp = client.get(path)

        assert resp.status_code == 503
        assert resp.headers["retry-after"] == "1"
        detail = resp.json()["detail"]
        assert detail["error_code"] == "TRANSACTION_ABORTED"
        assert detail["retryable"] is True

    def test_transient_records_read_is_503(self, client, stack):
        stack.record_ledger.fail_on_list = TransientStoreError("statement timeout")

        resp = client.get("/records")

        assert resp.status_code == 503
        assert resp.headers["retry-after"] == "1"

    def test_transient_progress_read_is_503(self, client, stack):
        stack.metrics_journal.fail_on_list = TransientStoreError("lock timeout")

        resp = client.get("/progress/entries")

        assert resp.status_code == 503
        assert resp.json()["detail"]["error_code"] == "TRANSACTION_ABORTED"

    def test_other_store_failure_is_internal_error(self, client, stack):
        stack.record_ledger.fail_on_list = StoreError("relation does not exist")

        resp = client.get("/records")

        assert resp.status_code == 500
        detail = resp.json()["detail"]
        assert detail["error_code"] == "INTERNAL_ERROR"
        assert detail["retryable"] is False
        assert "retry-after" not in resp.headers


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "environment": "test"}
