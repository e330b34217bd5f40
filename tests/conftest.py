# tests/conftest.py

"""
Pytest Fixtures - Shared test configuration for scoring, storage and API tests

Storage runs against FakeRedis, an in-memory stand-in for the handful of
redis-py commands the key-value store issues. The identity provider is a
MagicMock of AuthService.
"""

import fnmatch
import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock
from uuid import uuid4

from fastapi.testclient import TestClient

from app.core.dependencies import get_assessment_repository, get_auth_service
from app.main import app
from app.models.assessment import AssessmentRecord, ClusterScore, UserInfo
from app.models.auth import AuthenticatedUser
from app.repositories.assessment_repository import AssessmentRepository
from app.scoring.maturity_calculator import MaturityCalculator
from app.scoring.questions import get_clusters
from app.services.auth_service import AuthService
from app.services.kv_store import KVStore


# =============================================================================
# IN-MEMORY REDIS
# =============================================================================

class FakeRedis:
    """Minimal in-memory Redis: strings and lists, decode_responses=True semantics."""

    def __init__(self):
        self.data = {}
        self.lists = {}

    def ping(self):
        return True

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value
        return True

    def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None or self.lists.pop(key, None) is not None:
                removed += 1
        return removed

    def exists(self, *keys):
        return sum(1 for k in keys if k in self.data or k in self.lists)

    def mget(self, keys):
        return [self.data.get(k) for k in keys]

    def mset(self, mapping):
        self.data.update(mapping)
        return True

    def rpush(self, key, *values):
        self.lists.setdefault(key, []).extend(values)
        return len(self.lists[key])

    def lrange(self, key, start, end):
        items = self.lists.get(key, [])
        stop = len(items) if end == -1 else end + 1
        return items[start:stop]

    def scan_iter(self, match=None):
        for key in list(self.data):
            if match is None or fnmatch.fnmatchcase(key, match):
                yield key


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def kv_store(fake_redis):
    return KVStore(client=fake_redis, prefix="")


@pytest.fixture
def repo(kv_store):
    return AssessmentRepository(store=kv_store)


@pytest.fixture
def calculator():
    return MaturityCalculator(good_threshold=75, moderate_threshold=50)


# =============================================================================
# ANSWER FIXTURES
# =============================================================================

def build_answers(pick):
    """One answer per bank question; pick(question) chooses the option."""
    return [
        {"questionId": q.id, "value": pick(q).value}
        for c in get_clusters()
        for q in c.questions
    ]


def best_option(question):
    return max(question.options, key=lambda o: o.score)


def worst_option(question):
    return min(question.options, key=lambda o: o.score)


@pytest.fixture
def full_answers():
    """Every question answered with its top-scoring option (100%)."""
    return build_answers(best_option)


@pytest.fixture
def worst_answers():
    """Every question answered with its zero-scoring option (0%)."""
    return build_answers(worst_option)


@pytest.fixture
def user_info_data():
    return {
        "name": "Jane Doe",
        "email": "jane@acme.example",
        "companyName": "Acme Security Ltd",
        "location": "London",
    }


@pytest.fixture
def user_info(user_info_data):
    return UserInfo.model_validate(user_info_data)


@pytest.fixture
def stored_record(repo, calculator, user_info, full_answers):
    """A perfect-score assessment persisted in the fake store."""
    return repo.create(user_info, calculator.calculate(full_answers))


@pytest.fixture
def make_record():
    """Factory for AssessmentRecord rows used by dashboard and report tests."""
    base = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)

    def _make(company="Acme", pct=80, days=0, name="Alex", email="alex@example.com",
              location="Berlin", cluster_scores=None):
        return AssessmentRecord(
            id=uuid4(),
            user_name=name,
            user_email=email,
            company_name=company,
            location=location,
            answers=[],
            cluster_scores=cluster_scores or [
                ClusterScore(cluster_id="access-control", cluster_title="Access Control",
                             score=round(16 * pct / 100), max_score=16, percentage=pct),
            ],
            total_score=pct,
            max_total_score=100,
            overall_percentage=pct,
            submitted_at=base + timedelta(days=days),
        )

    return _make


# =============================================================================
# FASTAPI TEST CLIENT FIXTURES
# =============================================================================

@pytest.fixture
def auth_service():
    service = MagicMock(spec=AuthService)
    service.verify_token.return_value = AuthenticatedUser(
        id="user-1",
        email="assessor@acme.example",
        name="Assessor",
        company_name="Acme Security Ltd",
        location="London",
    )
    return service


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer test-token"}


@pytest.fixture
def client(repo, auth_service):
    """TestClient with storage and identity provider overridden."""
    app.dependency_overrides[get_assessment_repository] = lambda: repo
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
