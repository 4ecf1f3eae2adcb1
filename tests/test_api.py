"""Tests for the FastAPI application."""

import pytest
from unittest.mock import Mock
from fastapi.testclient import TestClient

from daily_connections import main
from daily_connections.database import CacheManager, CachedPuzzleRepository, JsonPuzzleStore
from daily_connections.pipeline import PuzzleIntakePipeline

from factories import make_document, filler_groups, sample_puzzle, SAMPLE_GROUPS


class TestApi:
    """Tests for the HTTP endpoints backed by a temporary JSON store."""

    @pytest.fixture
    def store(self, tmp_path):
        store = JsonPuzzleStore(str(tmp_path / "puzzles.json"))
        store.save(sample_puzzle("2025-01-01"))
        return store

    @pytest.fixture
    def client(self, store):
        pipeline = PuzzleIntakePipeline(repository=store)
        main.app.dependency_overrides[main.get_repository] = lambda: store
        main.app.dependency_overrides[main.get_intake_pipeline] = lambda: pipeline
        yield TestClient(main.app)
        main.app.dependency_overrides.clear()

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_detailed_health(self, client):
        response = client.get("/health/detailed")

        assert response.status_code == 200
        assert response.json()["components"] == {"repository": True}

    def test_validate_unique_puzzle(self, client):
        response = client.post("/api/v1/puzzles/validate", json={
            "puzzle": make_document("2025-01-02", filler_groups("u", 4))
        })

        body = response.json()
        assert response.status_code == 200
        assert body["valid"] is True
        assert body["stage"] == "uniqueness"
        assert body["errors"] == []

    def test_validate_with_policy(self, client):
        document = make_document("2025-01-02", [(["שמש", "a", "b", "c"], "חדש")] + filler_groups("u", 3))

        response = client.post("/api/v1/puzzles/validate", json={
            "puzzle": document,
            "policy": {"allow_word_reuse": False}
        })

        body = response.json()
        assert body["valid"] is False
        assert body["duplicate_words"] == [{"word": "שמש", "used_in_dates": ["2025-01-01"]}]

    def test_validate_structure_failure(self, client):
        document = make_document("2025-01-02", filler_groups("u", 4))
        document["words"] = document["words"][:10]

        response = client.post("/api/v1/puzzles/validate", json={"puzzle": document})

        assert response.status_code == 400
        assert response.json()["stage"] == "structure"
        assert "Must have exactly 16 words (found 10)" in response.json()["issues"]

    def test_validate_rejects_non_string_words(self, client):
        document = make_document("2025-01-02", filler_groups("u", 4))
        document["words"][0] = ["nested"]

        response = client.post("/api/v1/puzzles/validate", json={"puzzle": document})

        assert response.status_code == 400
        assert "Words must be strings" in response.json()["issues"]

    def test_submit_creates_puzzle(self, client, store):
        response = client.post("/api/v1/puzzles", json={
            "puzzle": make_document("2025-01-02", filler_groups("u", 4))
        })

        assert response.status_code == 201
        assert response.json()["saved"] is True
        assert store.exists("2025-01-02")

    def test_submit_duplicate_conflicts(self, client, store):
        response = client.post("/api/v1/puzzles", json={
            "puzzle": make_document("2025-01-03", SAMPLE_GROUPS)
        })

        assert response.status_code == 409
        assert response.json()["saved"] is False
        assert response.json()["validation"]["exact_duplicate_date"] == "2025-01-01"
        assert not store.exists("2025-01-03")

    def test_force_replaces_existing_date(self, client, store):
        response = client.post("/api/v1/puzzles", json={
            "puzzle": make_document("2025-01-01", filler_groups("r", 4)),
            "force": True
        })

        assert response.status_code == 200
        assert response.json()["created"] is False
        assert store.get_by_date("2025-01-01").words[0] == "r0-0"

    def test_get_puzzle(self, client):
        response = client.get("/api/v1/puzzles/2025-01-01")

        assert response.status_code == 200
        assert response.json()["puzzle"]["groups"][1]["explanation"] == "גרמי שמיים"

    def test_get_missing_puzzle(self, client):
        response = client.get("/api/v1/puzzles/2030-01-01")

        assert response.status_code == 404
        assert response.json()["status_code"] == 404

    def test_puzzle_exists(self, client):
        assert client.get("/api/v1/puzzles/2025-01-01/exists").json()["exists"] is True
        assert client.get("/api/v1/puzzles/2030-01-01/exists").json()["exists"] is False

    def test_statistics(self, client):
        response = client.get("/api/v1/statistics")

        assert response.status_code == 200
        assert response.json()["statistics"]["total_puzzles"] == 1

    def test_statistics_rejects_bad_limit(self, client):
        assert client.get("/api/v1/statistics?limit=0").status_code == 400

    def test_pipeline_status(self, client):
        response = client.get("/api/v1/pipeline/status")

        assert response.json()["pipeline_status"]["repository"]["type"] == "JsonPuzzleStore"

    def test_clear_cache_requires_cache(self, client):
        assert client.post("/api/v1/cache/clear").status_code == 503


class TestApiWithCache:
    """Tests for endpoints that depend on the Redis cache."""

    def test_clear_cache(self, tmp_path):
        cache = Mock(spec=CacheManager)
        cache.clear_all.return_value = True
        cache.health_check.return_value = False
        repository = CachedPuzzleRepository(JsonPuzzleStore(str(tmp_path / "p.json")), cache)
        main.app.dependency_overrides[main.get_repository] = lambda: repository

        try:
            client = TestClient(main.app)

            assert client.post("/api/v1/cache/clear").status_code == 200
            cache.clear_all.assert_called_once()

            health = client.get("/health/detailed")
            assert health.status_code == 503
            assert health.json()["components"]["cache"] is False
        finally:
            main.app.dependency_overrides.clear()

    def test_clear_cache_fails_when_redis_is_down(self, tmp_path):
        redis_client = Mock()
        redis_client.scan_iter.side_effect = ConnectionError("down")
        cache = CacheManager(redis_client=redis_client)
        repository = CachedPuzzleRepository(JsonPuzzleStore(str(tmp_path / "p.json")), cache)
        main.app.dependency_overrides[main.get_repository] = lambda: repository

        try:
            response = TestClient(main.app).post("/api/v1/cache/clear")

            assert response.status_code == 500
            assert response.json()["error"] == "Failed to clear cache"
        finally:
            main.app.dependency_overrides.clear()


def test_unavailable_components_return_503():
    client = TestClient(main.app)

    response = client.get("/api/v1/puzzles/2025-01-01")

    assert response.status_code == 503
    assert response.json()["error"] == "Puzzle repository not available"
