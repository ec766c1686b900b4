"""Tests for scheduler API endpoints."""

import sys
import tempfile
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fastapi.testclient import TestClient
from server.app import app
from server.config import Settings
from server.dependencies import get_settings, get_store
from srs.storage import ReviewStateStore


# ============================================================================
# Helpers
# ============================================================================

INITIAL = {
    'easiness_factor': 2.5,
    'interval_days': 0,
    'repetition_count': 0,
    'next_review_at': '2026-01-05',
    'last_reviewed_at': None,
    'lapse_count': 0,
    'review_count': 0,
    'status': 'new',
}


def _make_settings(tmp_dir: Path, **kwargs) -> Settings:
    return Settings(store_path=tmp_dir / 'review_states.jsonl', **kwargs)


def _client_for(settings: Settings, store: ReviewStateStore = None) -> TestClient:
    app.dependency_overrides[get_settings] = lambda: settings
    if store is not None:
        app.dependency_overrides[get_store] = lambda: store
    return TestClient(app)


# ============================================================================
# Tests: stateless engine
# ============================================================================

def test_initial_state():
    with tempfile.TemporaryDirectory() as tmp:
        try:
            client = _client_for(_make_settings(Path(tmp)))
            resp = client.get("/schedule/initial", params={"now": "2026-01-05T09:00:00Z"})
            assert resp.status_code == 200
            assert resp.json() == INITIAL
        finally:
            app.dependency_overrides.clear()


def test_initial_state_uses_configured_ease():
    with tempfile.TemporaryDirectory() as tmp:
        try:
            client = _client_for(_make_settings(Path(tmp), initial_ease=2.0))
            resp = client.get("/schedule/initial")
            assert resp.json()['easiness_factor'] == 2.0
        finally:
            app.dependency_overrides.clear()


def test_next_state_scenario():
    with tempfile.TemporaryDirectory() as tmp:
        try:
            client = _client_for(_make_settings(Path(tmp)))
            resp = client.post("/schedule/next", json={
                "state": INITIAL, "rating": 4, "reviewed_at": "2026-01-05T09:00:00Z",
            })
            assert resp.status_code == 200
            s1 = resp.json()
            assert (s1['interval_days'], s1['repetition_count']) == (1, 1)
            assert s1['next_review_at'] == '2026-01-06'

            s2 = client.post("/schedule/next", json={
                "state": s1, "rating": 4, "reviewed_at": "2026-01-06T09:00:00Z",
            }).json()
            assert (s2['interval_days'], s2['next_review_at']) == (6, '2026-01-12')

            s3 = client.post("/schedule/next", json={
                "state": s2, "rating": 2, "reviewed_at": "2026-01-12T09:00:00Z",
            }).json()
            assert (s3['interval_days'], s3['repetition_count']) == (1, 0)
            assert s3['easiness_factor'] == 2.18
            assert s3['next_review_at'] == '2026-01-13'
        finally:
            app.dependency_overrides.clear()


def test_next_state_invalid_rating():
    with tempfile.TemporaryDirectory() as tmp:
        try:
            client = _client_for(_make_settings(Path(tmp)))
            resp = client.post("/schedule/next", json={"state": INITIAL, "rating": 6})
            assert resp.status_code == 422
            assert '0-5' in resp.json()['detail']
        finally:
            app.dependency_overrides.clear()


def test_next_state_malformed_state():
    with tempfile.TemporaryDirectory() as tmp:
        try:
            client = _client_for(_make_settings(Path(tmp)))
            bad = dict(INITIAL, easiness_factor=0)
            resp = client.post("/schedule/next", json={"state": bad, "rating": 4})
            assert resp.status_code == 422
        finally:
            app.dependency_overrides.clear()


def test_preview_matches_next():
    with tempfile.TemporaryDirectory() as tmp:
        try:
            client = _client_for(_make_settings(Path(tmp)))
            now = "2026-01-05T09:00:00Z"
            body = client.post("/schedule/preview", json={"state": INITIAL, "now": now}).json()
            assert [p['rating'] for p in body['previews']] == [0, 1, 2, 3, 4, 5]
            for p in body['previews']:
                committed = client.post("/schedule/next", json={
                    "state": INITIAL, "rating": p['rating'], "reviewed_at": now,
                }).json()
                assert p['state'] == committed
                assert p['due_at'] == committed['next_review_at']
                assert p['label'] == '1d'
        finally:
            app.dependency_overrides.clear()


# ============================================================================
# Tests: stored cards
# ============================================================================

def test_card_lifecycle():
    with tempfile.TemporaryDirectory() as tmp:
        settings = _make_settings(Path(tmp))
        store = ReviewStateStore(settings.store_path)
        try:
            client = _client_for(settings, store)
            resp = client.post("/cards/c1")
            assert resp.status_code == 200
            assert resp.json()['relative_due'] == 'today'

            resp = client.post("/cards/c1/review", json={
                "rating": 5, "reviewed_at": "2026-01-05T09:00:00Z",
            })
            assert resp.status_code == 200
            body = resp.json()
            assert body['state']['interval_days'] == 1
            assert body['relative_due'] == 'tomorrow'

            resp = client.get("/cards/c1")
            assert resp.json()['state'] == body['state']

            resp = client.get("/cards/c1/preview", params={"now": "2026-01-06T09:00:00Z"})
            labels = {p['name']: p['label'] for p in resp.json()['previews']}
            assert labels['perfect'] == '6d'
            assert labels['blackout'] == '1d'

            assert client.delete("/cards/c1").status_code == 204
            assert client.get("/cards/c1").status_code == 404
        finally:
            app.dependency_overrides.clear()


def test_card_not_found():
    with tempfile.TemporaryDirectory() as tmp:
        settings = _make_settings(Path(tmp))
        store = ReviewStateStore(settings.store_path)
        try:
            client = _client_for(settings, store)
            assert client.get("/cards/nope").status_code == 404
            assert client.get("/cards/nope/preview").status_code == 404
            assert client.post("/cards/nope/review", json={"rating": 4}).status_code == 404
            assert client.delete("/cards/nope").status_code == 404
        finally:
            app.dependency_overrides.clear()


def test_card_review_invalid_rating():
    with tempfile.TemporaryDirectory() as tmp:
        settings = _make_settings(Path(tmp))
        store = ReviewStateStore(settings.store_path)
        try:
            client = _client_for(settings, store)
            client.post("/cards/c1")
            resp = client.post("/cards/c1/review", json={"rating": -1})
            assert resp.status_code == 422
            assert store.get_state('c1').review_count == 0
        finally:
            app.dependency_overrides.clear()


def test_due_cards():
    with tempfile.TemporaryDirectory() as tmp:
        settings = _make_settings(Path(tmp))
        store = ReviewStateStore(settings.store_path)
        store.add_card('a')
        try:
            client = _client_for(settings, store)
            client.post("/cards/b")
            client.post("/cards/b/review", json={"rating": 4, "reviewed_at": "2026-01-05T09:00:00Z"})

            body = client.get("/cards/due", params={"as_of": "2026-01-06"}).json()
            assert body['as_of'] == '2026-01-06'
            assert [c['card_id'] for c in body['cards']] == ['b']

            body = client.get("/cards/due").json()
            assert body['due_count'] == 2
        finally:
            app.dependency_overrides.clear()


def test_store_dependency_built_from_settings():
    with tempfile.TemporaryDirectory() as tmp:
        settings = _make_settings(Path(tmp))
        try:
            client = _client_for(settings)
            client.post("/cards/c1")
            assert ReviewStateStore(settings.store_path).get_state('c1') is not None
        finally:
            app.dependency_overrides.clear()
