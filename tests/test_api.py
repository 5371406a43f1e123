import pytest
from fastapi.testclient import TestClient

from elitebuilders import main
from elitebuilders.schemas import ScoreBreakdown, ScoringResult


class _StubScorer:
    def __init__(self, result):
        self.result = result
        self.calls = []

    async def score_submission(self, github_url, challenge_title, challenge_description):
        self.calls.append((github_url, challenge_title, challenge_description))
        return self.result


@pytest.fixture
def client():
    return TestClient(main.app)


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_score_returns_wire_format(client, monkeypatch):
    score = ScoreBreakdown.from_components(25, 22, 15, 7, 8, feedback="Solid work")
    stub = _StubScorer(ScoringResult.ok(score))
    monkeypatch.setattr(main, "scorer", stub)

    resp = client.post(
        "/score",
        json={
            "github_url": "https://github.com/acme/widget",
            "challenge_title": "AI Meme Generator",
            "challenge_description": "Build a meme app.",
        },
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["usedMock"] is False
    assert body["score"]["codeQuality"] == 22
    assert body["score"]["total"] == 77
    assert stub.calls == [("https://github.com/acme/widget", "AI Meme Generator", "Build a meme app.")]


def test_score_failure_is_reported_in_body(client, monkeypatch):
    monkeypatch.setattr(main, "scorer", _StubScorer(ScoringResult.fail("Invalid GitHub URL format")))

    resp = client.post("/score", json={"github_url": "nope", "challenge_title": "t"})

    assert resp.status_code == 200
    assert resp.json() == {
        "success": False,
        "score": None,
        "error": "Invalid GitHub URL format",
        "usedMock": False,
    }


def test_score_requires_fields(client):
    assert client.post("/score", json={"challenge_title": "t"}).status_code == 422


def test_validate_submission(client):
    ok = client.post(
        "/submissions/validate",
        json={"github_url": "https://github.com/acme/widget", "demo_video_url": "https://youtu.be/abc"},
    )
    bad = client.post(
        "/submissions/validate",
        json={"github_url": "https://example.com/acme/widget", "demo_video_url": "https://youtu.be/abc"},
    )

    assert ok.status_code == 200
    assert ok.json()["valid"] is True
    assert bad.status_code == 422


def test_leaderboard(client):
    resp = client.post(
        "/leaderboard",
        json=[
            {
                "id": "s1",
                "challenge_id": "c1",
                "builder_id": "b1",
                "github_url": "https://github.com/a/one",
                "llm_score": 40,
                "created_at": "2024-01-01T00:00:00Z",
            },
            {
                "id": "s2",
                "challenge_id": "c1",
                "builder_id": "b2",
                "github_url": "https://github.com/a/two",
                "llm_score": 90,
                "created_at": "2024-01-02T00:00:00Z",
                "github_username": "octocat",
            },
        ],
    )

    assert resp.status_code == 200
    assert resp.json() == [
        {"builder_id": "b2", "github_username": "octocat", "submission_id": "s2", "llm_score": 90, "rank": 1},
        {"builder_id": "b1", "github_username": None, "submission_id": "s1", "llm_score": 40, "rank": 2},
    ]
