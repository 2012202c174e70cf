import pytest
from fastapi.testclient import TestClient

from src.buckler import (
    ClientInputError,
    ConfigurationError,
    MatchupRecord,
    MergedCharacterStat,
    NavigationTimeoutError,
    PlayerSearchResult,
    SearchUnavailableError,
    UnexpectedScrapeError,
)
from web import app as web_app


class FakeScraper:
    def __init__(self, error=None, players=None):
        self.error = error
        self.players = players if players is not None else [PlayerSearchResult("Daigo", "1415778165", "Lv. 120")]

    def _check(self, *required):
        if self.error:
            raise self.error
        if not all(required):
            raise ClientInputError("Missing required parameter")

    def load_character_stats(self, user_code):
        self._check(user_code)
        return ([MergedCharacterStat("RYU", "55.2%", "18000", "")], "live")

    def fetch_matchup_breakdown(self, user_code, character):
        self._check(user_code, character)
        return [
            MatchupRecord("A", "0戦", "10%"),
            MatchupRecord("B", "5戦", "80%"),
            MatchupRecord("C", "3戦", "20%"),
        ]

    def search_players_by_name(self, name):
        self._check(name)
        return self.players


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(web_app, "scraper", FakeScraper())
    return TestClient(web_app.app)


def test_stats(client):
    resp = client.get("/api/stats", params={"userCode": "1415778165"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["source"] == "live"
    assert body["data"][0]["name"] == "RYU"
    assert body["data"][0]["masterRate"] == ""


def test_stats_missing_param(client):
    assert client.get("/api/stats").status_code == 400


@pytest.mark.parametrize("error, status", [
    (ConfigurationError("SF6_COOKIE is not configured"), 500),
    (NavigationTimeoutError("Timed out"), 500),
    (UnexpectedScrapeError("Scrape failed: boom"), 500),
])
def test_stats_server_errors(monkeypatch, error, status):
    monkeypatch.setattr(web_app, "scraper", FakeScraper(error=error))
    resp = TestClient(web_app.app).get("/api/stats", params={"userCode": "1"})
    assert resp.status_code == status
    assert resp.json()["detail"] == str(error)


def test_matchups_include_rankings(client):
    resp = client.get("/api/matchups", params={"userCode": "1415778165", "character": "JP"})
    assert resp.status_code == 200
    body = resp.json()
    assert [m["opponentName"] for m in body["data"]] == ["A", "B", "C"]
    assert [m["opponentName"] for m in body["best"]] == ["B", "C"]
    assert [m["opponentName"] for m in body["worst"]] == ["C", "B"]


def test_matchups_missing_character(client):
    resp = client.get("/api/matchups", params={"userCode": "1415778165"})
    assert resp.status_code == 400


def test_search(client):
    resp = client.get("/api/search-id", params={"name": "Daigo"})
    assert resp.status_code == 200
    assert resp.json() == {
        "players": [{"name": "Daigo", "userCode": "1415778165", "info": "Lv. 120"}],
        "userCode": "1415778165",
    }


def test_search_no_match_is_404(monkeypatch):
    monkeypatch.setattr(web_app, "scraper", FakeScraper(players=[]))
    resp = TestClient(web_app.app).get("/api/search-id", params={"name": "nobody"})
    assert resp.status_code == 404


def test_search_without_input_surface_is_404(monkeypatch):
    monkeypatch.setattr(web_app, "scraper", FakeScraper(error=SearchUnavailableError("Search box not found")))
    resp = TestClient(web_app.app).get("/api/search-id", params={"name": "Daigo"})
    assert resp.status_code == 404


@pytest.mark.parametrize("params", [{}, {"name": ""}])
def test_search_missing_name_is_400(client, params):
    resp = client.get("/api/search-id", params=params)
    assert resp.status_code == 400


def test_search_unexpected_failure_is_500(monkeypatch):
    monkeypatch.setattr(web_app, "scraper", FakeScraper(error=UnexpectedScrapeError("Scrape failed: boom")))
    resp = TestClient(web_app.app).get("/api/search-id", params={"name": "Daigo"})
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Scrape failed: boom"
