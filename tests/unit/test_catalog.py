"""Unit tests for the IGDB record schema and HTTP client."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests
from pydantic import ValidationError

from igdb_indexer.ingestion.catalog import CatalogFetchError, GameRecord, IGDBClient, build_games_query


def _response(status: int = 200, payload=None, reason: str = "OK") -> MagicMock:  # noqa: ANN001
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.reason = reason
    resp.json.return_value = payload if payload is not None else []
    return resp


# ── GameRecord ────────────────────────────────────────────────────────


class TestGameRecord:
    def test_parses_known_fields_and_ignores_extras(self) -> None:
        record = GameRecord.model_validate(
            {"id": 42, "name": "X", "summary": "Hello world", "cover": 7}
        )
        assert record.id == 42
        assert record.summary == "Hello world"
        assert record.storyline is None
        assert not hasattr(record, "cover")

    def test_id_is_required(self) -> None:
        with pytest.raises(ValidationError):
            GameRecord.model_validate({"name": "No id"})

    def test_text_fields_skips_missing_and_blank(self) -> None:
        record = GameRecord(id=1, name="Game", summary="   ", storyline="Long ago.")
        assert list(record.text_fields(["name", "summary", "storyline"])) == [
            ("name", "Game"),
            ("storyline", "Long ago."),
        ]

    def test_text_fields_respects_declared_order(self) -> None:
        record = GameRecord(id=1, name="Game", summary="S.", storyline="T.")
        fields = [f for f, _ in record.text_fields(["storyline", "summary"])]
        assert fields == ["storyline", "summary"]


# ── Query builder ─────────────────────────────────────────────────────


def test_build_games_query() -> None:
    assert build_games_query(limit=100, offset=200) == (
        "fields id,name,summary,storyline,url;\n"
        "sort id asc;\n"
        "limit 100;\n"
        "offset 200;"
    )


# ── IGDBClient ────────────────────────────────────────────────────────


class TestIGDBClient:
    def test_fetch_page_posts_query_with_auth_headers(self) -> None:
        session = MagicMock()
        session.post.return_value = _response(payload=[{"id": 1, "name": "A"}])
        client = IGDBClient("cid", "tok", url="https://igdb.test/v4/games", timeout=5, session=session)

        page = client.fetch_page(offset=300, limit=100)

        assert page == [{"id": 1, "name": "A"}]
        args, kwargs = session.post.call_args
        assert args == ("https://igdb.test/v4/games",)
        assert kwargs["headers"] == {
            "Accept": "application/json",
            "Client-ID": "cid",
            "Authorization": "Bearer tok",
        }
        assert "offset 300;" in kwargs["data"]
        assert "limit 100;" in kwargs["data"]
        assert kwargs["timeout"] == 5

    def test_non_2xx_raises(self) -> None:
        session = MagicMock()
        session.post.return_value = _response(status=429, reason="Too Many Requests")
        client = IGDBClient("cid", "tok", session=session)

        with pytest.raises(CatalogFetchError, match="429: Too Many Requests") as exc_info:
            client.fetch_page(offset=100, limit=100)
        assert exc_info.value.status_code == 429
        assert exc_info.value.offset == 100

    def test_transport_error_raises(self) -> None:
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError("boom")
        client = IGDBClient("cid", "tok", session=session)

        with pytest.raises(CatalogFetchError, match="offset 0"):
            client.fetch_page(offset=0, limit=100)

    def test_non_list_payload_raises(self) -> None:
        session = MagicMock()
        session.post.return_value = _response(payload={"message": "nope"})
        client = IGDBClient("cid", "tok", session=session)

        with pytest.raises(CatalogFetchError, match="JSON array"):
            client.fetch_page(offset=0, limit=100)
