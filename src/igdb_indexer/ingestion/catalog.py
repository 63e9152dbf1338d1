"""IGDB metadata source — record schema and paged HTTP client.

The games endpoint takes an Apicalypse query as a plain-text POST body
and answers with a JSON array of records::

    fields id,name,summary,storyline,url;
    sort id asc;
    limit 100;
    offset 0;
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from typing import Any

import requests
from pydantic import BaseModel, ConfigDict

from igdb_indexer.config import settings

logger = logging.getLogger(__name__)

GAME_FIELDS: tuple[str, ...] = ("id", "name", "summary", "storyline", "url")


class CatalogFetchError(RuntimeError):
    """A page request to the metadata source did not succeed."""

    def __init__(self, message: str, *, status_code: int | None = None, offset: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.offset = offset


class GameRecord(BaseModel):
    """One game as returned by the IGDB ``/games`` endpoint.

    Only ``id`` and ``name`` are guaranteed; the free-text fields are
    frequently absent.  Unknown keys are ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int
    name: str
    summary: str | None = None
    storyline: str | None = None
    url: str | None = None

    def text_fields(self, fields: Sequence[str]) -> Iterator[tuple[str, str]]:
        """Yield ``(field, text)`` for each of *fields* that is present and non-blank.

        Fields are yielded in the order given.
        """
        for field in fields:
            value = getattr(self, field, None)
            if isinstance(value, str) and value.strip():
                yield field, value


def build_games_query(limit: int, offset: int, fields: Sequence[str] = GAME_FIELDS) -> str:
    """Return the Apicalypse body for one page of games ordered by id."""
    return "\n".join(
        [
            f"fields {','.join(fields)};",
            "sort id asc;",
            f"limit {limit};",
            f"offset {offset};",
        ]
    )


class IGDBClient:
    """Thin ``requests`` wrapper around the IGDB games endpoint.

    Parameters
    ----------
    client_id:
        Twitch application client id (``Client-ID`` header).
    access_token:
        Twitch app access token, sent as a bearer token.
    url:
        Games endpoint URL.
    timeout:
        Per-request timeout in seconds.
    session:
        Optional pre-configured ``requests.Session``.
    """

    def __init__(
        self,
        client_id: str = settings.twitch_client_id,
        access_token: str = settings.twitch_app_access_token,
        *,
        url: str = settings.igdb_games_url,
        timeout: int = settings.igdb_request_timeout,
        session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._session = session or requests.Session()
        self._headers = {
            "Accept": "application/json",
            "Client-ID": client_id,
            "Authorization": f"Bearer {access_token}",
        }

    def fetch_page(self, offset: int, limit: int) -> list[dict[str, Any]]:
        """Fetch one page of raw game records.

        Raises
        ------
        CatalogFetchError
            On a transport error or any non-2xx response.  There is no
            retry at this layer.
        """
        body = build_games_query(limit=limit, offset=offset)
        try:
            resp = self._session.post(self.url, headers=self._headers, data=body, timeout=self.timeout)
        except requests.RequestException as exc:
            raise CatalogFetchError(f"Request for offset {offset} failed: {exc}", offset=offset) from exc

        if not resp.ok:
            raise CatalogFetchError(
                f"{resp.status_code}: {resp.reason}",
                status_code=resp.status_code,
                offset=offset,
            )

        page = resp.json()
        if not isinstance(page, list):
            raise CatalogFetchError(
                f"Expected a JSON array for offset {offset}, got {type(page).__name__}",
                status_code=resp.status_code,
                offset=offset,
            )
        logger.debug("Fetched %d records at offset %d", len(page), offset)
        return page
