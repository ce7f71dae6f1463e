"""Public-safety watchlist lookup by applicant name."""

from __future__ import annotations

from typing import Any

from ..http import ProviderClient
from ..schemas.report import PublicSafetyMatch, WatchlistCrime
from .base import CheckOutcome


class PublicSafetyWatchlistCheck:
    """Query a public watchlist with the applicant's real name.

    Unlike the sandbox checks this is a public service, so no sandbox
    identity is involved and no provider credential is sent.
    """

    name = "public_safety"

    def __init__(
        self,
        *,
        client: ProviderClient,
        url: str,
        page_size: int = 20,
        timeout: float = 10.0,
    ) -> None:
        self._client = client
        self._url = url
        self._page_size = page_size
        self._timeout = timeout

    def run(self, applicant_name: str) -> CheckOutcome:
        name = applicant_name.strip()
        if not name:
            return CheckOutcome(
                check=self.name,
                fields={"public_safety_match": PublicSafetyMatch(checked=False)},
            )

        response = self._client.get_json(
            self._url,
            {"title": name, "pageSize": self._page_size},
            timeout=self._timeout,
        )
        return CheckOutcome(
            check=self.name,
            fields={"public_safety_match": self.parse(response.body, name)},
        )

    @staticmethod
    def parse(body: Any, searched_name: str) -> PublicSafetyMatch:
        if not isinstance(body, dict):
            raise ValueError("Watchlist response must be a JSON object")
        items = body.get("items") or []
        if not isinstance(items, list):
            raise ValueError("Watchlist 'items' must be a list")

        # Entries without detail still count as matches, with empty crime text.
        crimes = [_crime_from_item(item) if isinstance(item, dict) else WatchlistCrime() for item in items]
        if not crimes:
            return PublicSafetyMatch(searched_name=searched_name, checked=True)

        total = body.get("total")
        match_count = total if isinstance(total, int) and total > 0 else len(crimes)
        return PublicSafetyMatch(
            match_found=True,
            match_count=match_count,
            searched_name=searched_name,
            crimes=crimes,
            checked=True,
        )


def _crime_from_item(item: dict[str, Any]) -> WatchlistCrime:
    subjects = item.get("subjects") or []
    return WatchlistCrime(
        name=str(item.get("title") or ""),
        description=str(item.get("description") or ""),
        subjects=[str(subject) for subject in subjects] if isinstance(subjects, list) else [],
        warning_message=_optional_str(item.get("warning_message")),
        url=_optional_str(item.get("url")),
    )


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


__all__ = ["PublicSafetyWatchlistCheck"]
