"""
NewsAPI client — recent political/diplomatic headlines per country.

API:   https://newsapi.org/v2/everything
Docs:  https://newsapi.org/docs/endpoints/everything

Credential setup:
  diplo-risk set-key newsapi <key>      (persisted settings store)
  NEWSAPI_KEY=<key>                     (.env fallback)

Without a key the client returns no articles.  With ``demo_news`` enabled the
orchestrator uses ``get_fixture_response()`` instead, which yields two
synthetic headlines per country so the dashboard has something to show.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, ClassVar, Optional

import httpx
from pydantic import ValidationError

from diplo_risk.config import AcquisitionConfig
from diplo_risk.errors import AcquisitionFailure
from diplo_risk.models.signals import NewsItem
from diplo_risk.taxonomy.regions import display_name

logger = logging.getLogger(__name__)


class NewsApiClient:
    """Async client for the NewsAPI ``everything`` endpoint.

    Usage::

        async with httpx.AsyncClient() as http:
            client = NewsApiClient(http, config.acquisition, api_key="...")
            items = await client.fetch_country_news("ghana")

    Attributes:
        api_key: NewsAPI key; empty or ``None`` means no live requests.
    """

    FIXTURE_ITEMS: ClassVar[list[dict[str, str]]] = [
        {
            "title": "{name} diplomatic developments",
            "description": "Talks and policy shifts impacting regional stability in {country}.",
            "source_name": "Demo Wire",
        },
        {
            "title": "Economic cooperation discussions in {country}",
            "description": "Leaders explore trade and security cooperation.",
            "source_name": "Demo Journal",
        },
    ]

    def __init__(
        self,
        http: httpx.AsyncClient,
        config: AcquisitionConfig,
        api_key: Optional[str] = None,
    ) -> None:
        self.http = http
        self.config = config
        self.api_key = api_key

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key)

    async def fetch_country_news(self, country_key: str) -> list[NewsItem]:
        """Fetch the most recent articles mentioning ``country_key``.

        Returns:
            Parsed articles (possibly empty).  Empty when no key is set.

        Raises:
            AcquisitionFailure: On transport error, non-2xx status or a
                payload that is not a NewsAPI response.
        """
        if not self.has_credentials:
            logger.debug("NewsApiClient: no key, skipping live fetch for %s", country_key)
            return []

        params = {
            "q": self.config.news_query_template.format(country=country_key),
            "sortBy": "publishedAt",
            "pageSize": self.config.news_page_size,
            "language": self.config.news_language,
            "apiKey": self.api_key,
        }
        try:
            resp = await self.http.get(
                self.config.news_base_url,
                params=params,
                timeout=self.config.timeout_seconds,
            )
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as exc:
            raise AcquisitionFailure(
                f"News fetch failed with HTTP {exc.response.status_code}",
                source="news",
                country_key=country_key,
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise AcquisitionFailure(
                f"News fetch failed: {exc}", source="news", country_key=country_key
            ) from exc

        return self._parse_articles(data, country_key)

    def _parse_articles(self, data: Any, country_key: str) -> list[NewsItem]:
        if not isinstance(data, dict):
            raise AcquisitionFailure(
                "News payload is not a JSON object", source="news", country_key=country_key
            )
        items: list[NewsItem] = []
        for article in data.get("articles") or []:
            if not isinstance(article, dict):
                continue
            source = article.get("source") or {}
            try:
                item = NewsItem(
                    title=article.get("title"),
                    description=article.get("description"),
                    url=article.get("url"),
                    published_at=_parse_timestamp(article.get("publishedAt")),
                    source_name=source.get("name") if isinstance(source, dict) else "",
                )
            except ValidationError as exc:
                logger.warning(
                    "NewsApiClient: skipping malformed article for %s (%d errors)",
                    country_key, exc.error_count(),
                )
                continue
            items.append(item)
        logger.debug("NewsApiClient: %d articles for %s", len(items), country_key)
        return items

    # ── Fixture / demo mode ────────────────────────────────────────────────────

    def get_fixture_response(self, country_key: str) -> list[NewsItem]:
        """Return the two synthetic demo headlines for ``country_key``."""
        now = datetime.now(timezone.utc)
        name = display_name(country_key)
        return [
            NewsItem(
                title=d["title"].format(name=name, country=country_key),
                description=d["description"].format(name=name, country=country_key),
                url="#",
                published_at=now,
                source_name=d["source_name"],
            )
            for d in self.FIXTURE_ITEMS
        ]


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
