"""Dashboard queries over the stored data and the repository root."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import pymongo
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from saedori.models import Keywords, Music, RealtimeSearch
from saedori.stores import (
    DATABASE_NAME,
    NEWEST_FIRST,
    QUERY_TIMEOUT,
    KeywordRepository,
    MusicRepository,
    NewsRepository,
    RealtimeSearchRepository,
    ScheduleRepository,
)

logger = logging.getLogger(__name__)

CATEGORY_FIELDS = {
    "news": "news",
    "realtime-search": "search_word",
    "music": "music",
    "coin": "coin",
}

SUMMARY_SEARCH_COUNT = 5
DETAIL_SEARCH_COUNT = 10


class DashboardRepository:
    """Queries behind the dashboard, with the per-collection stores."""

    def __init__(self, client: Any) -> None:
        self.client = client
        self.news_repository = NewsRepository(client)
        self.keyword_repository = KeywordRepository(client)
        self.realtime_search_repository = RealtimeSearchRepository(client)
        self.music_repository = MusicRepository(client)
        self.schedule_repository = ScheduleRepository(client)

    def _collection(self, name: str) -> Any:
        return self.client[DATABASE_NAME][name]

    def get_musics(self) -> list[Music]:
        """Return the newest charts, or an empty list when none are stored."""
        try:
            with pymongo.timeout(QUERY_TIMEOUT):
                document = self._collection("Music").find_one({}, sort=NEWEST_FIRST)
        except PyMongoError as error:
            logger.error("Error getting music: %s", error)
            raise
        if document is None:
            return []
        return [Music.from_document(document)]

    def get_realtime_searches(self) -> list[RealtimeSearch]:
        """Return the top Korean search words for the summary."""
        with pymongo.timeout(QUERY_TIMEOUT):
            return self.get_realtime_searches_by_country("kr", SUMMARY_SEARCH_COUNT)

    def get_realtime_search_details(self) -> tuple[list[RealtimeSearch], list[RealtimeSearch]]:
        """Return the Korean and the United States search words for the detail view."""
        with pymongo.timeout(QUERY_TIMEOUT):
            kr = self.get_realtime_searches_by_country("kr", DETAIL_SEARCH_COUNT)
            us = self.get_realtime_searches_by_country("us", DETAIL_SEARCH_COUNT)
        return kr, us

    def get_realtime_searches_by_country(self, country: str, count: int) -> list[RealtimeSearch]:
        """Return up to count search words of a country, newest first, then by rank."""
        try:
            cursor = self._collection("RealtimeSearch").find(
                {"country": country},
                sort=[("created_at", DESCENDING), ("rank", ASCENDING)],
                limit=count,
            )
            return [RealtimeSearch.from_document(document) for document in cursor]
        except PyMongoError as error:
            logger.error("error getting %s realtime search list: %s", country, error)
            raise

    def get_keywords_by_date_range(
        self, start_date: int, end_date: int, categories: Iterable[str]
    ) -> list[Keywords]:
        """Return keywords between the two times, inclusive, newest first.

        Known categories narrow the result; unknown ones are ignored, and if
        none is known every category is returned.
        """
        query: dict[str, Any] = {"created_at": {"$gte": start_date, "$lte": end_date}}
        alternatives = [
            {"category": CATEGORY_FIELDS[category]}
            for category in categories
            if category in CATEGORY_FIELDS
        ]
        if alternatives:
            query["$or"] = alternatives

        try:
            with pymongo.timeout(QUERY_TIMEOUT):
                documents = list(self._collection("Keyword").find(query, sort=NEWEST_FIRST))
        except PyMongoError as error:
            logger.error("error getting keywords: %s", error)
            raise
        return [Keywords.from_document(document) for document in documents]


class Repository:
    """Root of all data access."""

    def __init__(self, client: Any) -> None:
        self.dashboard = DashboardRepository(client)