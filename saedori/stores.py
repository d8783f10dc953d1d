"""MongoDB stores for keywords, music, news and realtime search words."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import pymongo
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from saedori.models import (
    CrawledMusic,
    CrawledNews,
    Keywords,
    MusicDownload,
    News,
    RealtimeSearch,
    RealtimeSearchDetail,
    RealtimeSearchDownload,
)

logger = logging.getLogger(__name__)

DATABASE_NAME = "saedori"
QUERY_TIMEOUT = 30.0
NEWEST_FIRST = [("created_at", DESCENDING)]
KEYWORD_CATEGORIES = ("music", "search_word", "news", "coin")


def _collection(client: Any, name: str) -> Any:
    return client[DATABASE_NAME][name]


def _created_between(start_date: int, end_date: int) -> dict[str, Any]:
    return {"created_at": {"$gte": start_date, "$lte": end_date}}


class KeywordRepository:
    """Keywords of the day, one document per category and run."""

    def __init__(self, client: Any) -> None:
        self.client = client

    def get_keywords(self) -> list[Keywords]:
        """Return the newest keywords of each category that has any."""
        collection = _collection(self.client, "Keyword")
        keywords: list[Keywords] = []
        with pymongo.timeout(QUERY_TIMEOUT):
            for category in KEYWORD_CATEGORIES:
                document = collection.find_one({"category": category}, sort=NEWEST_FIRST)
                if document is not None:
                    keywords.append(Keywords.from_document(document))
        return keywords

    def save_keywords(self, keywords: Iterable[Keywords]) -> None:
        """Store each keyword set as its own document."""
        collection = _collection(self.client, "Keyword")
        with pymongo.timeout(QUERY_TIMEOUT):
            for keyword in keywords:
                collection.insert_one(keyword.to_dict())


class MusicRepository:
    """Stored chart snapshots."""

    def __init__(self, client: Any) -> None:
        self.client = client

    def get_music_by_date_range(self, start_date: int, end_date: int) -> list[MusicDownload]:
        """Return charts collected between the two times, inclusive, newest first."""
        collection = _collection(self.client, "Music")
        try:
            with pymongo.timeout(QUERY_TIMEOUT):
                documents = list(
                    collection.find(_created_between(start_date, end_date), sort=NEWEST_FIRST)
                )
        except PyMongoError as error:
            logger.error("error getting music: %s", error)
            raise
        return [MusicDownload.from_document(document) for document in documents]


class NewsRepository:
    """Stored news batches."""

    def __init__(self, client: Any) -> None:
        self.client = client

    def get_news_details(self) -> News:
        """Return the newest news batch, or an empty one when none can be read."""
        collection = _collection(self.client, "News")
        try:
            with pymongo.timeout(QUERY_TIMEOUT):
                document = collection.find_one({}, sort=NEWEST_FIRST)
        except PyMongoError as error:
            logger.error("Error getting latest news: %s", error)
            return News(created_at=0, news_items=[])
        if document is None:
            logger.info("There's no latest news")
            return News(created_at=0, news_items=[])
        return News.from_document(document)

    def get_news_by_date_range(self, start_date: int, end_date: int) -> list[News]:
        """Return news batches collected between the two times, inclusive, newest first."""
        collection = _collection(self.client, "News")
        try:
            with pymongo.timeout(QUERY_TIMEOUT):
                documents = list(
                    collection.find(_created_between(start_date, end_date), sort=NEWEST_FIRST)
                )
        except PyMongoError as error:
            logger.critical("error getting news: %s", error)
            raise
        return [News.from_document(document) for document in documents]


class RealtimeSearchRepository:
    """Stored realtime search words."""

    def __init__(self, client: Any) -> None:
        self.client = client

    def get_realtime_search_by_date_range(
        self, start_date: int, end_date: int
    ) -> list[RealtimeSearchDownload]:
        """Return search words between the two times, grouped by collection time, newest first."""
        collection = _collection(self.client, "RealtimeSearch")
        try:
            with pymongo.timeout(QUERY_TIMEOUT):
                documents = list(
                    collection.find(_created_between(start_date, end_date), sort=NEWEST_FIRST)
                )
        except PyMongoError as error:
            logger.error("error getting realtime search: %s", error)
            raise

        grouped: dict[int, RealtimeSearchDownload] = {}
        for document in documents:
            search = RealtimeSearch.from_document(document)
            entry = grouped.setdefault(
                search.created_at,
                RealtimeSearchDownload(
                    created_at=search.created_at,
                    realtime_search=RealtimeSearchDetail(),
                ),
            )
            if search.country == "kr":
                entry.realtime_search.kr_search_words.append(search.search_word)
            elif search.country == "us":
                entry.realtime_search.us_search_words.append(search.search_word)

        return sorted(grouped.values(), key=lambda entry: entry.created_at, reverse=True)


class ScheduleRepository:
    """Stores what the crawler returns."""

    def __init__(self, client: Any) -> None:
        self.client = client

    def _insert(self, collection_name: str, document: dict[str, Any]) -> None:
        with pymongo.timeout(QUERY_TIMEOUT):
            _collection(self.client, collection_name).insert_one(document)

    def save_music(self, music: CrawledMusic) -> None:
        self._insert("Music", music.to_document())

    def save_news(self, news: CrawledNews) -> None:
        self._insert("News", news.to_document())

    def save_realtime_search(self, search: RealtimeSearch) -> None:
        self._insert("RealtimeSearch", search.to_document())