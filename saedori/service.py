"""Dashboard service: the data the API serves, assembled from the repository."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from pymongo.errors import PyMongoError

from saedori.models import DownloadData, Keywords, Music, News, RealtimeSearchDetail

logger = logging.getLogger(__name__)


class DashboardService:
    """Reads the dashboard data and shapes it for the API."""

    def __init__(self, dashboard_repository: Any) -> None:
        self.dashboard_repository = dashboard_repository

    def get_keywords_list(self) -> list[Keywords]:
        """Return the newest keywords of each category."""
        return self.dashboard_repository.keyword_repository.get_keywords()

    def get_music_list(self) -> list[Music]:
        """Return the newest charts."""
        return self.dashboard_repository.get_musics()

    def get_realtime_search_list(self) -> list[str]:
        """Return the summary list of Korean search words."""
        return [search.search_word for search in self.dashboard_repository.get_realtime_searches()]

    def get_realtime_search_detail_list(self) -> RealtimeSearchDetail:
        """Return the Korean and United States search words for the detail view."""
        kr_list, us_list = self.dashboard_repository.get_realtime_search_details()
        return RealtimeSearchDetail(
            kr_search_words=[search.search_word for search in kr_list],
            us_search_words=[search.search_word for search in us_list],
        )

    def get_news_details(self) -> News:
        """Return the newest news batch."""
        return self.dashboard_repository.news_repository.get_news_details()

    def get_download_data(
        self, categories: Iterable[str], start_date: int, end_date: int
    ) -> DownloadData:
        """Collect keywords and the requested categories between two times.

        A failure reading keywords raises; a failure reading a category is
        logged and that category is left empty.
        """
        categories = list(categories)
        repository = self.dashboard_repository
        try:
            keywords = repository.get_keywords_by_date_range(start_date, end_date, categories)
        except PyMongoError as error:
            logger.error("error getting keywords: %s", error)
            raise
        result = DownloadData(keywords=keywords)

        loaders: dict[str, tuple[str, Callable[[int, int], list]]] = {
            "news": ("news", repository.news_repository.get_news_by_date_range),
            "realtime-search": (
                "realtime_search",
                repository.realtime_search_repository.get_realtime_search_by_date_range,
            ),
            "music": ("music", repository.music_repository.get_music_by_date_range),
        }
        for category in categories:
            if category not in loaders:
                continue
            attribute, load = loaders[category]
            try:
                setattr(result, attribute, load(start_date, end_date))
            except PyMongoError as error:
                logger.error("error getting %s: %s", category, error)
        return result


class Service:
    """Root of the application services."""

    def __init__(self, repository: Any) -> None:
        self.repository = repository
        self.dashboard = DashboardService(repository.dashboard)