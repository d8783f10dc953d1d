"""Hourly collection of crawler results into the database."""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta
from typing import Any

import requests
from pymongo.errors import PyMongoError

from saedori.config import Config
from saedori.models import CrawledMusic, CrawledNews, MusicDetail, MusicRegion, NewsItem, RealtimeSearch

logger = logging.getLogger(__name__)

CRAWL_PATH = "/api/v1/crawl"
RUN_MINUTE = 10
REQUEST_TIMEOUT = 60
_INTEGER = re.compile(r"[+-]?[0-9]+")


def next_hourly_run(now: datetime) -> datetime:
    """Return the next ten-past-the-hour moment at or after now."""
    run = now.replace(minute=RUN_MINUTE, second=0, microsecond=0)
    if now > run:
        run += timedelta(hours=1)
    return run


def _text(item: dict, key: str) -> str:
    value = item.get(key)
    return value if isinstance(value, str) else ""


def parse_music_details(data: Iterable[dict]) -> list[MusicDetail]:
    """Build chart entries from crawler items; non-text fields become empty."""
    return [
        MusicDetail(title=_text(item, "title"), singer=_text(item, "singer"), url=_text(item, "url"))
        for item in data
    ]


def parse_news_items(data: Iterable[dict]) -> list[NewsItem]:
    """Build news articles from crawler items; non-text fields become empty."""
    return [
        NewsItem(
            company=_text(item, "company"),
            title=_text(item, "title"),
            url=_text(item, "url"),
            lead=_text(item, "lead"),
        )
        for item in data
    ]


def _parse_rank(text: str) -> int:
    if _INTEGER.fullmatch(text):
        return int(text)
    logger.warning("invalid rank: %r", text)
    return 0


class CrawlingScheduler:
    """Fetches the crawler's results every hour and stores them."""

    def __init__(self, dashboard_repository: Any, config: Config) -> None:
        self.dashboard_repository = dashboard_repository
        self.config = config

    @property
    def _store(self) -> Any:
        return self.dashboard_repository.schedule_repository

    def start(self) -> threading.Thread:
        """Run the hourly collection in a background thread and return it."""
        logger.info("CrawlingSchedulerService Start")
        thread = threading.Thread(target=self._run, name="crawling-scheduler", daemon=True)
        thread.start()
        return thread

    def _run(self) -> None:
        sleeper = threading.Event()
        while True:
            now = datetime.now()
            delay = (next_hourly_run(now) - now).total_seconds()
            sleeper.wait(delay)
            threading.Thread(target=self.fetch_data, daemon=True).start()
            sleeper.wait(1)

    def fetch_data(self) -> None:
        """Ask the crawler for fresh results and store them; failures are logged."""
        url = self.config.server.crawl_api_base_url + CRAWL_PATH
        try:
            response = requests.get(url, timeout=REQUEST_TIMEOUT)
            payload = response.json()
        except requests.RequestException as error:
            logger.error("Error fetching data: %s", error)
            return
        except ValueError as error:
            logger.error("JSON parse error: %s", error)
            return
        self.process_data(payload)

    def _process_crawl(
        self, crawl: Any, data_type: str, save: Callable[[Any], None]
    ) -> None:
        if not isinstance(crawl, dict) or crawl.get("crawling") != "Success":
            return
        result = crawl["result"][data_type]
        try:
            save(result)
        except PyMongoError as error:
            logger.error("failed to save %s data: %s", data_type, error)
        else:
            logger.info("saved %s data: %s", data_type, result)

    def process_data(self, json_data: Any) -> None:
        """Store the music, news and search words of a crawler payload."""
        if not isinstance(json_data, dict):
            return

        def created_at() -> int:
            return int(json_data["created_at"])

        def save_music(result: dict) -> None:
            self._store.save_music(
                CrawledMusic(
                    music=MusicRegion(
                        domestic=parse_music_details(result["domestic"]),
                        global_=parse_music_details(result["global"]),
                    ),
                    created_at=created_at(),
                )
            )

        def save_news(result: list) -> None:
            self._store.save_news(
                CrawledNews(news_items=parse_news_items(result), created_at=created_at())
            )

        def save_searches(result: dict) -> None:
            kr_words, us_words = result["kr"], result["us"]
            timestamp = created_at()
            for country, words in (("kr", kr_words), ("us", us_words)):
                for word in words:
                    search = RealtimeSearch(
                        country=country,
                        search_word=word["search_word"],
                        rank=_parse_rank(word["rank"]),
                        created_at=timestamp,
                    )
                    try:
                        self._store.save_realtime_search(search)
                    except PyMongoError as error:
                        logger.error("failed to save realtime search word: %s", error)
                    else:
                        logger.info("saved realtime search word: %s", search)

        self._process_crawl(json_data.get("music_crawl"), "music", save_music)
        self._process_crawl(json_data.get("news_crawl"), "news", save_news)
        self._process_crawl(
            json_data.get("realtime_search_words_crawl"), "realtime_search_words", save_searches
        )