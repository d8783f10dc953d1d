"""Daily keywords of the day, drawn from music, news, search words and coins."""

from __future__ import annotations

import logging
import re
import threading
import time
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

import requests
from pymongo.errors import PyMongoError

from saedori.coin import CoinScheduler
from saedori.models import Keywords

logger = logging.getLogger(__name__)

RUN_HOUR = 7
RUN_MINUTE = 10
KEYWORD_COUNT = 3
TITLE_WORDS = 3

_BRACKETED = re.compile(r"\[.*?\]")
_DISALLOWED = re.compile(r"[^가-힣a-zA-Z0-9\t\n\f\r ]")
_WHITESPACE = re.compile(r"[\t\n\f\r ]+")

_SOURCE_ERRORS = (PyMongoError, requests.RequestException, ValueError, LookupError)


def process_news_title(title: str) -> str:
    """Reduce a headline to its first three words.

    Bracketed tags are dropped, then every character other than Hangul,
    ASCII letters, digits and whitespace, and runs of whitespace collapse.
    """
    title = _BRACKETED.sub("", title)
    title = _DISALLOWED.sub("", title)
    title = _WHITESPACE.sub(" ", title.strip())
    return " ".join(title.split()[:TITLE_WORDS])


def next_daily_run(now: datetime) -> datetime:
    """Return the next 07:10 at or after now."""
    run = now.replace(hour=RUN_HOUR, minute=RUN_MINUTE, second=0, microsecond=0)
    if now > run:
        run += timedelta(days=1)
    return run


class MusicKeywords:
    """Keywords taken from the top of the charts."""

    def __init__(self, dashboard_service: Any) -> None:
        self.dashboard_service = dashboard_service

    def get_keywords(self) -> list[str]:
        """Return the domestic first, the global first and the domestic second title.

        A domestic chart with a single entry raises IndexError.
        """
        keywords: list[str] = []
        for music in self.dashboard_service.get_music_list():
            domestic = music.music_data.domestic
            global_ = music.music_data.global_
            if domestic:
                keywords.append(domestic[0].title)
            if global_:
                keywords.append(global_[0].title)
            if domestic:
                keywords.append(domestic[1].title)
        return keywords[:KEYWORD_COUNT]


class NewsKeywords:
    """Keywords taken from the newest headlines."""

    def __init__(self, dashboard_service: Any) -> None:
        self.dashboard_service = dashboard_service

    def get_keywords(self) -> list[str]:
        """Return up to three shortened headlines, skipping those left empty."""
        news = self.dashboard_service.get_news_details()
        keywords: list[str] = []
        if news is None:
            return keywords
        for item in news.news_items:
            if not item.title:
                continue
            title = process_news_title(item.title)
            if title:
                keywords.append(title)
                if len(keywords) >= KEYWORD_COUNT:
                    break
        return keywords


class RealtimeSearchKeywords:
    """Keywords taken from the top Korean search words."""

    def __init__(self, dashboard_service: Any) -> None:
        self.dashboard_service = dashboard_service

    def get_keywords(self) -> list[str]:
        """Return the top three search words; fewer than three raises IndexError."""
        words = self.dashboard_service.get_realtime_search_list()
        if len(words) < KEYWORD_COUNT:
            raise IndexError(
                f"expected at least {KEYWORD_COUNT} realtime search words, got {len(words)}"
            )
        return words[:KEYWORD_COUNT]


class KeywordScheduler:
    """Stores the keywords of every category once a day."""

    def __init__(self, dashboard_service: Any, keyword_repository: Any) -> None:
        self.dashboard_service = dashboard_service
        self.keyword_repository = keyword_repository
        self.coin_scheduler = CoinScheduler()

    def start(self) -> threading.Thread:
        """Run the daily collection in a background thread and return it."""
        logger.info("KeywordSchedulerService Start")
        thread = threading.Thread(target=self._run, name="keyword-scheduler", daemon=True)
        thread.start()
        return thread

    def _run(self) -> None:
        sleeper = threading.Event()
        while True:
            now = datetime.now()
            delay = (next_daily_run(now) - now).total_seconds()
            sleeper.wait(delay)
            threading.Thread(target=self.put_keywords, daemon=True).start()
            sleeper.wait(1)

    def put_keywords(self) -> None:
        """Collect and store the keywords of music, news, search words and coins."""
        music = MusicKeywords(self.dashboard_service)
        news = NewsKeywords(self.dashboard_service)
        searches = RealtimeSearchKeywords(self.dashboard_service)

        self.process_keywords("music", music.get_keywords)
        self.process_keywords("news", news.get_keywords)
        self.process_keywords("realtime_search", searches.get_keywords)
        self.process_keywords("coin", self.coin_scheduler.get_coin_change_rate)

    def process_keywords(self, category: str, get_keywords: Callable[[], list[str]]) -> None:
        """Store one category's keywords; failures are logged and skipped."""
        try:
            keywords = get_keywords()
        except _SOURCE_ERRORS as error:
            logger.error("failed to get %s keywords: %s", category, error)
            return

        record = Keywords(category=category, keywords=keywords, created_at=int(time.time()))
        try:
            self.keyword_repository.save_keywords([record])
        except PyMongoError as error:
            logger.error("failed to save %s keywords: %s", category, error)
            return
        logger.info("Save %s keywords: %s", category, keywords)