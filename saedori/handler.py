"""HTTP handlers of the dashboard API."""

from __future__ import annotations

import re
from http import HTTPStatus
from typing import Any

from flask import jsonify, request
from pymongo.errors import PyMongoError

from saedori.models import ApiResponse
from saedori.parser import parse_category

SUCCESS = "SUCCESS"
FAILED = "FAILED"

_INT64 = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_ALL_CATEGORIES = ["music", "news", "realtime-search"]
_EMPTY_SEARCH_SUMMARY = {"realtime_search": {"kr": None, "us": None}}


def _parse_int64(text: str) -> int:
    if not _INT64.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def _ok(**fields: Any) -> tuple[Any, HTTPStatus]:
    return jsonify({**ApiResponse(SUCCESS).to_dict(), **fields}), HTTPStatus.OK


def _failed() -> tuple[Any, HTTPStatus]:
    return jsonify(ApiResponse(FAILED).to_dict()), HTTPStatus.BAD_REQUEST


def _error(message: str, status: HTTPStatus) -> tuple[Any, HTTPStatus]:
    return jsonify({"error": message}), status


class Handler:
    """Request handlers; each reads the current request and returns a response."""

    def __init__(self, dashboard_service: Any) -> None:
        self.dashboard_service = dashboard_service

    def _musics(self) -> list[dict]:
        return [music.to_dict() for music in self.dashboard_service.get_music_list()]

    def _search_summary(self) -> dict:
        detail = self.dashboard_service.get_realtime_search_detail_list()
        return {"realtime_search": detail.to_dict()}

    def _news(self) -> list[dict]:
        return [self.dashboard_service.get_news_details().to_dict()]

    def get_keywords_list(self):
        """Return the newest keywords of each category."""
        try:
            keywords = self.dashboard_service.get_keywords_list()
        except PyMongoError:
            return _failed()
        return _ok(top3_keywords=[keyword.to_dict() for keyword in keywords])

    def get_music_list(self):
        """Return the newest charts."""
        try:
            musics = self._musics()
        except PyMongoError:
            return _failed()
        return _ok(result=musics)

    def get_realtime_search_detail(self):
        """Return the Korean and United States search words."""
        try:
            summary = self._search_summary()
        except PyMongoError:
            return _failed()
        return _ok(result=summary)

    def get_news_details(self):
        """Return the newest news batch."""
        try:
            news = self._news()
        except PyMongoError:
            return _failed()
        return _ok(result=news)

    def get_interest_detail(self):
        """Dispatch on the sorted, comma-separated category query parameter.

        A combination that matches nothing yields an empty 200 response.
        """
        category = request.args.get("category", "default_category")
        parts, count = parse_category(category)

        if count == 1:
            view = {
                "music": self.get_music_list,
                "realtime-search": self.get_realtime_search_detail,
                "news": self.get_news_details,
            }.get(parts[0])
        elif count == 2:
            view = {
                ("music", "news"): self.get_music_and_news,
                ("music", "realtime-search"): self.get_music_and_realtime_search,
                ("news", "realtime-search"): self.get_news_and_realtime_search,
            }.get((parts[0], parts[1]))
        else:
            view = self.get_all_categories if parts[:3] == _ALL_CATEGORIES else None

        if view is None:
            return "", HTTPStatus.OK
        return view()

    def _summaries(self, music: bool, search: bool, news: bool):
        try:
            musics = self._musics() if music else None
            summary = self._search_summary() if search else _EMPTY_SEARCH_SUMMARY
            news_items = self._news() if news else None
        except PyMongoError:
            return _failed()
        return _ok(
            music_summary=musics,
            realtime_search_summary=summary,
            news_summary=news_items,
        )

    def get_music_and_news(self):
        """Return the charts and the news."""
        return self._summaries(music=True, search=False, news=True)

    def get_music_and_realtime_search(self):
        """Return the charts and the search words."""
        return self._summaries(music=True, search=True, news=False)

    def get_news_and_realtime_search(self):
        """Return the news and the search words."""
        return self._summaries(music=False, search=True, news=True)

    def get_all_categories(self):
        """Return the charts, the search words and the news."""
        return self._summaries(music=True, search=True, news=True)

    def get_download_data(self):
        """Return the stored data of the requested categories between two times."""
        category_text = request.args.get("category", "")
        if not category_text:
            return _error("category parameter is required", HTTPStatus.BAD_REQUEST)
        categories = category_text.split(",")

        try:
            start_date = _parse_int64(request.args.get("start_date", ""))
        except ValueError:
            return _error("invalid start_date parameter", HTTPStatus.BAD_REQUEST)
        try:
            end_date = _parse_int64(request.args.get("end_date", ""))
        except ValueError:
            return _error("invalid end_date parameter", HTTPStatus.BAD_REQUEST)

        try:
            data = self.dashboard_service.get_download_data(categories, start_date, end_date)
        except PyMongoError as error:
            return _error(str(error), HTTPStatus.INTERNAL_SERVER_ERROR)

        body = {**ApiResponse("Success").to_dict(), "result": data.to_dict()}
        return jsonify(body), HTTPStatus.OK