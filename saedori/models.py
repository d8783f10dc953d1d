"""Data models for stored documents and API payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _list(document: dict, key: str) -> list:
    return document.get(key) or []


@dataclass
class ApiResponse:
    """Status message included in every API response."""

    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message}


@dataclass
class Market:
    """A market listed by the exchange."""

    market: str
    korean_name: str


@dataclass
class Ticker:
    """A market's signed change rate."""

    market: str
    signed_change_rate: float


@dataclass
class ChangeInfo:
    """A notable price change of a coin, in percent."""

    symbol: str
    korean_name: str
    change_rate: float


@dataclass
class Keywords:
    """Keywords of the day for one category."""

    created_at: int = 0
    keywords: list[str] = field(default_factory=list)
    category: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "created_at": self.created_at,
            "keyword": list(self.keywords),
            "category": self.category,
        }

    @classmethod
    def from_document(cls, document: dict) -> Keywords:
        return cls(
            created_at=int(document.get("created_at", 0)),
            keywords=list(_list(document, "keyword")),
            category=document.get("category", ""),
        )


@dataclass
class MusicDetail:
    """One chart entry."""

    singer: str = ""
    title: str = ""
    url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"singer": self.singer, "title": self.title, "url": self.url}

    @classmethod
    def from_document(cls, document: dict) -> MusicDetail:
        return cls(
            singer=document.get("singer", ""),
            title=document.get("title", ""),
            url=document.get("url", ""),
        )


@dataclass
class MusicRegion:
    """Domestic and global charts."""

    domestic: list[MusicDetail] = field(default_factory=list)
    global_: list[MusicDetail] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "domestic": [detail.to_dict() for detail in self.domestic],
            "global": [detail.to_dict() for detail in self.global_],
        }

    @classmethod
    def from_document(cls, document: dict) -> MusicRegion:
        return cls(
            domestic=[MusicDetail.from_document(d) for d in _list(document, "domestic")],
            global_=[MusicDetail.from_document(d) for d in _list(document, "global")],
        )


@dataclass
class Music:
    """The latest stored charts."""

    music_data: MusicRegion = field(default_factory=MusicRegion)

    def to_dict(self) -> dict[str, Any]:
        return {"music": self.music_data.to_dict()}

    @classmethod
    def from_document(cls, document: dict) -> Music:
        return cls(music_data=MusicRegion.from_document(document.get("music") or {}))


@dataclass
class MusicDownload:
    """Charts with the time they were collected."""

    music_data: MusicRegion = field(default_factory=MusicRegion)
    created_at: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"music": self.music_data.to_dict(), "created_at": self.created_at}

    @classmethod
    def from_document(cls, document: dict) -> MusicDownload:
        return cls(
            music_data=MusicRegion.from_document(document.get("music") or {}),
            created_at=int(document.get("created_at", 0)),
        )


@dataclass
class CrawledMusic:
    """Charts returned by the crawler, ready to store."""

    music: MusicRegion
    created_at: int

    def to_document(self) -> dict[str, Any]:
        return {"music": self.music.to_dict(), "created_at": self.created_at}


@dataclass
class NewsItem:
    """One news article."""

    company: str = ""
    title: str = ""
    lead: str = ""
    url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"company": self.company, "title": self.title, "lead": self.lead, "url": self.url}

    @classmethod
    def from_document(cls, document: dict) -> NewsItem:
        return cls(
            company=document.get("company", ""),
            title=document.get("title", ""),
            lead=document.get("lead", ""),
            url=document.get("url", ""),
        )


@dataclass
class News:
    """A stored batch of news articles."""

    created_at: int = 0
    news_items: list[NewsItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"created_at": self.created_at, "news": [item.to_dict() for item in self.news_items]}

    @classmethod
    def from_document(cls, document: dict) -> News:
        return cls(
            created_at=int(document.get("created_at", 0)),
            news_items=[NewsItem.from_document(d) for d in _list(document, "news")],
        )


@dataclass
class CrawledNews:
    """News returned by the crawler, ready to store."""

    news_items: list[NewsItem]
    created_at: int

    def to_document(self) -> dict[str, Any]:
        return {"news": [item.to_dict() for item in self.news_items], "created_at": self.created_at}


@dataclass
class RealtimeSearch:
    """One ranked search word of a country at a point in time."""

    country: str = ""
    search_word: str = ""
    rank: int = 0
    created_at: int = 0
    id: Any = None

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {}
        if self.id is not None:
            document["_id"] = self.id
        document.update(
            country=self.country,
            search_word=self.search_word,
            rank=self.rank,
            created_at=self.created_at,
        )
        return document

    @classmethod
    def from_document(cls, document: dict) -> RealtimeSearch:
        return cls(
            country=document.get("country", ""),
            search_word=document.get("search_word", ""),
            rank=int(document.get("rank", 0)),
            created_at=int(document.get("created_at", 0)),
            id=document.get("_id"),
        )


@dataclass
class RealtimeSearchDetail:
    """Search words for Korea and the United States."""

    kr_search_words: list[str] = field(default_factory=list)
    us_search_words: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"kr": list(self.kr_search_words), "us": list(self.us_search_words)}


@dataclass
class RealtimeSearchDownload:
    """Search words collected at one point in time."""

    created_at: int = 0
    realtime_search: RealtimeSearchDetail = field(default_factory=RealtimeSearchDetail)

    def to_dict(self) -> dict[str, Any]:
        return {
            "created_at": self.created_at,
            "realtime_search": {"realtime_search": self.realtime_search.to_dict()},
        }


def _dump(items: list | None) -> list | None:
    if items is None:
        return None
    return [item.to_dict() for item in items]


@dataclass
class DownloadData:
    """Data returned for a download request; unrequested categories stay None."""

    keywords: list[Keywords] | None = None
    news: list[News] | None = None
    realtime_search: list[RealtimeSearchDownload] | None = None
    music: list[MusicDownload] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "dn_keywords": _dump(self.keywords),
            "dn_news": _dump(self.news),
            "dn_realtime_search": _dump(self.realtime_search),
            "dn_music": _dump(self.music),
        }