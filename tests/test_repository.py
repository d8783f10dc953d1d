from collections import defaultdict

import pytest
from pymongo.errors import PyMongoError

from saedori.models import Keywords
from saedori.repository import DashboardRepository, Repository


def _matches(document, query):
    for key, condition in query.items():
        if key == "$or":
            if not any(_matches(document, option) for option in condition):
                return False
            continue
        value = document.get(key)
        if isinstance(condition, dict):
            if "$gte" in condition and not value >= condition["$gte"]:
                return False
            if "$lte" in condition and not value <= condition["$lte"]:
                return False
        elif value != condition:
            return False
    return True


class FakeCollection:
    def __init__(self, fail=False):
        self.documents = []
        self.fail = fail

    def insert_one(self, document):
        self.documents.append(dict(document))

    def find(self, filter=None, sort=None, limit=0):
        if self.fail:
            raise PyMongoError("find failed")
        found = [dict(d) for d in self.documents if _matches(d, filter or {})]
        for key, direction in reversed(sort or []):
            found.sort(key=lambda d: d[key], reverse=direction < 0)
        if limit:
            found = found[:limit]
        return iter(found)

    def find_one(self, filter=None, sort=None):
        return next(self.find(filter, sort=sort, limit=1), None)


class FakeClient:
    def __init__(self):
        self.databases = defaultdict(lambda: defaultdict(FakeCollection))

    def __getitem__(self, name):
        return self.databases[name]

    def collection(self, name):
        return self.databases["saedori"][name]


@pytest.fixture
def client():
    return FakeClient()


def _searches(country, created_at, count):
    return [
        {"country": country, "search_word": f"{country}{created_at}-{rank}", "rank": rank, "created_at": created_at}
        for rank in range(count, 0, -1)
    ]


def test_get_musics_returns_newest(client):
    client.collection("Music").documents = [
        {"created_at": 1, "music": {"domestic": [{"singer": "a", "title": "old", "url": "u"}], "global": []}},
        {"created_at": 2, "music": {"domestic": [{"singer": "b", "title": "new", "url": "u"}], "global": []}},
    ]
    musics = DashboardRepository(client).get_musics()
    assert len(musics) == 1
    assert musics[0].music_data.domestic[0].title == "new"


def test_get_musics_empty_when_none(client):
    assert DashboardRepository(client).get_musics() == []


def test_get_musics_raises_on_database_error():
    client = FakeClient()
    client["saedori"]["Music"] = FakeCollection(fail=True)
    with pytest.raises(PyMongoError):
        DashboardRepository(client).get_musics()


def test_searches_by_country_sorted_newest_then_rank_and_limited(client):
    collection = client.collection("RealtimeSearch")
    collection.documents = _searches("kr", 1, 4) + _searches("kr", 2, 3) + _searches("us", 3, 3)
    result = DashboardRepository(client).get_realtime_searches_by_country("kr", 4)
    assert [(r.created_at, r.rank) for r in result] == [(2, 1), (2, 2), (2, 3), (1, 1)]
    assert all(r.country == "kr" for r in result)


def test_get_realtime_searches_takes_five_korean_words(client):
    client.collection("RealtimeSearch").documents = _searches("kr", 1, 8) + _searches("us", 1, 8)
    result = DashboardRepository(client).get_realtime_searches()
    assert len(result) == 5
    assert [r.rank for r in result] == sorted(r.rank for r in result)
    assert {r.country for r in result} == {"kr"}


def test_get_realtime_search_details_takes_ten_per_country(client):
    client.collection("RealtimeSearch").documents = _searches("kr", 1, 12) + _searches("us", 1, 3)
    kr, us = DashboardRepository(client).get_realtime_search_details()
    assert len(kr) == 10
    assert len(us) == 3
    assert {r.country for r in kr} == {"kr"}
    assert {r.country for r in us} == {"us"}


def test_keywords_by_date_range_maps_categories(client):
    client.collection("Keyword").documents = [
        {"category": "search_word", "created_at": 5, "keyword": ["s"]},
        {"category": "music", "created_at": 6, "keyword": ["m"]},
        {"category": "news", "created_at": 7, "keyword": ["n"]},
        {"category": "search_word", "created_at": 50, "keyword": ["late"]},
    ]
    result = DashboardRepository(client).get_keywords_by_date_range(0, 10, ["realtime-search", "music"])
    assert result == [
        Keywords(created_at=6, keywords=["m"], category="music"),
        Keywords(created_at=5, keywords=["s"], category="search_word"),
    ]


def test_keywords_by_date_range_unknown_categories_return_all(client):
    client.collection("Keyword").documents = [
        {"category": "coin", "created_at": 1, "keyword": ["c"]},
        {"category": "news", "created_at": 2, "keyword": ["n"]},
    ]
    result = DashboardRepository(client).get_keywords_by_date_range(0, 10, ["unknown"])
    assert [k.category for k in result] == ["news", "coin"]


def test_repository_wires_dashboard_to_shared_client(client):
    repository = Repository(client)
    dashboard = repository.dashboard
    assert dashboard.client is client
    assert dashboard.news_repository.client is client
    assert dashboard.keyword_repository.client is client
    assert dashboard.schedule_repository.client is client
    assert dashboard.music_repository.client is client
    assert dashboard.realtime_search_repository.client is client