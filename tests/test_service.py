from types import SimpleNamespace

import pytest
from pymongo.errors import PyMongoError

from saedori.models import (
    Keywords,
    Music,
    MusicDownload,
    MusicRegion,
    MusicDetail,
    News,
    NewsItem,
    RealtimeSearch,
    RealtimeSearchDownload,
)
from saedori.service import DashboardService, Service


class FakeStore:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)
        if self.error is not None:
            raise self.error
        return self.result


def make_repository(**overrides):
    news = News(created_at=5, news_items=[NewsItem(title="headline")])
    defaults = dict(
        keywords=FakeStore([Keywords(created_at=1, keywords=["a"], category="news")]),
        latest_keywords=FakeStore([Keywords(created_at=9, keywords=["x"], category="music")]),
        musics=FakeStore([Music(MusicRegion(domestic=[MusicDetail(title="song")]))]),
        searches=FakeStore([RealtimeSearch(search_word="one"), RealtimeSearch(search_word="two")]),
        details=FakeStore(
            ([RealtimeSearch(country="kr", search_word="k")],
             [RealtimeSearch(country="us", search_word="u1"),
              RealtimeSearch(country="us", search_word="u2")])
        ),
        latest_news=FakeStore(news),
        news_range=FakeStore([news]),
        search_range=FakeStore([RealtimeSearchDownload(created_at=3)]),
        music_range=FakeStore([MusicDownload(created_at=4)]),
    )
    defaults.update(overrides)
    stores = defaults
    return SimpleNamespace(
        stores=stores,
        get_keywords_by_date_range=stores["keywords"],
        get_musics=stores["musics"],
        get_realtime_searches=stores["searches"],
        get_realtime_search_details=stores["details"],
        keyword_repository=SimpleNamespace(get_keywords=stores["latest_keywords"]),
        news_repository=SimpleNamespace(
            get_news_details=stores["latest_news"],
            get_news_by_date_range=stores["news_range"],
        ),
        realtime_search_repository=SimpleNamespace(
            get_realtime_search_by_date_range=stores["search_range"]
        ),
        music_repository=SimpleNamespace(get_music_by_date_range=stores["music_range"]),
    )


def test_keywords_list_comes_from_keyword_repository():
    repository = make_repository()
    service = DashboardService(repository)
    assert service.get_keywords_list() == repository.stores["latest_keywords"].result


def test_music_list_passes_through():
    repository = make_repository()
    assert DashboardService(repository).get_music_list()[0].music_data.domestic[0].title == "song"


def test_realtime_search_list_returns_words_in_order():
    service = DashboardService(make_repository())
    assert service.get_realtime_search_list() == ["one", "two"]


def test_realtime_search_list_propagates_errors():
    service = DashboardService(make_repository(searches=FakeStore(error=PyMongoError("down"))))
    with pytest.raises(PyMongoError):
        service.get_realtime_search_list()


def test_realtime_search_detail_splits_countries():
    detail = DashboardService(make_repository()).get_realtime_search_detail_list()
    assert detail.kr_search_words == ["k"]
    assert detail.us_search_words == ["u1", "u2"]
    assert detail.to_dict() == {"kr": ["k"], "us": ["u1", "u2"]}


def test_realtime_search_detail_empty_lists():
    service = DashboardService(make_repository(details=FakeStore(([], []))))
    assert service.get_realtime_search_detail_list().to_dict() == {"kr": [], "us": []}


def test_news_details_passes_through():
    repository = make_repository()
    assert DashboardService(repository).get_news_details() is repository.stores["latest_news"].result


def test_download_data_only_fills_requested_categories():
    repository = make_repository()
    data = DashboardService(repository).get_download_data(["news"], 10, 20)
    assert data.keywords == repository.stores["keywords"].result
    assert data.news == repository.stores["news_range"].result
    assert data.music is None
    assert data.realtime_search is None
    assert repository.stores["keywords"].calls == [(10, 20, ["news"])]
    assert repository.stores["news_range"].calls == [(10, 20)]
    assert repository.stores["music_range"].calls == []


def test_download_data_all_categories():
    repository = make_repository()
    data = DashboardService(repository).get_download_data(
        ["music", "news", "realtime-search", "coin"], 1, 2
    )
    assert data.music == repository.stores["music_range"].result
    assert data.realtime_search == repository.stores["search_range"].result
    assert data.news == repository.stores["news_range"].result


def test_download_data_skips_failed_category():
    repository = make_repository(news_range=FakeStore(error=PyMongoError("down")))
    data = DashboardService(repository).get_download_data(["news", "music"], 1, 2)
    assert data.news is None
    assert data.music == repository.stores["music_range"].result


def test_download_data_keyword_failure_raises():
    repository = make_repository(keywords=FakeStore(error=PyMongoError("down")))
    with pytest.raises(PyMongoError):
        DashboardService(repository).get_download_data(["news"], 1, 2)


def test_service_wraps_dashboard_repository():
    repository = make_repository()
    service = Service(SimpleNamespace(dashboard=repository))
    assert service.dashboard.dashboard_repository is repository
    assert service.dashboard.get_realtime_search_list() == ["one", "two"]