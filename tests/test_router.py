from unittest import mock

import pytest

from saedori.models import DownloadData, Keywords, News, NewsItem
from saedori.router import Router


class FakeDashboard:
    def __init__(self):
        self.download_calls = []

    def get_keywords_list(self):
        return [Keywords(created_at=1, keywords=["a", "b"], category="music")]

    def get_news_details(self):
        return News(created_at=7, news_items=[NewsItem(company="c", title="t", lead="l", url="u")])

    def get_download_data(self, categories, start_date, end_date):
        self.download_calls.append((categories, start_date, end_date))
        return DownloadData(keywords=[])


class FakeService:
    def __init__(self):
        self.dashboard = FakeDashboard()


@pytest.fixture
def service():
    return FakeService()


@pytest.fixture
def router(service):
    return Router(service)


@pytest.fixture
def client(router):
    return router.app.test_client()


def test_keywords_endpoint(client):
    response = client.get("/api/v1/keywords")
    assert response.status_code == 200
    assert response.get_json() == {
        "message": "SUCCESS",
        "top3_keywords": [{"created_at": 1, "keyword": ["a", "b"], "category": "music"}],
    }


def test_interest_detail_news(client, service):
    response = client.get("/api/v1/interest/detail?category=news")
    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "SUCCESS"
    assert body["result"] == [service.dashboard.get_news_details().to_dict()]


def test_download_requires_category(client):
    response = client.get("/api/v1/download")
    assert response.status_code == 400
    assert response.get_json() == {"error": "category parameter is required"}


def test_download_passes_parameters(client, service):
    response = client.get("/api/v1/download?category=news,music&start_date=1&end_date=2")
    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "Success"
    assert body["result"]["dn_keywords"] == []
    assert service.dashboard.download_calls == [(["news", "music"], 1, 2)]


def test_endpoints_only_accept_get(client):
    assert client.post("/api/v1/keywords").status_code == 405


def test_unknown_path_is_not_found(client):
    assert client.get("/api/v2/keywords").status_code == 404


def test_get_registers_route_and_chains(router):
    returned = router.get("/ping", lambda: "pong")
    assert returned is router
    response = router.app.test_client().get("/ping")
    assert response.get_data(as_text=True) == "pong"


def test_server_start_runs_on_parsed_address(router):
    with mock.patch.object(router.app, "run") as run:
        router.server_start(":8080")
    run.assert_called_once_with(host="0.0.0.0", port=8080)


def test_server_start_rejects_bad_address(router):
    with mock.patch.object(router.app, "run") as run:
        with pytest.raises(ValueError):
            router.server_start("8080")
    assert run.call_count == 0