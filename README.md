# saedori

An HTTP API server behind a daily-trends dashboard. It serves the latest
music charts, news headlines and realtime search words kept in MongoDB, picks
"today's keywords" from them once a day, and offers date-ranged downloads of
what it has collected.

Two background schedulers run next to the web server:

- `saedori.crawling.CrawlingScheduler` requests `/api/v1/crawl` from a
  crawler service at ten minutes past every hour and stores the music, news
  and realtime search results whose `crawling` status is `"Success"`;
- `saedori.keywords.KeywordScheduler` runs daily at 07:10 and stores keywords
  for music (top domestic and global titles), news (headlines cut to three
  words), realtime search (the top three Korean search words) and coins
  (the up to three largest KRW-market moves beyond 3%, from the Upbit public
  API). A category whose keywords cannot be gathered is logged and skipped.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Configuration

The server reads `config.<env>.toml` from the working directory, where `<env>`
comes from the `APP_ENV` environment variable and defaults to `dev`:

```toml
[server]
port = ":8080"
crawl_api_base_url = "http://localhost:8000"
```

`port` is a listen address of the form `[host]:port`; an empty host means all
interfaces, and an empty address means `0.0.0.0:8080`. A missing or malformed
file stops the server at start.

Data is kept in the MongoDB database `saedori`, in the collections `Keyword`,
`Music`, `News` and `RealtimeSearch`.

## Running

```
saedori
saedori --mongodb-uri mongodb://localhost:27017
```

This loads the configuration, connects to MongoDB (by default at
`mongodb://localhost:27017`), starts both schedulers and serves the API on the
configured address.

## Endpoints

All routes live under `/api/v1`.

### `GET /api/v1/keywords`

The newest keyword document for each stored category, under `top3_keywords`,
with `"message": "SUCCESS"`.

### `GET /api/v1/interest/detail?category=...`

Detail data for one or more of `music`, `news` and `realtime-search`, given as
a comma-separated list in any order. A single category answers with its data
under `result`; two or three categories answer with `music_summary`,
`news_summary` and `realtime_search_summary`. A database failure answers with
status 400 and `{"message": "FAILED"}`. A combination that matches none of
these answers with an empty body and status 200.

### `GET /api/v1/download?category=...&start_date=...&end_date=...`

Everything stored between two Unix timestamps (inclusive), for the listed
categories, with `"message": "Success"`. The `result` holds `dn_keywords`,
`dn_news`, `dn_realtime_search` and `dn_music`; categories not asked for are
`null`. A missing `category` or a non-integer date answers with status 400 and
an `error` message; a failure reading keywords answers with status 500.

## Using it as a library

The pieces can be wired by hand:

```python
from pymongo import MongoClient

from saedori.app import Application
from saedori.config import load_config

config = load_config("dev")
app = Application(config, MongoClient())
app.start()
```

`saedori.service.DashboardService` gives direct access to the same queries the
HTTP handlers use, `saedori.router.Router` exposes the Flask application as
its `app` attribute, and `saedori.parser.parse_category` splits and sorts a
category list the way the interest endpoint does.

## What it does not do

The package does not crawl music charts, news or search trends itself; it
only stores what an external crawler service returns from
`/api/v1/crawl`. Without that service the crawling scheduler logs an error
each hour and stores nothing. The API has no authentication.