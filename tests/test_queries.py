import json

import pytest
import requests

from portfolio.builder import IndexBuilder
from portfolio.config import Settings
from portfolio.errors import StorageError
from portfolio.queries import (
    ArticleQueries,
    LiveArticleSource,
    StaticArticleSource,
    queries_from_settings,
)
from portfolio.store import ArticleStore


class FakeResponse:
    def __init__(self, status_code, body=b""):
        self.status_code = status_code
        self._body = body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return json.loads(self._body)


class DirSession:
    """Serves GET requests from a local public tree, like a static host would."""

    def __init__(self, public_root, base_url="https://site.test"):
        self.public_root = public_root
        self.base_url = base_url
        self.requested = []

    def get(self, url, headers=None, timeout=None):
        self.requested.append(url)
        path = self.public_root / url[len(self.base_url):].lstrip("/")
        if not path.is_file():
            return FakeResponse(404)
        return FakeResponse(200, path.read_bytes())


@pytest.fixture
def live(populated_root):
    return ArticleQueries(LiveArticleSource(ArticleStore(populated_root)))


@pytest.fixture
def static(populated_root, tmp_path):
    public = tmp_path / "public"
    IndexBuilder(populated_root, public).build()
    return ArticleQueries(StaticArticleSource("https://site.test/", session=DirSession(public)))


def shape(articles):
    return [(a.slug, a.metadata.title, a.content, a.assets) for a in articles]


def test_live_queries(live):
    assert [a.slug for a in live.get_all()] == ["beta", "alpha", "gamma"]
    assert [a.slug for a in live.get_featured()] == ["alpha"]
    assert [a.slug for a in live.get_by_category("TESTING")] == ["beta", "alpha"]
    assert [a.slug for a in live.get_by_tag("css")] == ["gamma"]
    assert live.get_by_slug("gamma").content == "Gamma body\n"
    assert live.get_by_slug("missing-slug") is None
    assert live.categories() == ["Design", "testing"]
    assert live.tags() == ["CSS", "flask", "Python"]


def test_static_and_live_return_same_shapes(live, static):
    assert shape(static.get_all()) == shape(live.get_all())
    assert shape(static.get_featured()) == shape(live.get_featured())
    assert shape(static.get_by_category("testing")) == shape(live.get_by_category("Testing"))
    assert shape(static.get_by_tag("flask")) == shape(live.get_by_tag("flask"))
    assert shape(static.search("design")) == shape(live.search("design"))
    assert static.categories() == live.categories()
    assert type(static.get_by_slug("alpha")) is type(live.get_by_slug("alpha"))


def test_static_excludes_unpublished_from_listing(static):
    assert "draft" not in [a.slug for a in static.get_all()]
    assert static.get_by_slug("draft").metadata.published is False


def test_static_corrupt_article_document_is_skipped(static, tmp_path, caplog):
    (tmp_path / "public" / "data" / "articles" / "gamma.json").write_text("{truncated", encoding="utf-8")

    assert [a.slug for a in static.get_all()] == ["beta", "alpha"]
    assert [a.slug for a in static.get_by_category("testing")] == ["beta", "alpha"]
    assert static.tags() == ["flask", "Python"]
    assert "gamma" in caplog.text


def test_static_corrupt_index_still_fails(static, tmp_path):
    (tmp_path / "public" / "data" / "articles.json").write_text("{truncated", encoding="utf-8")
    with pytest.raises(StorageError):
        static.get_all()


@pytest.mark.parametrize("body", ["[1, 2]", '"text"', "42", '{"metadata": {}}'])
def test_static_document_of_wrong_shape_is_not_found(static, tmp_path, body):
    (tmp_path / "public" / "data" / "articles" / "gamma.json").write_text(body, encoding="utf-8")

    assert static.get_by_slug("gamma") is None
    assert "gamma" not in [a.slug for a in static.get_all()]


def test_static_missing_slug(static):
    assert static.get_by_slug("missing-slug") is None
    assert static.get_by_slug("../secret") is None


def test_static_missing_index_is_empty(tmp_path):
    q = ArticleQueries(StaticArticleSource("https://site.test", session=DirSession(tmp_path)))
    assert q.get_all() == []


def test_static_server_error_is_storage_error():
    class Broken:
        def get(self, url, headers=None, timeout=None):
            return FakeResponse(502)

    q = ArticleQueries(StaticArticleSource("https://site.test", session=Broken()))
    with pytest.raises(StorageError):
        q.get_all()


def test_static_network_error_is_storage_error():
    class Offline:
        def get(self, url, headers=None, timeout=None):
            raise requests.ConnectionError("offline")

    with pytest.raises(StorageError):
        StaticArticleSource("https://site.test", session=Offline()).get("alpha")


def test_queries_from_settings_picks_backend(tmp_path):
    live = queries_from_settings(Settings(content_dir=tmp_path))
    static = queries_from_settings(Settings(articles_mode="static", static_base_url="https://x.test"))
    assert isinstance(live.source, LiveArticleSource)
    assert isinstance(static.source, StaticArticleSource)
    assert static.source.base_url == "https://x.test"
