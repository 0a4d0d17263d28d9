"""One read API over articles, backed either by the content folders (live)
or by the JSON tree written by the index builder (static export).

Both sources hand back the same `Article` objects so callers cannot tell
which deployment mode served them.
"""
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import requests

from .errors import StorageError
from .models import Article, ArticleSummary
from .store import ArticleStore, is_safe_slug, sort_newest_first

logger = logging.getLogger(__name__)

HTTP_TIMEOUT = 15


class ArticleSource(ABC):
    @abstractmethod
    def all(self) -> List[Article]:
        """Published articles, newest first."""

    @abstractmethod
    def get(self, slug: str) -> Optional[Article]:
        """Any article by slug, or None."""


class LiveArticleSource(ArticleSource):
    def __init__(self, store: ArticleStore):
        self.store = store

    def all(self) -> List[Article]:
        return self.store.list_articles()

    def get(self, slug: str) -> Optional[Article]:
        return self.store.load_article(slug)


class StaticArticleSource(ArticleSource):
    def __init__(self, base_url: str, session=None, timeout: int = HTTP_TIMEOUT):
        self.base_url = (base_url or "").rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _fetch(self, path: str):
        url = f"{self.base_url}{path}"
        try:
            r = self.session.get(url, headers={"Accept": "application/json"}, timeout=self.timeout)
        except requests.RequestException as e:
            raise StorageError(f"GET {url} failed: {e}")
        if r.status_code == 404:
            return None
        try:
            r.raise_for_status()
            return r.json()
        except (requests.RequestException, ValueError) as e:
            raise StorageError(f"GET {url} failed: {e}")

    def summaries(self) -> List[ArticleSummary]:
        data = self._fetch("/data/articles.json") or []
        out = []
        for entry in data:
            try:
                out.append(ArticleSummary.model_validate(entry))
            except ValueError as e:
                logger.warning("Skipping index entry %r: %s", entry.get("slug") if isinstance(entry, dict) else entry, e)
        return out

    def get(self, slug: str) -> Optional[Article]:
        if not is_safe_slug(slug):
            return None
        data = self._fetch(f"/data/articles/{slug}.json")
        if data is None:
            return None
        if not isinstance(data, dict):
            logger.warning("Failed to load article %s: document is not an object", slug)
            return None
        try:
            return Article.from_dict(data)
        except (KeyError, ValueError) as e:
            logger.warning("Failed to load article %s: %s", slug, e)
            return None

    def all(self) -> List[Article]:
        articles = []
        for summary in self.summaries():
            if not summary.metadata.published:
                continue
            try:
                article = self.get(summary.slug)
            except StorageError as e:
                logger.warning("Skipping article %s: %s", summary.slug, e.detail)
                continue
            if article is not None:
                articles.append(article)
        return sort_newest_first(articles)


class ArticleQueries:
    def __init__(self, source: ArticleSource):
        self.source = source

    def get_all(self) -> List[Article]:
        return self.source.all()

    def get_featured(self) -> List[Article]:
        return [a for a in self.get_all() if a.metadata.featured]

    def get_by_category(self, category: str) -> List[Article]:
        return [a for a in self.get_all() if a.metadata.in_category(category)]

    def get_by_tag(self, tag: str) -> List[Article]:
        return [a for a in self.get_all() if a.metadata.has_tag(tag)]

    def get_by_slug(self, slug: str) -> Optional[Article]:
        return self.source.get(slug)

    def search(self, query: str) -> List[Article]:
        return [a for a in self.get_all() if a.matches(query)]

    def categories(self) -> List[str]:
        seen = {}
        for a in self.get_all():
            if a.metadata.category:
                seen.setdefault(a.metadata.category.lower(), a.metadata.category)
        return sorted(seen.values(), key=str.lower)

    def tags(self) -> List[str]:
        seen = {}
        for a in self.get_all():
            for t in a.metadata.tags:
                seen.setdefault(t.lower(), t)
        return sorted(seen.values(), key=str.lower)


def queries_from_settings(settings) -> ArticleQueries:
    if settings.articles_mode == "static":
        return ArticleQueries(StaticArticleSource(settings.static_base_url))
    return ArticleQueries(LiveArticleSource(ArticleStore(settings.content_dir)))
