import json
import logging
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from pydantic import ValidationError

from .errors import ArticleNotFound, InvalidArticle, PortfolioError, StorageError
from .markdown import strip_front_matter
from .models import Article, ArticleMetadata

logger = logging.getLogger(__name__)

METADATA_FILE = "metadata.json"
MARKDOWN_FILE = "article.md"
ASSETS_DIR = "assets"


def is_safe_slug(slug: str) -> bool:
    """A slug must be a single, non-hidden path segment."""
    if not slug or slug in (".", ".."):
        return False
    if slug.startswith("."):
        return False
    return not any(ch in slug for ch in ("/", "\\", "\x00"))


def sort_newest_first(articles: List[Article]) -> List[Article]:
    # stable: equal dates keep directory order
    return sorted(articles, key=lambda a: a.metadata.published_at, reverse=True)


class ArticleStore:
    """Read-only view over a directory holding one folder per article."""

    def __init__(self, content_root: Union[str, Path]):
        self.root = Path(content_root)

    def __repr__(self) -> str:
        return f"ArticleStore({str(self.root)!r})"

    def slugs(self) -> List[str]:
        if not self.root.is_dir():
            return []
        return sorted(p.name for p in self.root.iterdir() if p.is_dir() and is_safe_slug(p.name))

    def read_article(self, slug: str) -> Article:
        """Load one article or raise ArticleNotFound / InvalidArticle."""
        if not is_safe_slug(slug):
            raise ArticleNotFound(f"unsafe slug {slug!r}")
        folder = self.root / slug
        meta_path = folder / METADATA_FILE
        md_path = folder / MARKDOWN_FILE
        if not folder.is_dir():
            raise ArticleNotFound(f"no folder for {slug!r}")
        if not meta_path.is_file() or not md_path.is_file():
            raise InvalidArticle(f"{slug}: {METADATA_FILE} or {MARKDOWN_FILE} missing")

        try:
            raw = json.loads(meta_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise InvalidArticle(f"{slug}: {METADATA_FILE} is not valid JSON ({e})")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"{slug}: cannot read {METADATA_FILE}: {e}")
        try:
            metadata = ArticleMetadata.model_validate(raw)
        except ValidationError as e:
            raise InvalidArticle(f"{slug}: invalid metadata ({e.error_count()} errors): {e}")

        try:
            content = strip_front_matter(md_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"{slug}: cannot read {MARKDOWN_FILE}: {e}")

        return Article(slug=slug, metadata=metadata, content=content, assets=self.list_assets(slug))

    def list_assets(self, slug: str) -> List[str]:
        assets_dir = self.root / slug / ASSETS_DIR
        if not assets_dir.is_dir():
            return []
        return sorted(p.name for p in assets_dir.iterdir() if p.is_file())

    def load_article(self, slug: str) -> Optional[Article]:
        """Article for `slug`, or None when it is missing or malformed."""
        try:
            return self.read_article(slug)
        except ArticleNotFound:
            return None
        except (InvalidArticle, StorageError) as e:
            logger.warning("Failed to load article %s: %s", slug, e.detail)
            return None

    def read_content(self, slug: str) -> Optional[str]:
        if not is_safe_slug(slug):
            return None
        md_path = self.root / slug / MARKDOWN_FILE
        if not md_path.is_file():
            return None
        try:
            return strip_front_matter(md_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"{slug}: cannot read {MARKDOWN_FILE}: {e}")

    def scan(self) -> Iterator[Tuple[str, Union[Article, PortfolioError]]]:
        """Yield (slug, Article or the error that kept it out) for every folder."""
        for slug in self.slugs():
            try:
                yield slug, self.read_article(slug)
            except (InvalidArticle, StorageError) as e:
                yield slug, e

    def list_articles(self) -> List[Article]:
        articles = []
        for slug, item in self.scan():
            if not isinstance(item, Article):
                logger.warning("Skipping article folder %s: %s", slug, item.detail)
                continue
            if not item.metadata.published:
                continue
            articles.append(item)
        return sort_newest_first(articles)

    def filter_by_category(self, category: str) -> List[Article]:
        return [a for a in self.list_articles() if a.metadata.in_category(category)]

    def filter_by_tag(self, tag: str) -> List[Article]:
        return [a for a in self.list_articles() if a.metadata.has_tag(tag)]

    def filter_featured(self) -> List[Article]:
        return [a for a in self.list_articles() if a.metadata.featured]

    def search(self, query: str) -> List[Article]:
        return [a for a in self.list_articles() if a.matches(query)]
