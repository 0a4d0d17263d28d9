"""Static export of the article tree.

Layout produced under the public root:

    articles/{slug}/assets/{filename}   copied asset files
    data/articles/{slug}.json           {slug, metadata, content, assets}
    data/articles.json                  [{slug, metadata}, ...] newest first

Publishing is additive: artifacts of articles removed from the content root
are left in place. Two builds must not write into the same tree at once.
"""
import json
import logging
import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Union

from .models import Article
from .store import ASSETS_DIR, ArticleStore, sort_newest_first

logger = logging.getLogger(__name__)

EXTERNAL_RE = re.compile(r"^(https?:)?//", re.I)
LOCAL_ASSET_PREFIX_RE = re.compile(r"^(\./)?assets/")


def public_asset_path(slug: str, filename: str) -> str:
    return f"/articles/{slug}/assets/{filename}"


def normalize_cover_image(slug: str, cover: str) -> str:
    """Point a relative cover reference at the exported asset copy."""
    cover = str(cover or "")
    if not cover or EXTERNAL_RE.match(cover) or cover.startswith("/"):
        return cover
    return public_asset_path(slug, LOCAL_ASSET_PREFIX_RE.sub("", cover))


def write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")


@dataclass
class BuildReport:
    articles: List[str] = field(default_factory=list)
    assets: int = 0
    skipped: List[str] = field(default_factory=list)


class IndexBuilder:
    def __init__(self, content_root: Union[str, Path], public_root: Union[str, Path]):
        self.store = ArticleStore(content_root)
        self.public_root = Path(public_root)

    @property
    def data_root(self) -> Path:
        return self.public_root / "data"

    def article_json_path(self, slug: str) -> Path:
        return self.data_root / "articles" / f"{slug}.json"

    def index_path(self) -> Path:
        return self.data_root / "articles.json"

    def copy_assets(self, article: Article) -> int:
        src_dir = self.store.root / article.slug / ASSETS_DIR
        dest_dir = self.public_root / "articles" / article.slug / ASSETS_DIR
        for name in article.assets:
            dest_dir.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src_dir / name, dest_dir / name)
        return len(article.assets)

    def export_article(self, article: Article) -> Article:
        cover = normalize_cover_image(article.slug, article.metadata.cover_image)
        exported = article.model_copy(
            update={"metadata": article.metadata.model_copy(update={"cover_image": cover})}
        )
        write_json(self.article_json_path(article.slug), exported.to_dict())
        return exported

    def build(self) -> BuildReport:
        report = BuildReport()
        if not self.store.root.is_dir():
            logger.info("No content directory at %s, skipping static content build", self.store.root)
            return report

        exported = []
        for slug, item in self.store.scan():
            if not isinstance(item, Article):
                logger.warning("Skipping article folder %s: %s", slug, item.detail)
                report.skipped.append(slug)
                continue
            report.assets += self.copy_assets(item)
            exported.append(self.export_article(item))
            report.articles.append(slug)

        write_json(self.index_path(), [a.summary().to_dict() for a in sort_newest_first(exported)])
        logger.info("Static content built: %d articles, %d assets", len(report.articles), report.assets)
        return report
