import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .errors import AssetNotFound, BadRequest, Forbidden, StorageError
from .store import ASSETS_DIR

logger = logging.getLogger(__name__)

CACHE_CONTROL = "public, max-age=31536000, immutable"

CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".webp": "image/webp",
    ".pdf": "application/pdf",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def content_type_for(filename: str) -> str:
    return CONTENT_TYPES.get(os.path.splitext(filename or "")[1].lower(), DEFAULT_CONTENT_TYPE)


@dataclass
class Asset:
    path: Path
    data: bytes
    content_type: str
    cache_control: str = CACHE_CONTROL


class AssetResolver:
    """Maps an untrusted (slug, filename) pair onto a file under the content root."""

    def __init__(self, content_root: Union[str, Path]):
        self.root = Path(content_root)

    def resolve(self, slug: str, filename: str) -> Path:
        if not slug or not filename or "\x00" in slug or "\x00" in filename:
            raise BadRequest("slug and filename are required")

        root = self.root.resolve()
        candidate = (root / slug / ASSETS_DIR / filename).resolve()
        # must stay inside the article's own assets folder, which is inside root
        assets_dir = (root / slug / ASSETS_DIR).resolve()
        if not candidate.is_relative_to(root) or not candidate.is_relative_to(assets_dir):
            raise Forbidden(f"path escapes content root: slug={slug!r} filename={filename!r}")
        if not candidate.is_file():
            raise AssetNotFound(f"{slug}/{filename}")
        return candidate

    def open(self, slug: str, filename: str) -> Asset:
        path = self.resolve(slug, filename)
        try:
            data = path.read_bytes()
        except OSError as e:
            logger.error("Error serving article asset %s: %s", path, e)
            raise StorageError(str(e))
        return Asset(path=path, data=data, content_type=content_type_for(filename))
