import json
from pathlib import Path

import pytest

from portfolio import create_app
from portfolio.config import Settings


def base_metadata(**overrides):
    meta = {
        "title": "Testing Flask apps",
        "summary": "How we test things",
        "author": "Sam",
        "publishDate": "2024-01-01",
        "tags": ["Python", "Flask"],
        "category": "Testing",
        "coverImage": "cover.png",
        "readingTime": 5,
        "featured": False,
        "published": True,
        "seo": {"metaDescription": "testing", "keywords": ["flask"]},
    }
    meta.update(overrides)
    return meta


def write_article(root: Path, slug: str, metadata=None, body="# Hello\n\nBody text.\n", assets=None):
    folder = root / slug
    folder.mkdir(parents=True, exist_ok=True)
    if metadata is not None:
        text = metadata if isinstance(metadata, str) else json.dumps(metadata)
        (folder / "metadata.json").write_text(text, encoding="utf-8")
    if body is not None:
        (folder / "article.md").write_text(body, encoding="utf-8")
    for name, data in (assets or {}).items():
        (folder / "assets").mkdir(exist_ok=True)
        (folder / "assets" / name).write_bytes(data)
    return folder


@pytest.fixture
def content_root(tmp_path):
    root = tmp_path / "content" / "articles"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def populated_root(content_root):
    write_article(
        content_root, "alpha",
        base_metadata(title="Alpha", publishDate="2024-03-01", featured=True),
        assets={"cover.png": b"\x89PNG fake", "data.bin": b"\x00\x01"},
    )
    write_article(
        content_root, "beta",
        base_metadata(title="Beta", publishDate="2024-05-10", category="testing", tags=["flask"],
                      coverImage="https://example.com/b.jpg"),
    )
    write_article(
        content_root, "gamma",
        base_metadata(title="Gamma", publishDate="2023-12-31", category="Design", tags=["CSS"],
                      coverImage="/images/g.png"),
        body="---\ntitle: ignored\n---\nGamma body\n",
    )
    write_article(content_root, "draft", base_metadata(title="Draft", published=False))
    write_article(content_root, "broken-json", "{not json")
    write_article(content_root, "no-markdown", base_metadata(), body=None)
    write_article(content_root, "bad-shape", base_metadata(title="", readingTime=0))
    return content_root


@pytest.fixture
def settings(tmp_path, populated_root):
    return Settings(
        content_dir=populated_root,
        public_dir=tmp_path / "public",
        site_config_path=tmp_path / "site.json",
        admin_username="admin",
        admin_password="s3cret",
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
