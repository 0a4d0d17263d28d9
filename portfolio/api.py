from flask import Blueprint, Response, current_app, jsonify, request

from .assets import AssetResolver
from .errors import ArticleNotFound
from .markdown import render_markdown
from .store import ArticleStore

api_bp = Blueprint("api", __name__, url_prefix="/api")


def _queries():
    return current_app.extensions["portfolio.queries"]


def _settings():
    return current_app.config["SETTINGS"]


def _truthy(value) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


@api_bp.get("/articles")
def list_articles():
    q = _queries()
    category = (request.args.get("category") or "").strip()
    tag = (request.args.get("tag") or "").strip()
    search = (request.args.get("q") or "").strip()

    if category:
        items = q.get_by_category(category)
    else:
        items = q.get_all()
    if tag:
        items = [a for a in items if a.metadata.has_tag(tag)]
    if _truthy(request.args.get("featured")):
        items = [a for a in items if a.metadata.featured]
    if search:
        items = [a for a in items if a.matches(search)]
    return jsonify([a.to_dict() for a in items])


@api_bp.get("/categories")
def list_categories():
    return jsonify(_queries().categories())


@api_bp.get("/tags")
def list_tags():
    return jsonify(_queries().tags())


@api_bp.get("/articles/<slug>")
def get_article(slug):
    a = _queries().get_by_slug(slug)
    if a is None:
        raise ArticleNotFound(slug)
    return jsonify(a.to_dict())


@api_bp.get("/articles/<slug>/content")
def get_article_content(slug):
    content = ArticleStore(_settings().content_dir).read_content(slug)
    if content is None:
        raise ArticleNotFound(slug)
    return jsonify(content=content)


@api_bp.get("/articles/<slug>/html")
def get_article_html(slug):
    a = _queries().get_by_slug(slug)
    if a is None:
        raise ArticleNotFound(slug)
    return jsonify(html=render_markdown(a.content))


@api_bp.get("/articles/<slug>/assets/<path:filename>")
def get_article_asset(slug, filename):
    asset = AssetResolver(_settings().content_dir).open(slug, filename)
    return Response(
        asset.data,
        status=200,
        headers={"Content-Type": asset.content_type, "Cache-Control": asset.cache_control},
    )


@api_bp.get("/config")
def get_config():
    return jsonify(current_app.extensions["portfolio.site_config"].get())
