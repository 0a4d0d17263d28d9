from flask import jsonify
from werkzeug.exceptions import HTTPException


class PortfolioError(Exception):
    status = 500
    public_message = "Internal server error"

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.public_message)
        self.detail = detail or self.public_message


class BadRequest(PortfolioError):
    status = 400
    public_message = "Bad Request"


class Forbidden(PortfolioError):
    status = 403
    public_message = "Invalid file path"


class NotFound(PortfolioError):
    status = 404
    public_message = "Not found"


class ArticleNotFound(NotFound):
    public_message = "Article not found"


class AssetNotFound(NotFound):
    public_message = "File not found"


class InvalidArticle(PortfolioError):
    """Article folder exists but cannot be turned into an Article."""
    public_message = "Article not found"
    status = 404


class StorageError(PortfolioError):
    public_message = "Internal server error"


def register_error_handlers(app):
    @app.errorhandler(PortfolioError)
    def _portfolio_error(e: PortfolioError):
        if e.status >= 500:
            app.logger.error("request failed: %s", e.detail)
        return jsonify(error=e.public_message), e.status

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        return jsonify(error=e.name), e.code

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        app.logger.exception("unhandled error")
        return jsonify(error="Internal server error"), 500
