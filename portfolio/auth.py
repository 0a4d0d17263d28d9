import hmac

from flask import Blueprint, current_app, jsonify, request

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def _sec_eq(a: str, b: str) -> bool:
    return hmac.compare_digest((a or "").encode("utf-8"), (b or "").encode("utf-8"))


def check_credentials(username: str, password: str) -> bool:
    settings = current_app.config["SETTINGS"]
    # no short-circuit: both fields are always compared
    user_ok = _sec_eq(settings.admin_username, username.strip())
    pass_ok = _sec_eq(settings.admin_password, password)
    return user_ok and pass_ok


@auth_bp.post("/login")
def login():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return jsonify(success=False, message="Login failed"), 400

    username = body.get("username")
    password = body.get("password")
    if not isinstance(username, str) or not isinstance(password, str):
        return jsonify(success=False, message="Login failed"), 400

    if check_credentials(username, password):
        return jsonify(success=True, message="Login successful"), 200
    current_app.logger.info("rejected admin login for %r", username)
    return jsonify(success=False, message="Invalid credentials"), 401
