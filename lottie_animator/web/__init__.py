from __future__ import annotations

from flask import Flask


def create_app() -> Flask:
    app = Flask(__name__)
    app.config.setdefault("DEFAULT_NAME", "animation")
    app.config.setdefault("STRICT_EXPORT", True)
    app.config.setdefault("JSON_INDENT", None)

    from .views import bp as views_bp

    app.register_blueprint(views_bp)
    return app
