# app.py — Flask admin API over the Wix CMS + Cloudinary staging storage
from __future__ import annotations
import logging
import os

from flask import Flask
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from api.common import fail
from config import Settings
from errors import AdminError
import extensions


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AdminError)
    def _admin_error(e: AdminError):
        if e.status >= 500:
            app.logger.error("%s: %s", type(e).__name__, e.message)
        return fail(e.message, e.status)

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        if isinstance(e, RequestEntityTooLarge):
            return fail("Request too large. Maximum "
                        f"{app.config['MAX_CONTENT_LENGTH'] // (1024 * 1024)}MB allowed.", 400)
        return fail(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        app.logger.exception("unhandled error")
        return fail(str(e) or "Internal error", 500)


def create_app(settings: Settings | None = None,
               services: extensions.Services | None = None) -> Flask:
    load_dotenv()
    settings = settings or (services.settings if services else Settings.from_env())

    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.secret_key
    # whole multipart body, checked before werkzeug parses it
    app.config["MAX_CONTENT_LENGTH"] = settings.limits.max_request_bytes

    if not settings.wix.api_key:
        app.logger.warning("WIX_API_KEY is not set; Wix calls will be rejected")
    app.logger.info("Wix site -> %s, storage -> %s",
                    settings.wix.site_id or "?", settings.storage.cloud_name or "?")

    extensions.init_app(app, services or extensions.Services.build(settings))
    _register_error_handlers(app)

    # Blueprints API
    from api.content import gallery_bp, news_bp
    from api.upload import upload_bp
    from api.folders import folders_bp
    from api.media import media_bp
    app.register_blueprint(gallery_bp, url_prefix="/api/gallery")
    app.register_blueprint(news_bp,    url_prefix="/api/news")
    app.register_blueprint(upload_bp,  url_prefix="/api/upload")
    app.register_blueprint(folders_bp, url_prefix="/api/folders")
    app.register_blueprint(media_bp,   url_prefix="/api/media")

    @app.get("/health")
    def health():
        return {"success": True}, 200

    return app


app = create_app()

if __name__ == "__main__":
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    debug = os.getenv("FLASK_DEBUG", "0") in ("1", "true", "True")
    port = int(os.getenv("PORT", "5000"))
    app.run(host="0.0.0.0", port=port, debug=debug)
