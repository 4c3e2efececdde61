# backend/app.py
import logging

from flask import Flask, request
from flask_cors import CORS

from .config import load_config
from .errors import register_error_handlers
from .images import ImageUploader
from .models import db
from .routes import register_routes


def create_app(config=None, uploader=None):
    config = config if config is not None else load_config()

    app = Flask(__name__)
    app.config.from_object(config)
    app.logger.setLevel(logging.DEBUG if config.ENV == "development" else logging.INFO)

    db.init_app(app)
    if config.APP_ORIGIN:
        CORS(app, origins=config.APP_ORIGIN)
    else:
        CORS(app, origins="*", send_wildcard=True)

    app.extensions["image_uploader"] = uploader or ImageUploader(config.CLOUDINARY)
    if uploader is None and not config.CLOUDINARY.configured:
        app.logger.warning("Cloudinary credentials missing; image uploads will fail")

    # Ensure DB tables exist
    with app.app_context():
        db.create_all()

    register_error_handlers(app, db)
    register_routes(app)

    @app.after_request
    def log_request(response):
        app.logger.info("%s %s %s", request.method, request.full_path.rstrip("?"), response.status_code)
        return response

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(port=app.config["PORT"], debug=(app.config["ENV"] == "development"))
