import os
import logging

from flask import Flask, jsonify, request, g
from flask_login import LoginManager
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

import auth_service
import user_service
from errors import CotizaError, AuthenticationError
from models import db
from routes import auth_bp
from seed import seed_defaults

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///cotizai.db")
SEED_DEFAULTS = os.environ.get("SEED_DEFAULTS", "1") == "1"

login_manager = LoginManager()
login_manager.session_protection = None


@login_manager.request_loader
def load_user_from_request(req):
    """Usuario del token Bearer; los claims quedan en g.token_claims."""
    header = req.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        g.auth_error = AuthenticationError.default_message
        return None
    try:
        claims = auth_service.decode_token(header[len("Bearer "):].strip())
    except AuthenticationError as e:
        g.auth_error = e.message
        return None

    user = user_service.get_user_by_id(claims["sub"])
    if not user:
        g.auth_error = "Usuario no encontrado"
        return None
    g.token_claims = claims
    return user


@login_manager.unauthorized_handler
def unauthorized():
    mensaje = getattr(g, "auth_error", None) or AuthenticationError.default_message
    return jsonify({"success": False, "error": mensaje}), 401


def register_error_handlers(app):
    @app.errorhandler(CotizaError)
    def handle_cotiza_error(e):
        if e.status_code >= 500:
            logger.error(f"REQUEST_ERROR | path={request.path} | status={e.status_code} | error={e.message}")
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        mensaje = "Endpoint not found" if e.code == 404 else e.description
        return jsonify({"success": False, "error": mensaje}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        logger.exception(f"UNHANDLED_ERROR | path={request.path} | error={e}")
        return jsonify({"success": False, "error": "Error interno del servidor"}), 500


def create_app(config_overrides=None):
    app = Flask(__name__)
    app.secret_key = os.environ.get("SESSION_SECRET", "cotizai-dev-secret")
    app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)

    app.config["SQLALCHEMY_DATABASE_URI"] = DATABASE_URL
    app.config["SEED_DEFAULTS"] = SEED_DEFAULTS
    if config_overrides:
        app.config.update(config_overrides)
    if not app.config["SQLALCHEMY_DATABASE_URI"].startswith("sqlite"):
        app.config.setdefault("SQLALCHEMY_ENGINE_OPTIONS", {
            "pool_recycle": 300,
            "pool_pre_ping": True,
        })
    app.json.ensure_ascii = False

    db.init_app(app)
    login_manager.init_app(app)
    app.register_blueprint(auth_bp)
    register_error_handlers(app)

    @app.route("/")
    def health():
        return jsonify({"success": True, "service": "cotizai", "status": "ok"})

    with app.app_context():
        db.create_all()
        if app.config["SEED_DEFAULTS"]:
            seed_defaults()

    return app


app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", "5000")), debug=True)
