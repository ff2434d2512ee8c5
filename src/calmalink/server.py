"""
Flask HTTP adapter for the CalmaLink chat service.

One endpoint, ``POST /api/chat``; everything else is CORS, rate limiting
and mapping errors to bilingual JSON messages.
"""
import json
import logging
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from werkzeug.exceptions import MethodNotAllowed

from . import replies
from .app import CalmaLinkApp
from .config import CalmaLinkConfig
from .config_loader import load_config_from_env
from .exceptions import ConfigurationError
from .security import OriginNotAllowedError, OriginPolicy, ValidationError

logger = logging.getLogger(__name__)

CHAT_PATH = "/api/chat"


def create_app(config: Optional[CalmaLinkConfig] = None, calmalink_app: Optional[CalmaLinkApp] = None) -> Flask:
    """
    Build the Flask application.

    :param config: Configuration (loaded from the environment when omitted)
    :param calmalink_app: Pre-built facade, mainly for tests
    :return: Flask app
    """
    if config is None:
        config = calmalink_app.config if calmalink_app else load_config_from_env()

    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )

    facade = calmalink_app or CalmaLinkApp(config)
    facade.initialize()

    app = Flask(__name__)
    app.json.ensure_ascii = False

    CORS(
        app,
        resources={
            r"/api/*": {
                "origins": list(config.allowed_origins),
                "methods": ["POST", "OPTIONS"],
                "allow_headers": ["Content-Type"],
            }
        },
    )

    limiter = Limiter(key_func=get_remote_address, app=app, default_limits=[], storage_uri="memory://")
    origin_policy = OriginPolicy(config.allowed_origins, require_origin=config.require_origin)

    def message_response(message: str, status: int, detail: Optional[str] = None):
        payload = {"message": message}
        if detail and config.expose_error_details:
            payload["detail"] = detail
        return jsonify(payload), status

    @app.before_request
    def check_origin():
        if not request.path.startswith("/api/"):
            return None
        try:
            origin_policy.check(request.headers.get("Origin"))
        except OriginNotAllowedError:
            return message_response(replies.ORIGIN_NOT_ALLOWED, 403)
        return None

    @app.route(CHAT_PATH, methods=["POST"])
    @limiter.limit(config.rate_limit, methods=["POST"])
    def chat():
        """Chat endpoint."""
        raw_body = request.get_data(as_text=True)
        try:
            body = json.loads(raw_body) if raw_body.strip() else {}
        except ValueError:
            logger.warning("Rejected request with invalid JSON body")
            return message_response(replies.INVALID_JSON, 400)

        messages = body.get("messages") if isinstance(body, dict) else None

        try:
            envelope = facade.chat(messages)
        except ValidationError as e:
            logger.warning(f"Input validation failed: {str(e)}")
            return message_response(replies.MESSAGE_TOO_LONG, 400, detail=str(e))
        except ConfigurationError as e:
            logger.error(f"Server misconfigured: {str(e)}")
            return message_response(replies.MISCONFIGURED, 500, detail=str(e))
        except Exception as e:
            logger.error(f"Chat endpoint error: {str(e)}", exc_info=True)
            return message_response(replies.INTERNAL_ERROR, 500, detail=str(e))

        return jsonify(envelope.to_dict(include_intent=config.include_intent_tag))

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"message": "Not found. / No encontrado."}), 404

    @app.errorhandler(405)
    def method_not_allowed(error: MethodNotAllowed):
        response = jsonify({"message": replies.METHOD_NOT_ALLOWED})
        response.status_code = 405
        response.headers["Allow"] = ", ".join(sorted(error.valid_methods or ["OPTIONS", "POST"]))
        return response

    @app.errorhandler(429)
    def ratelimit_handler(error):
        return message_response(replies.RATE_LIMITED, 429)

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Internal Server Error: {error}")
        original = getattr(error, "original_exception", None)
        return message_response(replies.INTERNAL_ERROR, 500, detail=str(original) if original else None)

    logger.info(f"CalmaLink API ready - allowed origins: {', '.join(origin_policy.allowed_origins)}")
    return app
