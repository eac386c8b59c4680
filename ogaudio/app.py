import logging

from flask import Flask, Response, jsonify, request

from . import config
from .errors import NotFoundError, RateLimited, UpstreamError, ValidationError
from .extractor import AudioInfoExtractor
from .rate_limit import RateLimiter

logger = logging.getLogger(__name__)

TOO_MANY_REQUESTS = "Too many requests. Please wait a moment and try again."
MISSING_URL_PARAMETER = "Missing ?url= parameter"
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def _client_id() -> str:
    return request.headers.get(config.CLIENT_IP_HEADER) or config.UNKNOWN_CLIENT_ID


def create_app(
    extractor: AudioInfoExtractor | None = None,
    rate_limiter: RateLimiter | None = None,
) -> Flask:
    app = Flask(__name__)
    audio_extractor = extractor if extractor is not None else AudioInfoExtractor()
    limiter = rate_limiter if rate_limiter is not None else RateLimiter()

    @app.after_request
    def add_cors_headers(response: Response) -> Response:
        response.headers.update(CORS_HEADERS)
        return response

    @app.route("/api/info", methods=["GET", "OPTIONS"])
    def audio_info():
        if request.method == "OPTIONS":
            return "", 204

        try:
            if not limiter.allow(_client_id()):
                raise RateLimited(TOO_MANY_REQUESTS)

            target_url = request.args.get("url", "")
            if not target_url.strip():
                return jsonify({"error": MISSING_URL_PARAMETER}), 400

            info = audio_extractor.get_audio_info(target_url)
        except RateLimited as error:
            return jsonify({"error": str(error)}), 429
        except ValidationError as error:
            return jsonify({"error": str(error)}), 400
        except NotFoundError as error:
            return jsonify({"error": str(error)}), 404
        except UpstreamError as error:
            return jsonify({"error": str(error)}), 502
        except Exception:
            logger.exception("Unexpected error while extracting audio info")
            return jsonify({"error": "Failed to fetch page."}), 502

        return jsonify(info.to_dict())

    return app
