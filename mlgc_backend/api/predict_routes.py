# mlgc_backend/api/predict_routes.py
import logging

from flask import Blueprint, request, jsonify
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from mlgc_backend.core.config import Config
from mlgc_backend.core.errors import (
    GENERIC_FAIL_MESSAGE,
    PayloadTooLargeError,
    PredictionError,
    ValidationError,
)
from mlgc_backend.ml.classification.model_loader import is_model_loaded
from mlgc_backend.services.prediction_service import predict_uploaded_image

logger = logging.getLogger(__name__)

predict_bp = Blueprint("predict", __name__)


def _too_large_error() -> PayloadTooLargeError:
    limit = Config.MAX_UPLOAD_BYTES
    return PayloadTooLargeError(
        f"upload exceeds {limit} bytes",
        message=f"Payload content length greater than maximum allowed: {limit}",
    )


@predict_bp.route("/predict", methods=["POST"])
def predict():
    """
    Endpoint utama prediksi kanker:
    - menerima file "image" (multipart/form-data, maks 1MB)
    - mengembalikan JSON berisi id, result, suggestion, createdAt
    """
    file = request.files.get("image")
    if file is None or file.filename == "":
        raise ValidationError("no image file in request")

    # Baca 1 byte lebih dari batas untuk tahu file kebesaran
    limit = Config.MAX_UPLOAD_BYTES
    image_bytes = file.read(limit + 1)
    if len(image_bytes) > limit:
        raise _too_large_error()

    data = predict_uploaded_image(image_bytes)

    return jsonify({
        "status": "success",
        "message": "Model is predicted successfully",
        "data": data,
    }), 200


@predict_bp.route("/healthz", methods=["GET"])
def healthz():
    return jsonify({"status": "ok", "modelLoaded": is_model_loaded()}), 200


@predict_bp.app_errorhandler(PredictionError)
def handle_prediction_error(e: PredictionError):
    if e.kind == "validation":
        logger.warning("[predict] %s error: %s", e.kind, e.detail)
    else:
        logger.error("[predict] %s error: %s", e.kind, e.detail, exc_info=e)
    return jsonify(e.to_dict()), e.status_code


@predict_bp.app_errorhandler(RequestEntityTooLarge)
def handle_request_too_large(e):
    # Ditolak werkzeug (MAX_CONTENT_LENGTH) sebelum route jalan
    return handle_prediction_error(_too_large_error())


@predict_bp.app_errorhandler(Exception)
def handle_unexpected_error(e):
    # HTTP error bawaan Flask (404, 405, ...) dikembalikan apa adanya
    if isinstance(e, HTTPException):
        return e
    logger.exception("[predict] unexpected error: %s", e)
    return jsonify({"status": "fail", "message": GENERIC_FAIL_MESSAGE}), 500
