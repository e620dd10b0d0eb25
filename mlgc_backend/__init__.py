# mlgc_backend/__init__.py
import logging

from flask import Flask
from flask_cors import CORS
from .core.config import Config
from .api.predict_routes import predict_bp
from .ml.classification.model_loader import init_model


def create_app():
    app = Flask(__name__)
    app.config.from_object(Config)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Izinkan akses dari frontend
    CORS(app, resources={r"/*": {"origins": Config.cors_origins()}})

    # Register blueprint untuk prediksi (/predict, /healthz)
    app.register_blueprint(predict_bp)

    # Model di-load sekali saat startup, dipakai bersama semua request
    if app.config["LOAD_MODEL_ON_STARTUP"]:
        init_model()

    return app
