# mlgc_backend/core/config.py
import os
import tempfile
from dotenv import load_dotenv

# Load .env sekali di awal aplikasi
load_dotenv()

def _env_bool(name: str, default: str = "0") -> bool:
    v = str(os.environ.get(name, default)).strip().lower()
    return v in ("1", "true", "yes", "y", "on")

def default_model_dir() -> str:
    """
    Folder download model kalau MODEL_LOCAL_DIR tidak diset.
    Di temp dir, bukan di folder package (site-packages bisa read-only).
    """
    return os.path.join(tempfile.gettempdir(), "mlgc_model")

class Config:
    # =========================
    # SERVER
    # =========================
    HOST = os.environ.get("HOST", "0.0.0.0")
    PORT = int(os.environ.get("PORT", 8080))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Origins yang boleh akses API (dipisah koma, "*" = semua)
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    # =========================
    # UPLOAD
    # =========================
    # Batas ukuran file gambar (1MB)
    MAX_UPLOAD_BYTES = int(os.environ.get("MAX_UPLOAD_BYTES", 1000000))

    # Ruang tambahan untuk header multipart, supaya file tepat 1MB tetap lolos
    MULTIPART_OVERHEAD_BYTES = int(os.environ.get("MULTIPART_OVERHEAD_BYTES", 64 * 1024))

    # Dipakai Flask/werkzeug untuk menolak body terlalu besar sebelum masuk route
    MAX_CONTENT_LENGTH = MAX_UPLOAD_BYTES + MULTIPART_OVERHEAD_BYTES

    # =========================
    # MODEL (Cloud Storage)
    # =========================
    MODEL_BUCKET_NAME = os.environ.get("MODEL_BUCKET_NAME", "mlgcmodel-abdisetiawan")
    MODEL_PREFIX = os.environ.get("MODEL_PREFIX", "model/")
    MODEL_MANIFEST_NAME = os.environ.get("MODEL_MANIFEST_NAME", "model.json")

    MODEL_LOCAL_DIR = os.environ.get(
        "MODEL_LOCAL_DIR",
        default_model_dir(),
    )

    # Kalau 0, model baru di-load saat request pertama
    LOAD_MODEL_ON_STARTUP = _env_bool("LOAD_MODEL_ON_STARTUP", "1")

    # =========================
    # PREPROCESSING / PREDIKSI
    # =========================
    IMG_SIZE = int(os.environ.get("IMG_SIZE", 224))
    IMG_REENCODE_FORMAT = os.environ.get("IMG_REENCODE_FORMAT", "JPEG")

    # score > threshold -> "Cancer"
    PREDICT_THRESHOLD = float(os.environ.get("PREDICT_THRESHOLD", 0.5))

    # =========================
    # DATABASE (Firestore)
    # =========================
    PREDICTIONS_COLLECTION = os.environ.get("PREDICTIONS_COLLECTION", "predictions")

    @classmethod
    def cors_origins(cls):
        """
        "*" atau list origin hasil split koma.
        """
        raw = (cls.CORS_ORIGINS or "*").strip()
        if raw == "*":
            return "*"
        return [o.strip() for o in raw.split(",") if o.strip()]
