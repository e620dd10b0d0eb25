# mlgc_backend/services/prediction_service.py
import logging
from datetime import datetime, timezone

from mlgc_backend.utils.image_io import preprocess_image_bytes
from mlgc_backend.utils.ids import generate_unique_id
from mlgc_backend.ml.classification.predict import predict_cancer
from mlgc_backend.database.firestore_db import save_prediction
from mlgc_backend.models.prediction_record import PredictionRecord

logger = logging.getLogger(__name__)


def _now_iso_utc() -> str:
    """
    Format sama seperti Date.toISOString(): 2024-01-01T00:00:00.000Z
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def predict_uploaded_image(image_bytes: bytes) -> dict:
    """
    Dipanggil oleh endpoint /predict:
    - preprocess image
    - panggil model klasifikasi
    - simpan 1 dokumen ke Firestore
    - kembalikan dict siap di-JSON-kan (field yang sama dengan dokumen)
    """
    batch = preprocess_image_bytes(image_bytes)

    label, suggestion, score = predict_cancer(batch)

    # createdAt dibuat sekali, dipakai untuk dokumen dan response
    record = PredictionRecord(
        id=generate_unique_id(),
        result=label,
        suggestion=suggestion,
        createdAt=_now_iso_utc(),
    )
    save_prediction(record)

    logger.info("[predict] id=%s result=%s score=%.4f", record.id, record.result, score)
    return record.to_dict()
