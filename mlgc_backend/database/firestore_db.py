# mlgc_backend/database/firestore_db.py
import logging

from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore

from mlgc_backend.core.config import Config
from mlgc_backend.core.errors import UpstreamError
from mlgc_backend.models.prediction_record import PredictionRecord

logger = logging.getLogger(__name__)

_firestore_client = None


def get_firestore_client():
    global _firestore_client
    if _firestore_client is None:
        _firestore_client = firestore.Client()
    return _firestore_client


def get_predictions_collection(client=None):
    client = client or get_firestore_client()
    return client.collection(Config.PREDICTIONS_COLLECTION)


def save_prediction(record: PredictionRecord, collection=None) -> None:
    """
    Tulis 1 dokumen dengan key = record.id (overwrite kalau sudah ada).
    """
    if collection is None:
        collection = get_predictions_collection()
    try:
        collection.document(record.id).set(record.to_dict())
    except gcp_exceptions.GoogleAPIError as e:
        raise UpstreamError(f"Firestore write failed for id={record.id}: {e}") from e

    logger.debug("[firestore] saved prediction %s", record.id)
