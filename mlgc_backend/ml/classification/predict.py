# mlgc_backend/ml/classification/predict.py
import numpy as np
from mlgc_backend.core.config import Config
from mlgc_backend.core.errors import InferenceError
from .model_loader import get_classification_model

LABEL_CANCER = "Cancer"
LABEL_NON_CANCER = "Non-cancer"

SUGGESTIONS = {
    LABEL_CANCER: "Segera periksa ke dokter!",
    LABEL_NON_CANCER: "Penyakit kanker tidak terdeteksi.",
}


def label_from_score(score: float, threshold: float | None = None) -> str:
    """
    Binary: score > threshold -> Cancer, selain itu Non-cancer.
    """
    if threshold is None:
        threshold = Config.PREDICT_THRESHOLD
    return LABEL_CANCER if float(score) > threshold else LABEL_NON_CANCER


def suggestion_for(label: str) -> str:
    return SUGGESTIONS[label]


def predict_cancer(preprocessed_batch, model=None):
    """
    preprocessed_batch:
        numpy array shape (1, H, W, 3), nilai 0..1.

    return:
        label: str
        suggestion: str
        score: float (output sigmoid mentah)
    """
    if model is None:
        model = get_classification_model()

    try:
        preds = model.predict(preprocessed_batch, verbose=0)
        # Ambil nilai pertama dari output (shape (1, 1))
        score = float(np.asarray(preds).reshape(-1)[0])
    except (ValueError, IndexError) as e:
        raise InferenceError(f"inference failed: {e}") from e

    label = label_from_score(score)
    return label, suggestion_for(label), score
