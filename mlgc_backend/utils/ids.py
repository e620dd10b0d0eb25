# mlgc_backend/utils/ids.py
import uuid


def generate_unique_id() -> str:
    """
    ID dokumen prediksi: UUID versi 4 (36 karakter, random dari CSPRNG OS).
    """
    return str(uuid.uuid4())
