# mlgc_backend/utils/image_io.py
import io
import numpy as np
from PIL import Image, UnidentifiedImageError
from mlgc_backend.core.config import Config
from mlgc_backend.core.errors import InvalidImageError


def _resize_and_reencode(image_bytes: bytes, size: int, fmt: str) -> bytes:
    """
    Resize langsung ke (size, size) tanpa jaga aspect ratio,
    lalu encode ulang ke satu format tetap (default JPEG).
    """
    img = Image.open(io.BytesIO(image_bytes))
    img = img.convert("RGB")
    img = img.resize((size, size))

    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def preprocess_image_bytes(image_bytes: bytes, size: int | None = None) -> np.ndarray:
    """
    bytes upload -> batch numpy (1, H, W, 3) float32, nilai 0..1.
    """
    if not image_bytes:
        raise InvalidImageError("empty image buffer")

    size = int(size or Config.IMG_SIZE)

    try:
        encoded = _resize_and_reencode(image_bytes, size, Config.IMG_REENCODE_FORMAT)

        # Decode hasil encode ulang, pastikan 3 channel
        img = Image.open(io.BytesIO(encoded)).convert("RGB")
        arr = np.asarray(img, dtype=np.float32)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise InvalidImageError(f"cannot decode image: {e}") from e

    # Tambah dimensi batch
    arr = np.expand_dims(arr, axis=0)

    # Normalisasi 0..255 -> 0..1
    arr = arr / 255.0

    return arr
