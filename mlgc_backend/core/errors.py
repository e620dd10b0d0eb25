# mlgc_backend/core/errors.py
"""
Error bertag untuk pipeline prediksi.

Tiap error membawa:
- kind        : "validation" | "upstream" | "internal"
- status_code : HTTP status yang dikirim ke client
- message     : pesan aman untuk client (penyebab asli hanya masuk log)
"""

GENERIC_FAIL_MESSAGE = "Terjadi kesalahan dalam melakukan prediksi"


class PredictionError(Exception):
    kind = "internal"
    status_code = 500
    message = GENERIC_FAIL_MESSAGE

    def __init__(self, detail: str = "", message: str | None = None):
        # detail = penyebab untuk log, message = teks untuk response
        super().__init__(detail or self.message)
        self.detail = detail
        if message is not None:
            self.message = message

    def to_dict(self) -> dict:
        return {"status": "fail", "message": self.message}


class ValidationError(PredictionError):
    kind = "validation"
    status_code = 400
    message = "Tidak ada gambar yang diunggah"


class PayloadTooLargeError(ValidationError):
    status_code = 413
    message = "Payload content length greater than maximum allowed: 1000000"


class InvalidImageError(ValidationError):
    message = GENERIC_FAIL_MESSAGE


class UpstreamError(PredictionError):
    kind = "upstream"
    status_code = 503
    message = "Layanan prediksi sedang tidak tersedia"


class ModelNotFoundError(UpstreamError):
    pass


class InferenceError(PredictionError):
    pass
