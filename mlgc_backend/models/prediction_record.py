# mlgc_backend/models/prediction_record.py
from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class PredictionRecord:
    id: str
    result: str
    suggestion: str
    createdAt: str  # ISO-8601 UTC

    def to_dict(self) -> dict:
        return asdict(self)
