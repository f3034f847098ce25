from __future__ import annotations

from threading import Lock
from typing import Any, Protocol

from pydantic import BaseModel

from mimetype_api.core.logging import get_logger

logger = get_logger("services.classifier")

_EMPTY_LABELS = {"", "none", "undefined"}


class Classification(BaseModel):
    status: str = "ok"
    label: str
    is_text: bool
    score: float
    dl_label: str | None = None
    overwrite_reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


class Classifier(Protocol):
    def identify_bytes(self, data: bytes) -> Classification: ...


def _enum_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(getattr(value, "value", value)).strip()
    if text.lower() in _EMPTY_LABELS:
        return None
    return text


class MagikaClassifier:
    """Content-type detection backed by the ``magika`` model, loaded on first use."""

    def __init__(self) -> None:
        self._model: Any | None = None
        self._lock = Lock()

    @property
    def loaded(self) -> bool:
        return self._model is not None

    def load(self) -> Any:
        with self._lock:
            if self._model is None:
                from magika import Magika

                self._model = Magika()
                logger.info("classifier.loaded", extra={"component": "classifier"})
        return self._model

    def identify_bytes(self, data: bytes) -> Classification:
        result = self.load().identify_bytes(data)
        status = _enum_text(getattr(result, "status", "ok")) or "ok"
        if status != "ok":
            return Classification(status=status, label="unknown", is_text=False, score=0.0)

        prediction = result.prediction
        return Classification(
            status=status,
            label=_enum_text(prediction.output.label) or "unknown",
            is_text=bool(prediction.output.is_text),
            score=float(prediction.score),
            dl_label=_enum_text(prediction.dl.label),
            overwrite_reason=_enum_text(prediction.overwrite_reason),
        )


_classifier = MagikaClassifier()


def get_classifier() -> Classifier:
    return _classifier
