from pydantic import BaseModel


class DetectionDetailsOut(BaseModel):
    dlPrediction: str | None = None
    overwriteReason: str | None = None


class DetectUrlOut(BaseModel):
    url: str
    type: str
    isText: bool
    confidence: float
    details: DetectionDetailsOut


class ErrorOut(BaseModel):
    error: str
    message: str
    kind: str | None = None
