import asyncio

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from mimetype_api.api.v1.schemas.detect import DetectionDetailsOut, DetectUrlOut, ErrorOut
from mimetype_api.core.logging import get_logger
from mimetype_api.fetch import FetchError, FetchErrorKind, SecureFetcher, get_fetcher
from mimetype_api.services.classifier import Classifier, get_classifier

logger = get_logger("api.detect_url")

router = APIRouter()
fetcher_dependency = Depends(get_fetcher)
classifier_dependency = Depends(get_classifier)

FETCH_ERROR_STATUS: dict[FetchErrorKind, int] = {
    FetchErrorKind.INVALID_URL: status.HTTP_400_BAD_REQUEST,
    FetchErrorKind.UNSUPPORTED_PROTOCOL: status.HTTP_400_BAD_REQUEST,
    FetchErrorKind.BLOCKED_HOSTNAME: status.HTTP_400_BAD_REQUEST,
    FetchErrorKind.BLOCKED_IP: status.HTTP_400_BAD_REQUEST,
    FetchErrorKind.DNS_RESOLUTION_FAILED: status.HTTP_400_BAD_REQUEST,
    FetchErrorKind.REDIRECT_REJECTED: status.HTTP_400_BAD_REQUEST,
    FetchErrorKind.PAYLOAD_TOO_LARGE: status.HTTP_413_CONTENT_TOO_LARGE,
    FetchErrorKind.HTTP_ERROR: status.HTTP_502_BAD_GATEWAY,
    FetchErrorKind.NETWORK_ERROR: status.HTTP_502_BAD_GATEWAY,
    FetchErrorKind.TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
}


def _error_response(status_code: int, error: str, message: str, kind: str | None = None) -> JSONResponse:
    body = ErrorOut(error=error, message=message, kind=kind)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.get(
    "/detect-url",
    response_model=DetectUrlOut,
    responses={
        400: {"model": ErrorOut},
        413: {"model": ErrorOut},
        422: {"model": ErrorOut},
        502: {"model": ErrorOut},
        504: {"model": ErrorOut},
    },
)
async def detect_url(
    url: str = Query(min_length=1),
    fetcher: SecureFetcher = fetcher_dependency,
    classifier: Classifier = classifier_dependency,
):
    try:
        data = await fetcher.fetch(url)
    except FetchError as exc:
        return _error_response(
            FETCH_ERROR_STATUS.get(exc.kind, status.HTTP_400_BAD_REQUEST),
            "Fetch failed",
            exc.message,
            exc.kind.value,
        )

    result = await asyncio.to_thread(classifier.identify_bytes, data)
    if not result.ok:
        logger.warning(
            "detect_url.classification_failed",
            extra={"component": "api", "url": url, "classifier_status": result.status},
        )
        return _error_response(
            status.HTTP_422_UNPROCESSABLE_CONTENT,
            "Detection failed",
            f"Classifier returned status: {result.status}",
        )

    return DetectUrlOut(
        url=url,
        type=result.label,
        isText=result.is_text,
        confidence=result.score,
        details=DetectionDetailsOut(
            dlPrediction=result.dl_label,
            overwriteReason=result.overwrite_reason,
        ),
    )
