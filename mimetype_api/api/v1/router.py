from fastapi import APIRouter

from mimetype_api.api.v1.endpoints import detect_url

router = APIRouter()
router.include_router(detect_url.router)
