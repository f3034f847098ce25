from fastapi import FastAPI

from mimetype_api import __version__
from mimetype_api.api.v1.router import router as v1_router
from mimetype_api.core.logging import configure_logging
from mimetype_api.middleware.request_id import RequestIDMiddleware

configure_logging()

app = FastAPI(title="Mimetype API", version=__version__)
app.add_middleware(RequestIDMiddleware)

app.include_router(v1_router, prefix="/api/v1")
