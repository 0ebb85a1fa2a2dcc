# hospital_billing/main.py
import logging

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from hospital_billing import __version__
from hospital_billing.core.config import settings
from hospital_billing.api.router import api_router
from hospital_billing.api.exception_handlers import register_exception_handlers

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS ("*" by default)
_open_cors = "*" in settings.BACKEND_CORS_ORIGINS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if _open_cors else settings.BACKEND_CORS_ORIGINS,
    allow_credentials=not _open_cors,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
)

register_exception_handlers(app)


# Bare OPTIONS (no preflight headers) still gets an empty 204
@app.options("/{rest_of_path:path}")
async def options_handler(rest_of_path: str, request: Request):
    return Response(status_code=204)


app.include_router(api_router, prefix=settings.API_V1_STR)


# Health
@app.get("/")
def root():
    return {"message": f"{settings.PROJECT_NAME} API running", "version": __version__}


logger.info("%s started (api prefix %s)", settings.PROJECT_NAME, settings.API_V1_STR)
