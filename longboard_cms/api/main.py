"""
Longboard CMS — FastAPI app
Démarrer : uvicorn longboard_cms.api.main:app --reload --port 8000
"""
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from page_builder.errors import UnrecognizedBlockType, ValidationFailure

from .routes import headers, pages

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="Longboard CMS — pagine dinamiche", version="1.0.0", docs_url="/docs")

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.exception_handler(RequestValidationError)
async def invalid_payload(request: Request, exc: RequestValidationError):
    return JSONResponse({"detail": jsonable_encoder(exc.errors())}, status_code=400)


@app.exception_handler(ValidationFailure)
async def validation_failure(request: Request, exc: ValidationFailure):
    return JSONResponse({"detail": str(exc), "field": exc.field}, status_code=400)


@app.exception_handler(UnrecognizedBlockType)
async def unknown_block_type(request: Request, exc: UnrecognizedBlockType):
    return JSONResponse({"detail": str(exc)}, status_code=400)


@app.on_event("startup")
def startup():
    from ..database import init_db
    init_db()
    log.info("DB initialisée (SQLite)")


@app.get("/health")
def health():
    return {"status": "ok", "service": "longboard_cms", "version": "1.0.0"}


@app.get("/admin")
def admin_home():
    return RedirectResponse("/admin/page-headers", status_code=303)


app.include_router(pages.router)
app.include_router(headers.router)
