# api_utils.py
import logging

from fastapi import HTTPException
from fastapi.responses import Response

from errors import EnergyError, NotFound, StoreError, ValidationError

logger = logging.getLogger(__name__)


# ---------- error translation ----------
def to_http(exc: EnergyError) -> HTTPException:
    if isinstance(exc, NotFound):
        return HTTPException(404, f"{exc.what.capitalize()} not found")
    if isinstance(exc, ValidationError):
        return HTTPException(422, str(exc))
    if isinstance(exc, StoreError):
        logger.error(f"[api] {exc}")
        return HTTPException(500, "Storage failure")
    return HTTPException(500, "Internal error")


# ---------- PDF responses ----------
def pdf_response(pdf_bytes: bytes, filename: str) -> Response:
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f"inline; filename={filename}"},
    )
