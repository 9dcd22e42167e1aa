# routers/reports.py
from __future__ import annotations
import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException

from api_utils import pdf_response, to_http
from deps import require_admin, require_login
from errors import EnergyError, StoreError
from schemas import RankingItem, RankingResponse
from services import pdf_builder
from services.ranking import compare_months, monthly_totals, rank_monthly

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["reports"])


def _report_failed(what: str, e: StoreError) -> HTTPException:
    logger.error(f"[report] {what} failed: {e}")
    return HTTPException(500, "Report generation failed")


def _keep_copy(pdf: bytes, filename: str):
    """Durable copy; a failed write is logged and the PDF is still streamed."""
    try:
        pdf_builder.save_copy(pdf, filename)
    except OSError as e:
        logger.error(f"[report] could not save {filename}: {e}")


@router.get("/ranking/monthly/{month}", response_model=RankingResponse)
async def monthly_ranking(month: str, user=Depends(require_login)):
    try:
        entries = await rank_monthly(month)
    except EnergyError as e:
        raise to_http(e)
    return RankingResponse(
        month=month,
        ranking=[RankingItem(position=e.position, name=e.name, consumption=e.total) for e in entries],
    )


@router.get("/reports/monthly/pdf/{month}")
async def monthly_report_pdf(month: str, user=Depends(require_login)):
    logger.info(f"[report] monthly {month} requested by {user.username}")
    try:
        entries = await monthly_totals(month)
    except StoreError as e:
        raise _report_failed(f"monthly {month}", e)
    except EnergyError as e:
        raise to_http(e)

    now = datetime.now()
    pdf = pdf_builder.build_monthly_report(month, entries, generated_at=now)
    _keep_copy(pdf, pdf_builder.report_filename("Monthly_Report", month, now=now))
    return pdf_response(pdf, f"Monthly_Report_{month}.pdf")


@router.get("/reports/compare/pdf/{device_id}/{month_a}/{month_b}")
async def comparison_report_pdf(device_id: str, month_a: str, month_b: str, user=Depends(require_admin)):
    logger.info(f"[report] comparison {device_id} {month_a} vs {month_b} requested by {user.username}")
    try:
        cmp = await compare_months(device_id, month_a, month_b)
    except StoreError as e:
        raise _report_failed(f"comparison {device_id}", e)
    except EnergyError as e:
        raise to_http(e)

    now = datetime.now()
    pdf = pdf_builder.build_comparison_report(cmp, generated_at=now)
    _keep_copy(pdf, pdf_builder.report_filename("Comparison", device_id, month_a, month_b, now=now))
    return pdf_response(pdf, f"Comparison_{device_id}_{month_a}_{month_b}.pdf")
