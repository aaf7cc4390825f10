# routes_reports.py
"""
Routes for the Reports screen: period summary and CSV export.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, Response

from .config import Settings
from .deps import SessionState, get_session, get_settings, get_today, templates
from .logging_setup import get_logger
from .models import Period
from .services.csv_export import export_csv, export_filename

logger = get_logger(__name__)

router = APIRouter()

DEFAULT_PERIOD = Period.CURRENT_MONTH


def normalize_period(value: str | None) -> Period:
    """Unknown or missing period values fall back to the current month."""
    try:
        return Period(value)
    except ValueError:
        return DEFAULT_PERIOD


@router.get("/reports", response_class=HTMLResponse)
async def reports_page(
    request: Request,
    period: str = Query(DEFAULT_PERIOD.value),
    state: SessionState = Depends(get_session),
    settings: Settings = Depends(get_settings),
    today: date = Depends(get_today),
):
    selected = normalize_period(period)
    report = state.report_cache.get(state.reports, selected, today)

    return templates.TemplateResponse(
        request,
        "reports.html",
        {
            "settings": settings,
            "selected_period": selected,
            "report": report,
        },
    )


@router.get("/reports/export")
async def export_report(
    period: str = Query(DEFAULT_PERIOD.value),
    state: SessionState = Depends(get_session),
    today: date = Depends(get_today),
):
    """
    Download the selected period's transactions as CSV.
    """
    selected = normalize_period(period)
    report = state.report_cache.get(state.reports, selected, today)
    filename = export_filename(selected)

    content = export_csv(report.transactions)
    logger.info("Exported %d transactions to %s", len(report.transactions), filename)

    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
