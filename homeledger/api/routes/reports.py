"""Report API routes."""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from homeledger.api.deps import RecordId, get_current_user
from homeledger.models.user import User
from homeledger.schemas.report import ReportResponse, YearlyReportResponse
from homeledger.services import get_db
from homeledger.services.report_export import export_filename, render_report_text
from homeledger.services.report_service import ReportService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/property/{property_id}", response_model=ReportResponse)
async def get_report(
    property_id: RecordId,
    start_date: str | None = Query(None, alias="startDate"),  # noqa: B008
    end_date: str | None = Query(None, alias="endDate"),  # noqa: B008
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> ReportResponse:
    """Expense report for an optional inclusive date range.

    Returns:
        200: Report
        400: Unparseable or inverted date bounds
        404: Property not found
    """
    report = ReportService(db).get_report(property_id, user, start_date, end_date)
    return ReportResponse.model_validate(report)


@router.get("/property/{property_id}/year/{year}", response_model=YearlyReportResponse)
async def get_yearly_report(
    property_id: RecordId,
    year: int,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> YearlyReportResponse:
    """Calendar-year report with a monthly breakdown.

    Returns:
        200: Report with year and twelve monthlyBreakdown entries
        400: Year outside 1..9999
        404: Property not found
    """
    report = ReportService(db).get_yearly_report(property_id, user, year)
    return YearlyReportResponse.model_validate(report)


@router.get("/property/{property_id}/export", response_class=PlainTextResponse)
async def export_report(
    property_id: RecordId,
    start_date: str | None = Query(None, alias="startDate"),  # noqa: B008
    end_date: str | None = Query(None, alias="endDate"),  # noqa: B008
    year: int | None = Query(None),  # noqa: B008
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> PlainTextResponse:
    """Plain-text report download; ``year`` selects the yearly variant."""
    service = ReportService(db)
    if year is not None:
        report = service.get_yearly_report(property_id, user, year)
    else:
        report = service.get_report(property_id, user, start_date, end_date)

    filename = export_filename(report)
    logger.info("Exporting report for property %d as %s", property_id, filename)
    return PlainTextResponse(
        render_report_text(report),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
