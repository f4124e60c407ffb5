"""Reports router - report definitions, ad-hoc generation and manual execution."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from admissions.core.deps import get_db, require_csrf_header, require_policy
from admissions.schemas.report import (
    ExecuteReportResponse,
    GenerateReportRequest,
    GenerateReportResponse,
    ReportDefinitionCreate,
    ReportDefinitionResponse,
    ReportDefinitionUpdate,
)
from admissions.services import report_export_service, report_service

router = APIRouter(dependencies=[Depends(require_policy("reports"))])


def _get_definition_or_404(db: Session, definition_id: UUID):
    definition = report_service.get_definition(db, definition_id)
    if not definition:
        raise HTTPException(status_code=404, detail="Report not found")
    return definition


@router.get("", response_model=list[ReportDefinitionResponse])
def list_reports(
    is_active: bool | None = Query(None),
    db: Session = Depends(get_db),
):
    return report_service.list_definitions(db, is_active=is_active)


@router.post("", response_model=ReportDefinitionResponse, status_code=status.HTTP_201_CREATED)
def create_report(
    data: ReportDefinitionCreate,
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    definition = report_service.create_definition(db, data)
    db.commit()
    db.refresh(definition)
    return definition


@router.post("/generate", response_model=GenerateReportResponse)
def generate_report(
    data: GenerateReportRequest,
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    """Generate a report now; with a format the file is also written to REPORTS_DIR."""
    payload = report_service.generate(db, data.type, data.filters)
    file_path = None
    if data.format:
        file_path = report_export_service.export_report(payload, data.format)
    return {"data": payload, "file_path": file_path}


@router.get("/{report_id}", response_model=ReportDefinitionResponse)
def get_report(report_id: UUID, db: Session = Depends(get_db)):
    return _get_definition_or_404(db, report_id)


@router.put("/{report_id}", response_model=ReportDefinitionResponse)
def update_report(
    report_id: UUID,
    data: ReportDefinitionUpdate,
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    definition = _get_definition_or_404(db, report_id)
    report_service.update_definition(db, definition, data)
    db.commit()
    db.refresh(definition)
    return definition


@router.delete("/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_report(
    report_id: UUID,
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    definition = _get_definition_or_404(db, report_id)
    report_service.delete_definition(db, definition)
    db.commit()
    return None


@router.post("/{report_id}/execute", response_model=ExecuteReportResponse)
def execute_report(
    report_id: UUID,
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    """Run a definition immediately and advance its schedule."""
    definition = _get_definition_or_404(db, report_id)
    file_path = report_service.execute_scheduled(db, report_id)
    if not file_path:
        raise HTTPException(status_code=500, detail="Report execution failed")
    db.commit()
    db.refresh(definition)
    return {
        "file_path": file_path,
        "last_run_at": definition.last_run_at,
        "next_run_at": definition.next_run_at,
    }
