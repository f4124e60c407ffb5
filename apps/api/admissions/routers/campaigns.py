"""Campaigns router - marketing campaigns, prospect attribution and ROI stats."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.exceptions import RequestValidationError
from sqlalchemy.orm import Session

from admissions.core.deps import get_db, require_csrf_header, require_policy
from admissions.schemas.campaign import (
    CampaignCreate,
    CampaignPerformance,
    CampaignProspectResponse,
    CampaignResponse,
    CampaignStatsResponse,
    CampaignUpdate,
)
from admissions.schemas.prospect import ProspectResponse
from admissions.services import campaign_service, prospect_service

# Advisors have no access to campaigns at all
router = APIRouter(dependencies=[Depends(require_policy("campaigns"))])


def _get_campaign_or_404(db: Session, campaign_id: UUID):
    campaign = campaign_service.get_campaign(db, campaign_id)
    if not campaign:
        raise HTTPException(status_code=404, detail="Campaign not found")
    return campaign


# =============================================================================
# Campaign CRUD
# =============================================================================


@router.get("", response_model=list[CampaignResponse])
def list_campaigns(
    status_filter: str | None = Query(None, alias="status"),
    channel: str | None = Query(None),
    db: Session = Depends(get_db),
):
    return campaign_service.list_campaigns(db, status=status_filter, channel=channel)


@router.get("/stats", response_model=CampaignStatsResponse)
def get_all_campaign_stats(db: Session = Depends(get_db)):
    """Totals and per-campaign performance across every campaign."""
    return campaign_service.get_all_campaign_stats(db)


@router.post("", response_model=CampaignResponse, status_code=status.HTTP_201_CREATED)
def create_campaign(
    data: CampaignCreate,
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    campaign = campaign_service.create_campaign(db, data)
    db.commit()
    db.refresh(campaign)
    return campaign


@router.get("/{campaign_id}", response_model=CampaignResponse)
def get_campaign(campaign_id: UUID, db: Session = Depends(get_db)):
    return _get_campaign_or_404(db, campaign_id)


@router.put("/{campaign_id}", response_model=CampaignResponse)
def update_campaign(
    campaign_id: UUID,
    data: CampaignUpdate,
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    campaign = _get_campaign_or_404(db, campaign_id)
    try:
        campaign_service.update_campaign(db, campaign, data)
    except campaign_service.CampaignRuleError as e:
        # Same 400 shape as a schema failure on that field
        raise RequestValidationError(
            [{"type": "value_error", "loc": ("body", e.field), "msg": str(e)}]
        )
    db.commit()
    db.refresh(campaign)
    return campaign


@router.delete("/{campaign_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_campaign(
    campaign_id: UUID,
    db: Session = Depends(get_db),
    session=Depends(require_policy("campaigns", "delete")),
    _csrf=Depends(require_csrf_header),
):
    _get_campaign_or_404(db, campaign_id)
    if not campaign_service.delete_campaign(db, campaign_id):
        raise HTTPException(status_code=500, detail="Internal server error")
    db.commit()
    return None


@router.get("/{campaign_id}/stats", response_model=CampaignPerformance)
def get_campaign_stats(campaign_id: UUID, db: Session = Depends(get_db)):
    campaign = _get_campaign_or_404(db, campaign_id)
    return campaign_service.get_campaign_stats(db, campaign)


# =============================================================================
# Prospect attribution
# =============================================================================


@router.get("/{campaign_id}/prospectos", response_model=list[ProspectResponse])
def list_campaign_prospects(campaign_id: UUID, db: Session = Depends(get_db)):
    _get_campaign_or_404(db, campaign_id)
    return campaign_service.list_campaign_prospects(db, campaign_id)


@router.post(
    "/{campaign_id}/prospectos/{prospect_id}",
    response_model=CampaignProspectResponse,
    status_code=status.HTTP_201_CREATED,
)
def link_prospect(
    campaign_id: UUID,
    prospect_id: UUID,
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    """Attribute a prospect to the campaign; linking twice is a no-op."""
    _get_campaign_or_404(db, campaign_id)
    if not prospect_service.get_prospect(db, prospect_id):
        raise HTTPException(status_code=404, detail="Prospect not found")
    link = campaign_service.link_prospect(db, campaign_id, prospect_id)
    db.commit()
    db.refresh(link)
    return link


@router.delete("/{campaign_id}/prospectos/{prospect_id}", status_code=status.HTTP_204_NO_CONTENT)
def unlink_prospect(
    campaign_id: UUID,
    prospect_id: UUID,
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    if not campaign_service.unlink_prospect(db, campaign_id, prospect_id):
        raise HTTPException(status_code=404, detail="Link not found")
    db.commit()
    return None
