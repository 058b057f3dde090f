"""Campaign statistics, performance reports, bid recommendations and health."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ads_domain.types import CompetitionLevel, DateRange

from ..dependencies import ensure_campaign_access, get_service
from ..models import User
from ..schemas.reports import (
    BidRecommendationOut,
    HealthOut,
    PerformanceMetricsOut,
    PerformanceReportOut,
)
from ..security.jwt import get_current_user
from ..services.ad_campaign import AdCampaignService

REPORT_WINDOW_DAYS = 30

router = APIRouter(prefix="/ads", tags=["reports"])


@router.get("/campaigns/{campaign_id}/statistics", response_model=PerformanceMetricsOut)
def campaign_statistics(
    campaign_id: str,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    current_user: User = Depends(get_current_user),
    service: AdCampaignService = Depends(get_service),
):
    ensure_campaign_access(service.get_campaign(campaign_id, current_user.tenant_id), current_user)
    metrics = service.get_campaign_statistics(campaign_id, current_user.tenant_id, date_from, date_to)
    return PerformanceMetricsOut.model_validate(metrics)


@router.get("/campaigns/{campaign_id}/reports", response_model=PerformanceReportOut)
def performance_report(
    campaign_id: str,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    current_user: User = Depends(get_current_user),
    service: AdCampaignService = Depends(get_service),
):
    ensure_campaign_access(service.get_campaign(campaign_id, current_user.tenant_id), current_user)
    end = date_to or datetime.now(timezone.utc)
    start = date_from or end - timedelta(days=REPORT_WINDOW_DAYS)
    report = service.generate_performance_report(
        campaign_id, current_user.tenant_id, DateRange(start=start, end=end)
    )
    return PerformanceReportOut.model_validate(report)


@router.get("/campaigns/{campaign_id}/bid-recommendation", response_model=BidRecommendationOut)
def bid_recommendation(
    campaign_id: str,
    competition_level: Optional[CompetitionLevel] = None,
    current_user: User = Depends(get_current_user),
    service: AdCampaignService = Depends(get_service),
):
    ensure_campaign_access(service.get_campaign(campaign_id, current_user.tenant_id), current_user)
    recommendation = service.recommend_bid(campaign_id, current_user.tenant_id, competition_level)
    return BidRecommendationOut.model_validate(recommendation)


@router.get("/health", response_model=HealthOut)
def health(service: AdCampaignService = Depends(get_service)):
    result = service.health_check()
    status_code = 200 if result["status"] == "healthy" else 503
    return JSONResponse(status_code=status_code, content=result)
