"""
Risk prediction service for flood and landslide early warnings.
"""

import logging
from typing import List, Dict, Any
from datetime import datetime, timedelta
from sqlalchemy.orm import Session

from backend.config import settings
from backend.models import District, RiskPrediction, DisasterType
from backend.schemas import (
    GenerateRiskPredictionInput,
    RiskPredictionFilter,
    RiskPredictionReport,
    RiskReportSummary,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_REPORT_MARKDOWN = (
    "# Disaster Risk Early Warning Report\n\n"
    "This report is still under development."
)


class RiskService:
    """Service for generating, querying and reporting risk predictions."""

    def __init__(self, report_period_days: int = None):
        self.report_period_days = report_period_days or settings.risk_report_period_days

    def generate_risk_predictions(
        self,
        db: Session,
        params: GenerateRiskPredictionInput
    ) -> List[RiskPrediction]:
        """
        Generate flood and landslide predictions for the coming days.

        Inputs a scoring model would draw on are weather observations,
        district topography (elevation, slope, soil type) and historical
        disasters. No scoring model is configured, so nothing is persisted
        and the result is always empty.
        """
        scope = self._prediction_scope(db, params)
        logger.info(
            "Risk prediction requested for %d district(s), types=%s, days_ahead=%d; no model configured",
            len(scope["district_ids"]), scope["disaster_types"], params.days_ahead
        )
        return []

    def get_risk_predictions(self, db: Session, filters: RiskPredictionFilter) -> List[RiskPrediction]:
        """Stored predictions matching the filters, ordered by target date."""
        query = db.query(RiskPrediction)
        if filters.district_id is not None:
            query = query.filter(RiskPrediction.district_id == filters.district_id)
        if filters.disaster_type is not None:
            query = query.filter(RiskPrediction.disaster_type == filters.disaster_type)
        if filters.start_date is not None:
            query = query.filter(RiskPrediction.target_date >= filters.start_date)
        if filters.end_date is not None:
            query = query.filter(RiskPrediction.target_date <= filters.end_date)
        if filters.risk_level is not None:
            query = query.filter(RiskPrediction.risk_level == filters.risk_level)
        return query.order_by(RiskPrediction.target_date, RiskPrediction.id).all()

    def generate_risk_report(self, db: Session, filters: RiskPredictionFilter) -> RiskPredictionReport:
        """
        Build the markdown risk report for the coming period.

        The report body is a fixed placeholder with an empty prediction
        list and a zeroed summary, whatever the filters.
        """
        now = datetime.utcnow()
        logger.info("Risk report requested with filters %s", filters.dict(exclude_none=True))
        return RiskPredictionReport(
            generated_at=now,
            report_period_start=now,
            report_period_end=now + timedelta(days=self.report_period_days),
            predictions=[],
            summary=RiskReportSummary(
                total_districts=0,
                high_risk_count=0,
                medium_risk_count=0,
                low_risk_count=0,
                average_data_completeness=0
            ),
            markdown_report=PLACEHOLDER_REPORT_MARKDOWN
        )

    def _prediction_scope(self, db: Session, params: GenerateRiskPredictionInput) -> Dict[str, Any]:
        """Districts and disaster types a generation request covers."""
        query = db.query(District.id)
        if params.district_id is not None:
            query = query.filter(District.id == params.district_id)
        district_ids = [row[0] for row in query.all()]

        if params.disaster_type is not None:
            disaster_types = [params.disaster_type.value]
        else:
            disaster_types = [t.value for t in DisasterType]

        return {"district_ids": district_ids, "disaster_types": disaster_types}
