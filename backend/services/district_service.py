"""
District reference data, weather observations and historical disasters.
"""

import logging
from typing import List, Optional
from datetime import date
from sqlalchemy.orm import Session

from backend.exceptions import NotFoundError
from backend.models import District, WeatherData, HistoricalDisaster, DisasterType
from backend.schemas import DistrictCreate, WeatherDataCreate, HistoricalDisasterCreate

logger = logging.getLogger(__name__)


class DistrictService:
    """Service for districts and their append-only time series."""

    def create_district(self, db: Session, data: DistrictCreate) -> District:
        district = District(**data.dict())
        db.add(district)
        db.commit()
        db.refresh(district)
        logger.info("Created district %s (%s, %s)", district.id, district.name, district.province)
        return district

    def get_districts(self, db: Session) -> List[District]:
        return db.query(District).order_by(District.id).all()

    def get_district(self, db: Session, district_id: int) -> Optional[District]:
        return db.query(District).filter(District.id == district_id).first()

    def create_weather_data(self, db: Session, data: WeatherDataCreate) -> WeatherData:
        """Record a weather observation for an existing district."""
        self._require_district(db, data.district_id)

        record = WeatherData(**data.dict())
        db.add(record)
        db.commit()
        db.refresh(record)
        logger.info("Recorded weather for district %s on %s", record.district_id, record.date)
        return record

    def get_weather_data(
        self,
        db: Session,
        district_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[WeatherData]:
        """Weather observations in date order, optionally filtered."""
        query = db.query(WeatherData)
        if district_id is not None:
            query = query.filter(WeatherData.district_id == district_id)
        if start_date is not None:
            query = query.filter(WeatherData.date >= start_date)
        if end_date is not None:
            query = query.filter(WeatherData.date <= end_date)
        return query.order_by(WeatherData.date, WeatherData.id).all()

    def create_historical_disaster(self, db: Session, data: HistoricalDisasterCreate) -> HistoricalDisaster:
        """Record a past disaster for an existing district."""
        self._require_district(db, data.district_id)

        disaster = HistoricalDisaster(**data.dict())
        db.add(disaster)
        db.commit()
        db.refresh(disaster)
        logger.info(
            "Recorded %s in district %s on %s",
            disaster.disaster_type.value, disaster.district_id, disaster.date
        )
        return disaster

    def get_historical_disasters(
        self,
        db: Session,
        district_id: Optional[int] = None,
        disaster_type: Optional[DisasterType] = None
    ) -> List[HistoricalDisaster]:
        query = db.query(HistoricalDisaster)
        if district_id is not None:
            query = query.filter(HistoricalDisaster.district_id == district_id)
        if disaster_type is not None:
            query = query.filter(HistoricalDisaster.disaster_type == disaster_type)
        return query.order_by(HistoricalDisaster.date.desc(), HistoricalDisaster.id.desc()).all()

    def _require_district(self, db: Session, district_id: int) -> District:
        district = self.get_district(db, district_id)
        if district is None:
            logger.warning("District %s not found", district_id)
            raise NotFoundError("District", district_id)
        return district
