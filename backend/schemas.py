"""
Pydantic schemas for API request/response models.
"""

import datetime as dt
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List

from backend.models import DisasterType, RiskLevel


# Task schemas
class TaskBase(BaseModel):
    title: str = Field(..., description="Task title")
    description: str = Field("", description="Free-form task description")


class TaskCreate(TaskBase):
    pass


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, description="New title, unchanged when omitted")
    description: Optional[str] = Field(None, description="New description, unchanged when omitted")

    @field_validator("title", "description")
    @classmethod
    def reject_null(cls, value):
        # omitted fields keep their default; an explicit null is invalid
        if value is None:
            raise ValueError("must be a string when provided")
        return value


class TaskResponse(TaskBase):
    id: int
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True


class DeleteTaskResponse(BaseModel):
    success: bool


# District schemas
class DistrictBase(BaseModel):
    name: str = Field(..., min_length=1, description="District name")
    province: str = Field(..., min_length=1, description="Province name")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude in degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in degrees")
    elevation: float = Field(..., description="Meters above sea level")
    slope_angle: float = Field(..., ge=0, le=90, description="Average slope in degrees")
    soil_type: str = Field(..., min_length=1, description="Dominant soil type")


class DistrictCreate(DistrictBase):
    pass


class DistrictResponse(DistrictBase):
    id: int
    created_at: dt.datetime

    class Config:
        from_attributes = True


# Weather data schemas
class WeatherDataBase(BaseModel):
    district_id: int = Field(..., gt=0, description="District id")
    date: dt.date = Field(..., description="Date of observation")
    rainfall: float = Field(..., ge=0, description="Rainfall in mm per day")
    humidity: float = Field(..., ge=0, le=100, description="Relative humidity percentage")
    temperature: float = Field(..., ge=-50, le=60, description="Temperature in Celsius")
    wind_speed: float = Field(..., ge=0, description="Wind speed in km/h")


class WeatherDataCreate(WeatherDataBase):
    pass


class WeatherDataResponse(WeatherDataBase):
    id: int
    created_at: dt.datetime

    class Config:
        from_attributes = True


# Historical disaster schemas
class HistoricalDisasterBase(BaseModel):
    district_id: int = Field(..., gt=0, description="District id")
    disaster_type: DisasterType = Field(..., description="Disaster type")
    date: dt.date = Field(..., description="Date of the disaster")
    severity_score: int = Field(..., ge=1, le=10, description="Severity on a 1-10 scale")
    casualties: int = Field(..., ge=0, description="Number of casualties")
    economic_loss: float = Field(..., ge=0, description="Economic loss")
    description: Optional[str] = Field(None, description="Free-form description")


class HistoricalDisasterCreate(HistoricalDisasterBase):
    pass


class HistoricalDisasterResponse(HistoricalDisasterBase):
    id: int
    created_at: dt.datetime

    class Config:
        from_attributes = True


# Risk prediction schemas
class RiskPredictionResponse(BaseModel):
    id: int
    district_id: int
    disaster_type: DisasterType
    prediction_date: dt.date
    target_date: dt.date
    risk_level: RiskLevel
    hazard_score: float = Field(..., ge=0, le=100)
    main_factors: List[str]
    public_recommendation: str
    government_recommendation: str
    data_completeness: float = Field(..., ge=0, le=100)
    assumptions: Optional[str] = None
    created_at: dt.datetime

    class Config:
        from_attributes = True


class GenerateRiskPredictionInput(BaseModel):
    district_id: Optional[int] = Field(None, gt=0, description="Restrict to one district")
    disaster_type: Optional[DisasterType] = Field(None, description="Restrict to one disaster type")
    days_ahead: int = Field(7, ge=1, le=7, description="Number of days to predict")


class RiskPredictionFilter(BaseModel):
    district_id: Optional[int] = Field(None, gt=0)
    disaster_type: Optional[DisasterType] = None
    start_date: Optional[dt.date] = Field(None, description="Earliest target date")
    end_date: Optional[dt.date] = Field(None, description="Latest target date")
    risk_level: Optional[RiskLevel] = None


# Report schemas
class RiskReportSummary(BaseModel):
    total_districts: int
    high_risk_count: int
    medium_risk_count: int
    low_risk_count: int
    average_data_completeness: float = Field(..., ge=0, le=100)


class RiskPredictionReport(BaseModel):
    generated_at: dt.datetime
    report_period_start: dt.datetime
    report_period_end: dt.datetime
    predictions: List[RiskPredictionResponse]
    summary: RiskReportSummary
    markdown_report: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str
