"""
SQLAlchemy models for the Disaster Risk Early Warning System.
"""

import enum
from sqlalchemy import Column, Integer, String, Date, DateTime, Float, Numeric, Text, ForeignKey, JSON, Enum
from sqlalchemy.orm import relationship
from backend.database import Base
from datetime import datetime


class DisasterType(str, enum.Enum):
    flood = "flood"
    landslide = "landslide"


class RiskLevel(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class District(Base):
    __tablename__ = "districts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    province = Column(String(100), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    elevation = Column(Float, nullable=False)  # meters above sea level
    slope_angle = Column(Float, nullable=False)  # degrees
    soil_type = Column(String(50), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    weather_data = relationship("WeatherData", back_populates="district")
    historical_disasters = relationship("HistoricalDisaster", back_populates="district")
    risk_predictions = relationship("RiskPrediction", back_populates="district")


class WeatherData(Base):
    __tablename__ = "weather_data"

    id = Column(Integer, primary_key=True, index=True)
    district_id = Column(Integer, ForeignKey("districts.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    rainfall = Column(Float, nullable=False)  # mm per day
    humidity = Column(Float, nullable=False)  # percent
    temperature = Column(Float, nullable=False)  # celsius
    wind_speed = Column(Float, nullable=False)  # km/h
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    district = relationship("District", back_populates="weather_data")


class HistoricalDisaster(Base):
    __tablename__ = "historical_disasters"

    id = Column(Integer, primary_key=True, index=True)
    district_id = Column(Integer, ForeignKey("districts.id"), nullable=False, index=True)
    disaster_type = Column(Enum(DisasterType, name="disaster_type"), nullable=False)
    date = Column(Date, nullable=False, index=True)
    severity_score = Column(Integer, nullable=False)  # 1-10 scale
    casualties = Column(Integer, nullable=False)
    economic_loss = Column(Numeric(15, 2, asdecimal=False), nullable=False)
    description = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    district = relationship("District", back_populates="historical_disasters")


class RiskPrediction(Base):
    __tablename__ = "risk_predictions"

    id = Column(Integer, primary_key=True, index=True)
    district_id = Column(Integer, ForeignKey("districts.id"), nullable=False, index=True)
    disaster_type = Column(Enum(DisasterType, name="disaster_type"), nullable=False)
    prediction_date = Column(Date, nullable=False, index=True)
    target_date = Column(Date, nullable=False, index=True)
    risk_level = Column(Enum(RiskLevel, name="risk_level"), nullable=False)
    hazard_score = Column(Float, nullable=False)  # 0-100 scale
    main_factors = Column(JSON, nullable=False, default=list)
    public_recommendation = Column(Text, nullable=False)
    government_recommendation = Column(Text, nullable=False)
    data_completeness = Column(Float, nullable=False)  # percent of inputs available
    assumptions = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    district = relationship("District", back_populates="risk_predictions")
