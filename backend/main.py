"""
FastAPI application for the Disaster Risk Early Warning System and task manager.
"""

from fastapi import FastAPI, Depends, Query
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date, datetime
import uvicorn

from backend.config import settings
from backend.database import get_db, create_tables
from backend.exceptions import handle_service_exceptions
from backend.logging_config import setup_logging
from backend.models import DisasterType
from backend.schemas import (
    TaskCreate, TaskUpdate, TaskResponse, DeleteTaskResponse,
    DistrictCreate, DistrictResponse,
    WeatherDataCreate, WeatherDataResponse,
    HistoricalDisasterCreate, HistoricalDisasterResponse,
    GenerateRiskPredictionInput, RiskPredictionFilter,
    RiskPredictionResponse, RiskPredictionReport,
    HealthResponse
)
from backend.services.task_service import TaskService
from backend.services.district_service import DistrictService
from backend.services.risk_service import RiskService

setup_logging(level=settings.log_level)

# Initialize FastAPI app
app = FastAPI(
    title="Disaster Risk Early Warning System",
    description="Task manager and district-level flood/landslide risk reporting",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize services
task_service = TaskService()
district_service = DistrictService()
risk_service = RiskService()


@app.on_event("startup")
async def startup_event():
    """Initialize database tables on startup."""
    create_tables()


@app.get("/")
@handle_service_exceptions
async def root():
    """Root endpoint."""
    return {
        "message": "Disaster Risk Early Warning System API",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health", response_model=HealthResponse)
@handle_service_exceptions
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "timestamp": datetime.utcnow().isoformat() + "Z"}


# Task endpoints
@app.get("/tasks/", response_model=List[TaskResponse])
@handle_service_exceptions
async def get_tasks(db: Session = Depends(get_db)):
    """Get all tasks, newest first."""
    return task_service.get_tasks(db)


@app.post("/tasks/", response_model=TaskResponse)
@handle_service_exceptions
async def create_task(task: TaskCreate, db: Session = Depends(get_db)):
    """Create a new task."""
    return task_service.create_task(db, task)


@app.get("/tasks/{task_id}", response_model=Optional[TaskResponse])
@handle_service_exceptions
async def get_task(task_id: int, db: Session = Depends(get_db)):
    """Get a task by id; null when it does not exist."""
    return task_service.get_task(db, task_id)


@app.put("/tasks/{task_id}", response_model=Optional[TaskResponse])
@handle_service_exceptions
async def update_task(task_id: int, task: TaskUpdate, db: Session = Depends(get_db)):
    """Update a task's title and/or description; null when it does not exist."""
    return task_service.update_task(db, task_id, task)


@app.delete("/tasks/{task_id}", response_model=DeleteTaskResponse)
@handle_service_exceptions
async def delete_task(task_id: int, db: Session = Depends(get_db)):
    """Delete a task."""
    return task_service.delete_task(db, task_id)


# District endpoints
@app.post("/districts/", response_model=DistrictResponse)
@handle_service_exceptions
async def create_district(district: DistrictCreate, db: Session = Depends(get_db)):
    """Create a new district."""
    return district_service.create_district(db, district)


@app.get("/districts/", response_model=List[DistrictResponse])
@handle_service_exceptions
async def get_districts(db: Session = Depends(get_db)):
    """Get all districts."""
    return district_service.get_districts(db)


# Weather data endpoints
@app.post("/weather-data/", response_model=WeatherDataResponse)
@handle_service_exceptions
async def create_weather_data(data: WeatherDataCreate, db: Session = Depends(get_db)):
    """Record a weather observation."""
    return district_service.create_weather_data(db, data)


@app.get("/weather-data/", response_model=List[WeatherDataResponse])
@handle_service_exceptions
async def get_weather_data(
    district_id: Optional[int] = Query(None, gt=0),
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db)
):
    """Get weather observations with optional district and date filters."""
    return district_service.get_weather_data(db, district_id, start_date, end_date)


# Historical disaster endpoints
@app.post("/historical-disasters/", response_model=HistoricalDisasterResponse)
@handle_service_exceptions
async def create_historical_disaster(disaster: HistoricalDisasterCreate, db: Session = Depends(get_db)):
    """Record a historical disaster."""
    return district_service.create_historical_disaster(db, disaster)


@app.get("/historical-disasters/", response_model=List[HistoricalDisasterResponse])
@handle_service_exceptions
async def get_historical_disasters(
    district_id: Optional[int] = Query(None, gt=0),
    disaster_type: Optional[DisasterType] = None,
    db: Session = Depends(get_db)
):
    """Get historical disasters with optional filters."""
    return district_service.get_historical_disasters(db, district_id, disaster_type)


# Risk prediction endpoints
@app.post("/risk-predictions/generate", response_model=List[RiskPredictionResponse])
@handle_service_exceptions
async def generate_risk_predictions(
    params: GenerateRiskPredictionInput,
    db: Session = Depends(get_db)
):
    """Generate risk predictions for all districts or a specific district."""
    return risk_service.generate_risk_predictions(db, params)


@app.get("/risk-predictions/", response_model=List[RiskPredictionResponse])
@handle_service_exceptions
async def get_risk_predictions(
    filters: RiskPredictionFilter = Depends(),
    db: Session = Depends(get_db)
):
    """Get risk predictions with optional filters."""
    return risk_service.get_risk_predictions(db, filters)


@app.get("/risk-report/", response_model=RiskPredictionReport)
@handle_service_exceptions
async def generate_risk_report(
    filters: RiskPredictionFilter = Depends(),
    db: Session = Depends(get_db)
):
    """Get the markdown risk report."""
    return risk_service.generate_risk_report(db, filters)


if __name__ == "__main__":
    uvicorn.run(
        "backend.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True
    )
