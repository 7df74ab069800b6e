"""
Tests for the service layer against an in-memory database.
"""

import pydantic
import pytest
from datetime import date, timedelta

from backend.exceptions import NotFoundError
from backend.models import Task, RiskPrediction, DisasterType, RiskLevel
from backend.schemas import (
    TaskCreate, TaskUpdate,
    DistrictCreate, WeatherDataCreate, HistoricalDisasterCreate,
    GenerateRiskPredictionInput, RiskPredictionFilter
)
from backend.services.task_service import TaskService
from backend.services.district_service import DistrictService
from backend.services.risk_service import RiskService, PLACEHOLDER_REPORT_MARKDOWN


@pytest.fixture
def task_service():
    return TaskService()


@pytest.fixture
def district_service():
    return DistrictService()


@pytest.fixture
def risk_service():
    return RiskService()


@pytest.fixture
def district(db_session, district_service, sample_district):
    return district_service.create_district(db_session, DistrictCreate(**sample_district))


def _prediction(district_id, disaster_type, target_date, risk_level, **overrides):
    values = dict(
        district_id=district_id,
        disaster_type=disaster_type,
        prediction_date=date(2024, 1, 1),
        target_date=target_date,
        risk_level=risk_level,
        hazard_score=55.0,
        main_factors=["rainfall", "slope"],
        public_recommendation="Stay alert",
        government_recommendation="Prepare shelters",
        data_completeness=80.0,
    )
    values.update(overrides)
    return RiskPrediction(**values)


@pytest.mark.unit
class TestTaskService:

    def test_create_sets_equal_timestamps(self, db_session, task_service):
        task = task_service.create_task(db_session, TaskCreate(title="Test Task", description="A task"))

        assert task.id is not None
        assert task.created_at is not None
        assert task.created_at == task.updated_at

    def test_create_assigns_unique_ids(self, db_session, task_service):
        ids = {
            task_service.create_task(db_session, TaskCreate(title=f"Task {i}")).id
            for i in range(5)
        }
        assert len(ids) == 5

    def test_get_task_not_found(self, db_session, task_service):
        assert task_service.get_task(db_session, 12345) is None
        assert task_service.get_task(db_session, -1) is None

    def test_get_tasks_orders_by_created_at_desc(self, db_session, task_service):
        base = task_service.create_task(db_session, TaskCreate(title="Oldest")).created_at
        db_session.add(Task(title="Newest", description="", created_at=base + timedelta(hours=2),
                            updated_at=base + timedelta(hours=2)))
        db_session.add(Task(title="Middle", description="", created_at=base + timedelta(hours=1),
                            updated_at=base + timedelta(hours=1)))
        db_session.commit()

        titles = [t.title for t in task_service.get_tasks(db_session)]
        assert titles == ["Newest", "Middle", "Oldest"]

    def test_update_description_only(self, db_session, task_service):
        task = task_service.create_task(db_session, TaskCreate(title="Original", description="Old"))
        created_at, previous_updated_at = task.created_at, task.updated_at

        updated = task_service.update_task(db_session, task.id, TaskUpdate(description="New"))

        assert updated.title == "Original"
        assert updated.description == "New"
        assert updated.created_at == created_at
        assert updated.updated_at > previous_updated_at

    def test_update_timestamp_moves_forward_when_clock_lags(self, db_session, task_service):
        task = task_service.create_task(db_session, TaskCreate(title="Future"))
        future = task.updated_at + timedelta(days=1)
        task.updated_at = future
        db_session.commit()

        updated = task_service.update_task(db_session, task.id, TaskUpdate())
        assert updated.updated_at > future

    def test_update_missing_task(self, db_session, task_service):
        assert task_service.update_task(db_session, 999, TaskUpdate(title="x")) is None

    def test_update_schema_rejects_explicit_null(self):
        with pytest.raises(pydantic.ValidationError):
            TaskUpdate(title=None)
        assert TaskUpdate().dict(exclude_unset=True) == {}

    def test_delete(self, db_session, task_service):
        task = task_service.create_task(db_session, TaskCreate(title="Delete me"))
        keep = task_service.create_task(db_session, TaskCreate(title="Keep me"))

        assert task_service.delete_task(db_session, task.id) == {"success": True}
        assert task_service.get_task(db_session, task.id) is None
        assert task_service.get_task(db_session, keep.id) is not None
        assert task_service.delete_task(db_session, task.id) == {"success": False}


@pytest.mark.unit
class TestDistrictService:

    def test_weather_requires_existing_district(self, db_session, district_service):
        data = WeatherDataCreate(
            district_id=7, date=date(2024, 1, 15), rainfall=10, humidity=80, temperature=25, wind_speed=5
        )
        with pytest.raises(NotFoundError):
            district_service.create_weather_data(db_session, data)

    def test_weather_ordered_by_date(self, db_session, district_service, district):
        for day in [3, 1, 2]:
            district_service.create_weather_data(db_session, WeatherDataCreate(
                district_id=district.id, date=date(2024, 1, day),
                rainfall=day * 10, humidity=80, temperature=25, wind_speed=5
            ))

        records = district_service.get_weather_data(db_session, district_id=district.id)
        assert [r.date.day for r in records] == [1, 2, 3]

    def test_historical_disaster_requires_existing_district(self, db_session, district_service):
        data = HistoricalDisasterCreate(
            district_id=3, disaster_type=DisasterType.flood, date=date(2023, 5, 1),
            severity_score=4, casualties=0, economic_loss=0
        )
        with pytest.raises(NotFoundError):
            district_service.create_historical_disaster(db_session, data)

    def test_historical_disasters_newest_first(self, db_session, district_service, district):
        for month in [2, 6, 4]:
            district_service.create_historical_disaster(db_session, HistoricalDisasterCreate(
                district_id=district.id, disaster_type=DisasterType.flood, date=date(2023, month, 1),
                severity_score=5, casualties=1, economic_loss=1000
            ))

        records = district_service.get_historical_disasters(db_session, district_id=district.id)
        assert [r.date.month for r in records] == [6, 4, 2]

    def test_zero_district_id_filters_instead_of_listing_all(self, db_session, district_service, district):
        district_service.create_weather_data(db_session, WeatherDataCreate(
            district_id=district.id, date=date(2024, 1, 1),
            rainfall=10, humidity=80, temperature=25, wind_speed=5
        ))

        assert district_service.get_weather_data(db_session) != []
        assert district_service.get_weather_data(db_session, district_id=0) == []
        assert district_service.get_historical_disasters(db_session, district_id=0) == []


@pytest.mark.unit
class TestRiskService:

    def test_generate_returns_empty_and_persists_nothing(self, db_session, risk_service, district):
        result = risk_service.generate_risk_predictions(
            db_session, GenerateRiskPredictionInput(district_id=district.id)
        )

        assert result == []
        assert db_session.query(RiskPrediction).count() == 0

    def test_prediction_scope_defaults_to_all(self, db_session, risk_service, district):
        scope = risk_service._prediction_scope(db_session, GenerateRiskPredictionInput())

        assert scope["district_ids"] == [district.id]
        assert scope["disaster_types"] == ["flood", "landslide"]

    def test_get_risk_predictions_filters(self, db_session, risk_service, district):
        db_session.add_all([
            _prediction(district.id, DisasterType.flood, date(2024, 1, 3), RiskLevel.high),
            _prediction(district.id, DisasterType.landslide, date(2024, 1, 2), RiskLevel.low),
            _prediction(district.id, DisasterType.flood, date(2024, 1, 9), RiskLevel.medium),
        ])
        db_session.commit()

        floods = risk_service.get_risk_predictions(
            db_session, RiskPredictionFilter(disaster_type=DisasterType.flood)
        )
        assert [p.target_date.day for p in floods] == [3, 9]

        window = risk_service.get_risk_predictions(
            db_session, RiskPredictionFilter(start_date=date(2024, 1, 1), end_date=date(2024, 1, 5))
        )
        assert [p.target_date.day for p in window] == [2, 3]

        high = risk_service.get_risk_predictions(
            db_session, RiskPredictionFilter(risk_level=RiskLevel.high)
        )
        assert len(high) == 1
        assert high[0].main_factors == ["rainfall", "slope"]

    def test_report_is_placeholder_even_with_stored_predictions(self, db_session, risk_service, district):
        db_session.add(_prediction(district.id, DisasterType.flood, date(2024, 1, 3), RiskLevel.high))
        db_session.commit()

        report = risk_service.generate_risk_report(db_session, RiskPredictionFilter())

        assert report.predictions == []
        assert report.summary.total_districts == 0
        assert report.summary.high_risk_count == 0
        assert report.summary.average_data_completeness == 0
        assert report.markdown_report == PLACEHOLDER_REPORT_MARKDOWN
        assert report.generated_at == report.report_period_start
        assert report.report_period_end - report.report_period_start == timedelta(days=7)

    def test_report_period_is_configurable(self, db_session):
        report = RiskService(report_period_days=3).generate_risk_report(db_session, RiskPredictionFilter())
        assert report.report_period_end - report.report_period_start == timedelta(days=3)
