"""
HTTP client used by the Dash frontend to talk to the backend API.

Every call logs and swallows transport or HTTP failures, returning a neutral
value so the UI simply leaves its state unchanged.
"""

import logging
import os
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

# Backend URL
BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8000")
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10"))


class BackendClient:
    """Thin wrapper over the backend REST API."""

    def __init__(self, base_url: str = BACKEND_URL, timeout: float = REQUEST_TIMEOUT_SECONDS):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs) -> Any:
        response = requests.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        response.raise_for_status()
        return response.json()

    # Tasks
    def get_tasks(self) -> List[Dict[str, Any]]:
        try:
            return self._request("GET", "/tasks/")
        except requests.RequestException as e:
            logger.error("Failed to load tasks: %s", e)
            return []

    def create_task(self, title: str, description: str = "") -> Optional[Dict[str, Any]]:
        try:
            return self._request("POST", "/tasks/", json={"title": title, "description": description})
        except requests.RequestException as e:
            logger.error("Failed to create task: %s", e)
            return None

    def update_task(
        self,
        task_id: int,
        title: Optional[str] = None,
        description: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        payload = {}
        if title is not None:
            payload["title"] = title
        if description is not None:
            payload["description"] = description
        try:
            return self._request("PUT", f"/tasks/{task_id}", json=payload)
        except requests.RequestException as e:
            logger.error("Failed to update task %s: %s", task_id, e)
            return None

    def delete_task(self, task_id: int) -> Dict[str, bool]:
        try:
            return self._request("DELETE", f"/tasks/{task_id}")
        except requests.RequestException as e:
            logger.error("Failed to delete task %s: %s", task_id, e)
            return {"success": False}

    # Districts and risk data
    def get_districts(self) -> List[Dict[str, Any]]:
        try:
            return self._request("GET", "/districts/")
        except requests.RequestException as e:
            logger.error("Failed to load districts: %s", e)
            return []

    def get_weather_data(self, district_id: Optional[int] = None) -> List[Dict[str, Any]]:
        params = {"district_id": district_id} if district_id else None
        try:
            return self._request("GET", "/weather-data/", params=params)
        except requests.RequestException as e:
            logger.error("Failed to load weather data: %s", e)
            return []

    def get_risk_predictions(self, **filters) -> List[Dict[str, Any]]:
        params = {key: value for key, value in filters.items() if value is not None}
        try:
            return self._request("GET", "/risk-predictions/", params=params)
        except requests.RequestException as e:
            logger.error("Failed to load risk predictions: %s", e)
            return []

    def get_risk_report(self, **filters) -> Optional[Dict[str, Any]]:
        params = {key: value for key, value in filters.items() if value is not None}
        try:
            return self._request("GET", "/risk-report/", params=params)
        except requests.RequestException as e:
            logger.error("Failed to load risk report: %s", e)
            return None
