"""
Task service: create, read, update and delete personal tasks.
"""

import logging
from typing import List, Optional, Dict
from datetime import datetime, timedelta
from sqlalchemy.orm import Session

from backend.models import Task
from backend.schemas import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


class TaskService:
    """Service for task CRUD operations."""

    def create_task(self, db: Session, data: TaskCreate) -> Task:
        """Persist a new task with matching created/updated timestamps."""
        now = datetime.utcnow()
        task = Task(
            title=data.title,
            description=data.description,
            created_at=now,
            updated_at=now
        )
        db.add(task)
        db.commit()
        db.refresh(task)
        logger.info("Created task %s", task.id)
        return task

    def get_task(self, db: Session, task_id: int) -> Optional[Task]:
        return db.query(Task).filter(Task.id == task_id).first()

    def get_tasks(self, db: Session) -> List[Task]:
        """All tasks, newest first."""
        return db.query(Task).order_by(Task.created_at.desc(), Task.id.desc()).all()

    def update_task(self, db: Session, task_id: int, data: TaskUpdate) -> Optional[Task]:
        """
        Apply the provided fields to a task.

        Fields left out of the request are untouched; ``updated_at`` is
        always refreshed. Returns None when the task does not exist.
        """
        task = self.get_task(db, task_id)
        if task is None:
            logger.warning("Task %s not found for update", task_id)
            return None

        for field, value in data.dict(exclude_unset=True).items():
            setattr(task, field, value)

        # updated_at must move forward even within the same clock tick
        now = datetime.utcnow()
        if now <= task.updated_at:
            now = task.updated_at + timedelta(microseconds=1)
        task.updated_at = now

        db.commit()
        db.refresh(task)
        logger.info("Updated task %s", task.id)
        return task

    def delete_task(self, db: Session, task_id: int) -> Dict[str, bool]:
        deleted = db.query(Task).filter(Task.id == task_id).delete()
        db.commit()
        if not deleted:
            logger.warning("Task %s not found for delete", task_id)
            return {"success": False}
        logger.info("Deleted task %s", task_id)
        return {"success": True}
