"""
Task Repository: admin_tasks rows, one per application.

Task status only moves forward through the engine:
open -> in_progress (assignment) -> completed (application finalized).
"""
from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import AdminTask
from schemas.onboarding import TaskStatus


async def create_task(session: AsyncSession, application_id: int, status: TaskStatus = "open") -> AdminTask:
    now = datetime.now(timezone.utc)
    task = AdminTask(
        application_id=application_id,
        assigned_to_employee_id=None,
        status=status,
        created_at=now,
        updated_at=now,
    )
    session.add(task)
    await session.flush()
    return task


async def get_task_for_application(session: AsyncSession, application_id: int) -> AdminTask | None:
    result = await session.execute(select(AdminTask).where(AdminTask.application_id == application_id))
    return result.scalar_one_or_none()


def assign(task: AdminTask, employee_id: int) -> None:
    task.assigned_to_employee_id = employee_id
    if task.status == "open":
        task.status = "in_progress"
    task.updated_at = datetime.now(timezone.utc)


def set_status(task: AdminTask, status: TaskStatus) -> None:
    task.status = status
    task.updated_at = datetime.now(timezone.utc)
