from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Employee

logger = logging.getLogger(__name__)

EMPLOYEE_ROSTER = [
    {"id": 1, "name": "Alice Smith", "position": "Onboarding Specialist"},
    {"id": 2, "name": "Bob Johnson", "position": "Compliance Officer"},
    {"id": 3, "name": "Charlie Brown", "position": "Client Relations"},
    {"id": 4, "name": "Diana Prince", "position": "Senior Analyst"},
    {"id": 5, "name": "Ethan Hunt", "position": "Operations Manager"},
]


def _employee_to_response(e: Employee) -> dict[str, Any]:
    return {"id": e.id, "name": e.name, "position": e.position}


async def ensure_employee_roster(session: AsyncSession) -> int:
    """Insert any roster entries missing by id. Returns how many were added."""
    result = await session.execute(select(Employee.id))
    existing = set(result.scalars().all())
    added = 0
    for data in EMPLOYEE_ROSTER:
        if data["id"] in existing:
            continue
        session.add(Employee(**data))
        added += 1
    if added:
        await session.flush()
        logger.info("Seeded %d employees", added)
    return added


async def get_employee(session: AsyncSession, employee_id: int) -> Employee | None:
    result = await session.execute(select(Employee).where(Employee.id == employee_id))
    return result.scalar_one_or_none()


async def list_employees(session: AsyncSession) -> list[dict[str, Any]]:
    result = await session.execute(select(Employee).order_by(Employee.name.asc()))
    return [_employee_to_response(e) for e in result.scalars().all()]
