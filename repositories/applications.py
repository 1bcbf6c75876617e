"""
Application Repository: onboarding_applications rows.
List-valued form fields are stored as JSON strings and decoded on read.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import AdminTask, OnboardingApplication

logger = logging.getLogger(__name__)


def encode_list(values: list[Any] | None) -> str:
    return json.dumps(values or [])


def decode_list(raw: str | None) -> list[Any]:
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Stored list field is not valid JSON: %r", raw)
        return []
    return value if isinstance(value, list) else []


async def create_application(session: AsyncSession, **fields: Any) -> OnboardingApplication:
    """Insert one submission with status pending and a server-side submission date."""
    application = OnboardingApplication(
        **fields,
        status="pending",
        submission_date=datetime.now(timezone.utc),
    )
    session.add(application)
    await session.flush()
    return application


async def get_application(session: AsyncSession, application_id: int) -> OnboardingApplication | None:
    result = await session.execute(
        select(OnboardingApplication).where(OnboardingApplication.id == application_id)
    )
    return result.scalar_one_or_none()


async def latest_for_user(session: AsyncSession, user_id: int) -> OnboardingApplication | None:
    result = await session.execute(
        select(OnboardingApplication)
        .where(OnboardingApplication.user_id == user_id)
        .order_by(OnboardingApplication.submission_date.desc(), OnboardingApplication.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def list_without_task(session: AsyncSession) -> list[OnboardingApplication]:
    result = await session.execute(
        select(OnboardingApplication)
        .outerjoin(AdminTask, AdminTask.application_id == OnboardingApplication.id)
        .where(AdminTask.id.is_(None))
        .order_by(OnboardingApplication.id)
    )
    return list(result.scalars().all())
