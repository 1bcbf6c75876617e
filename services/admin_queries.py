"""
Read side for the admin dashboard: applications joined with their review task.
Filters are applied in SQL and combined with AND.
"""
from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import AdminTask, OnboardingApplication
from repositories.applications import decode_list
from schemas.onboarding import APPLICATION_STATUSES
from services.errors import NotFoundError, ValidationError
from utils.case import dict_keys_to_camel, row_to_camel

ASSIGNMENT_FILTERS = ("all", "assigned", "unassigned")


def _isoformat(value) -> Optional[str]:
    return value.isoformat() if value else None


def summary_select() -> Select:
    return select(
        OnboardingApplication.id,
        OnboardingApplication.user_id,
        OnboardingApplication.full_name,
        OnboardingApplication.submission_date,
        OnboardingApplication.status.label("application_status"),
        AdminTask.id.label("task_id"),
        AdminTask.status.label("task_status"),
        AdminTask.assigned_to_employee_id,
    )


def summary_to_response(row: Any) -> dict[str, Any]:
    return row_to_camel(row._mapping)


def detail_to_response(app: OnboardingApplication, task: Optional[AdminTask]) -> dict[str, Any]:
    """Full application with list fields decoded; task columns are null when no task exists."""
    return dict_keys_to_camel({
        "id": app.id,
        "user_id": app.user_id,
        "full_name": app.full_name,
        "govt_id_number": app.govt_id_number,
        "mobile": app.mobile,
        "email": app.email,
        "time_horizon": app.time_horizon,
        "risk_tolerance": app.risk_tolerance,
        "investments_owned": decode_list(app.investments_owned),
        "acceptable_annual_return": app.acceptable_annual_return,
        "dob": app.dob,
        "nationality": app.nationality,
        "address": app.address,
        "client_type": app.client_type,
        "govt_id_file_path": app.govt_id_file_path,
        "contact_details": app.contact_details,
        "source_of_funds": app.source_of_funds,
        "occupation_details": app.occupation_details,
        "income_proof_file_path": app.income_proof_file_path,
        "selected_funds": decode_list(app.selected_funds),
        "terms_accepted": bool(app.terms_accepted),
        "submission_date": _isoformat(app.submission_date),
        "status": app.status,
        "task_id": task.id if task else None,
        "task_status": task.status if task else None,
        "assigned_to_employee_id": task.assigned_to_employee_id if task else None,
        "task_updated_at": _isoformat(task.updated_at) if task else None,
    })


async def fetch_application_detail(session: AsyncSession, application_id: int) -> dict[str, Any]:
    result = await session.execute(
        select(OnboardingApplication, AdminTask)
        .outerjoin(AdminTask, AdminTask.application_id == OnboardingApplication.id)
        .where(OnboardingApplication.id == application_id)
    )
    row = result.first()
    if row is None:
        raise NotFoundError("Application", application_id)
    app, task = row
    return detail_to_response(app, task)


async def list_applications(
    session: AsyncSession,
    status: Optional[str] = None,
    assignment: Optional[str] = "all",
) -> list[dict[str, Any]]:
    """
    All applications, oldest first, optionally narrowed by application status
    and by whether the review task has an assignee. Applications without a task
    count as unassigned.
    """
    status = None if status in (None, "", "all") else status
    assignment = assignment or "all"
    if status is not None and status not in APPLICATION_STATUSES:
        raise ValidationError(
            f"Invalid status filter: {status}. Must be one of: all, {', '.join(APPLICATION_STATUSES)}"
        )
    if assignment not in ASSIGNMENT_FILTERS:
        raise ValidationError(
            f"Invalid assignment filter: {assignment}. Must be one of: {', '.join(ASSIGNMENT_FILTERS)}"
        )

    stmt = summary_select().outerjoin(AdminTask, AdminTask.application_id == OnboardingApplication.id)
    if status is not None:
        stmt = stmt.where(OnboardingApplication.status == status)
    if assignment == "assigned":
        stmt = stmt.where(AdminTask.assigned_to_employee_id.is_not(None))
    elif assignment == "unassigned":
        stmt = stmt.where(AdminTask.assigned_to_employee_id.is_(None))
    stmt = stmt.order_by(OnboardingApplication.submission_date.asc(), OnboardingApplication.id.asc())

    result = await session.execute(stmt)
    return [summary_to_response(r) for r in result.all()]
