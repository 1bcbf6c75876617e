"""
Onboarding workflow: submission, review-task bookkeeping and status/assignment transitions.

Every onboarding application owns exactly one admin task. With
settings.atomic_workflow_writes the task write shares the application's
transaction; otherwise the application is committed first and the task write
is a best-effort follow-up whose failure is logged (see reconcile_missing_tasks).
Each mutating call commits before it returns or emits a change event, so an
acknowledgement always refers to durable rows.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from models import AdminTask, OnboardingApplication
from repositories import applications, tasks
from schemas.onboarding import APPLICATION_STATUSES, TERMINAL_STATUSES, OnboardingSubmission, TaskStatus
from services import admin_queries, employees, events
from services.errors import InternalError, NotFoundError, ValidationError
from services.storage import DocumentStorage

logger = logging.getLogger(__name__)

GOVT_ID_FILE = "govtIdFile"
INCOME_PROOF_FILE = "incomeProofFile"
REQUIRED_FILES = (GOVT_ID_FILE, INCOME_PROOF_FILE)

MSG_MISSING_DATA = "Missing required onboarding data or files."


@dataclass
class UploadedDocument:
    filename: Optional[str]
    content: bytes


def _atomic(atomic: Optional[bool]) -> bool:
    return settings.atomic_workflow_writes if atomic is None else atomic


def _task_status_for(application_status: str) -> TaskStatus:
    return "completed" if application_status in TERMINAL_STATUSES else "in_progress"


def _stage_files(storage: DocumentStorage, files: Mapping[str, Optional[UploadedDocument]]) -> dict[str, str]:
    staged: dict[str, str] = {}
    try:
        for field_name in REQUIRED_FILES:
            doc = files.get(field_name)
            if doc is None or not doc.filename:
                continue
            staged[field_name] = storage.save(doc.filename, doc.content)
    except InternalError:
        storage.delete_all(list(staged.values()))
        raise
    return staged


def _validate_submission(form: Mapping[str, Any], staged: Mapping[str, str]) -> OnboardingSubmission:
    problems: list[str] = []
    submission = None
    try:
        submission = OnboardingSubmission.model_validate({k: v for k, v in form.items() if v is not None})
    except PydanticValidationError as e:
        problems.extend(".".join(str(p) for p in err["loc"]) for err in e.errors())
    problems.extend(f for f in REQUIRED_FILES if f not in staged)
    if problems:
        raise ValidationError(MSG_MISSING_DATA, {"fields": problems})
    return submission


async def submit_application(
    session: AsyncSession,
    storage: DocumentStorage,
    user_id: int,
    form: Mapping[str, Any],
    files: Mapping[str, Optional[UploadedDocument]],
    atomic: Optional[bool] = None,
) -> dict[str, Any]:
    """
    Store the uploads, validate the form, then persist the application and its
    review task. Any failure before the application is durable removes the
    files written for this request.
    """
    atomic = _atomic(atomic)
    staged = _stage_files(storage, files)
    staged_paths = list(staged.values())

    try:
        submission = _validate_submission(form, staged)
    except ValidationError as e:
        logger.warning("Validation failed for onboarding submission by user %s: %s", user_id, e.details)
        storage.delete_all(staged_paths)
        raise

    try:
        application = await applications.create_application(
            session,
            user_id=user_id,
            full_name=submission.full_name,
            govt_id_number=submission.govt_id_number,
            mobile=submission.mobile,
            email=submission.email,
            time_horizon=submission.time_horizon,
            risk_tolerance=submission.risk_tolerance,
            investments_owned=applications.encode_list(list(submission.investments_owned)),
            acceptable_annual_return=submission.acceptable_annual_return,
            dob=submission.dob,
            nationality=submission.nationality,
            address=submission.address,
            client_type=submission.client_type,
            govt_id_file_path=staged[GOVT_ID_FILE],
            contact_details=submission.contact_details,
            source_of_funds=submission.source_of_funds,
            occupation_details=submission.occupation_details,
            income_proof_file_path=staged[INCOME_PROOF_FILE],
            selected_funds=applications.encode_list([f.model_dump() for f in submission.selected_funds]),
            terms_accepted=submission.terms_accepted,
        )
        application_id = application.id
        if not atomic:
            await session.commit()
    except SQLAlchemyError as e:
        logger.error("Error inserting onboarding application for user %s: %s", user_id, e)
        await session.rollback()
        storage.delete_all(staged_paths)
        raise InternalError("Error saving onboarding application.") from e

    logger.info("Onboarding application submitted for user %s, ID: %s", user_id, application_id)

    try:
        await tasks.create_task(session, application_id)
        # Atomic mode: the application row becomes durable here, together with its task
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        if atomic:
            logger.error("Error saving application %s with its admin task, rolled back: %s", application_id, e)
            storage.delete_all(staged_paths)
            raise InternalError("Error saving onboarding application.") from e
        logger.error("Error creating admin task for application %s: %s", application_id, e)
    else:
        logger.info("Admin task created for application %s", application_id)

    events.emit(events.APPLICATION_SUBMITTED, application_id)
    return {"applicationId": application_id, "status": "pending"}


async def list_pending(session: AsyncSession) -> list[dict[str, Any]]:
    """Pending applications whose task nobody has picked up yet, oldest first."""
    stmt = (
        admin_queries.summary_select()
        .join(AdminTask, AdminTask.application_id == OnboardingApplication.id)
        .where(OnboardingApplication.status == "pending", AdminTask.status == "open")
        .order_by(OnboardingApplication.submission_date.asc(), OnboardingApplication.id.asc())
    )
    result = await session.execute(stmt)
    return [admin_queries.summary_to_response(r) for r in result.all()]


async def get_application_detail(session: AsyncSession, application_id: int) -> dict[str, Any]:
    return await admin_queries.fetch_application_detail(session, application_id)


async def assign_employee(session: AsyncSession, application_id: int, employee_id: int) -> dict[str, Any]:
    """Assign a reviewer to the application's task; the task moves open -> in_progress."""
    employee = await employees.get_employee(session, employee_id)
    if employee is None:
        raise NotFoundError("Employee", employee_id)

    task = await tasks.get_task_for_application(session, application_id)
    if task is None:
        logger.warning("No admin task found for application ID %s to assign employee.", application_id)
        raise NotFoundError(
            "Admin task",
            application_id,
            f"Admin task for application ID {application_id} not found.",
        )

    tasks.assign(task, employee_id)
    try:
        await session.commit()
    except SQLAlchemyError as e:
        logger.error("Error assigning employee %s to application %s: %s", employee_id, application_id, e)
        await session.rollback()
        raise InternalError("Error assigning employee.") from e

    logger.info("Employee %s assigned to application task %s.", employee_id, application_id)
    events.emit(events.EMPLOYEE_ASSIGNED, application_id)
    return {
        "message": "Employee assigned successfully",
        "applicationId": application_id,
        "assignedToEmployeeId": employee_id,
    }


async def update_status(
    session: AsyncSession,
    application_id: int,
    new_status: Optional[str],
    atomic: Optional[bool] = None,
    allow_reopen: Optional[bool] = None,
) -> dict[str, Any]:
    """
    Set the application's status and bring its task along: approved/rejected
    complete the task, pending puts it back in progress.
    """
    atomic = _atomic(atomic)
    allow_reopen = settings.allow_status_reopen if allow_reopen is None else allow_reopen

    if new_status not in APPLICATION_STATUSES:
        raise ValidationError(
            f"Invalid status value: {new_status}. Must be one of: {', '.join(APPLICATION_STATUSES)}"
        )

    application = await applications.get_application(session, application_id)
    if application is None:
        logger.warning("No onboarding application found with ID %s to update status.", application_id)
        raise NotFoundError("Onboarding application", application_id)
    if not allow_reopen and application.status in TERMINAL_STATUSES and new_status == "pending":
        raise ValidationError(
            f"Application {application_id} is already {application.status} and cannot be reopened."
        )

    application.status = new_status
    try:
        await session.flush()
        if not atomic:
            await session.commit()
    except SQLAlchemyError as e:
        logger.error("Error updating application %s status: %s", application_id, e)
        await session.rollback()
        raise InternalError("Error updating application status.") from e

    task_status = _task_status_for(new_status)
    try:
        task = await tasks.get_task_for_application(session, application_id)
        if task is None:
            logger.warning("No related admin task found for application ID %s to update task status.", application_id)
        else:
            tasks.set_status(task, task_status)
        # Atomic mode: the new application status becomes durable here, together with the task
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        if atomic:
            logger.error("Error updating application %s and its admin task, rolled back: %s", application_id, e)
            raise InternalError("Error updating application status.") from e
        logger.error("Error updating related admin task status for application %s: %s", application_id, e)
    else:
        if task is not None:
            logger.info("Related admin task for application %s status updated to %s.", application_id, task_status)
    logger.info("Application %s status updated to %s.", application_id, new_status)

    events.emit(events.STATUS_UPDATED, application_id)
    return {
        "message": "Application status updated successfully",
        "applicationId": application_id,
        "newStatus": new_status,
    }


async def reconcile_missing_tasks(session: AsyncSession) -> list[int]:
    """Create the review task for every application that lacks one."""
    created: list[int] = []
    for app in await applications.list_without_task(session):
        status = "completed" if app.status in TERMINAL_STATUSES else "open"
        await tasks.create_task(session, app.id, status=status)
        created.append(app.id)
    await session.commit()
    if created:
        logger.info("Re-created admin tasks for applications %s", created)
        events.emit(events.TASKS_RECONCILED)
    return created


async def get_onboarding_status(session: AsyncSession, user_id: int) -> str:
    latest = await applications.latest_for_user(session, user_id)
    return latest.status if latest else "not_started"
