from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import require_admin
from database import get_db
from schemas.onboarding import AssignEmployeeRequest, StatusUpdateRequest
from services import admin_queries, employees, events, workflow

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/onboarding/pending")
async def list_pending_applications(db: AsyncSession = Depends(get_db)):
    return await workflow.list_pending(db)


@router.get("/onboarding/applications")
async def list_applications(
    status: Optional[str] = Query(None),
    assignment: Optional[str] = Query("all"),
    db: AsyncSession = Depends(get_db),
):
    return await admin_queries.list_applications(db, status=status, assignment=assignment)


@router.get("/onboarding/revision")
async def workflow_revision():
    return {"revision": events.current_revision()}


@router.get("/onboarding/application/{application_id}")
async def get_application(application_id: int, db: AsyncSession = Depends(get_db)):
    return await workflow.get_application_detail(db, application_id)


@router.get("/employees")
async def list_employees(db: AsyncSession = Depends(get_db)):
    return await employees.list_employees(db)


@router.post("/onboarding/application/{application_id}/assign")
async def assign_employee(application_id: int, body: AssignEmployeeRequest, db: AsyncSession = Depends(get_db)):
    return await workflow.assign_employee(db, application_id, body.assigned_to_employee_id)


@router.post("/onboarding/application/{application_id}/status")
async def update_application_status(
    application_id: int, body: StatusUpdateRequest, db: AsyncSession = Depends(get_db)
):
    return await workflow.update_status(db, application_id, body.status)
