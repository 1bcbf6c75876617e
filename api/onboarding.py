from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_current_user, get_document_storage
from database import get_db
from schemas.auth import UserPublic
from services import workflow
from services.errors import ValidationError
from services.funds import RISK_TOLERANCES, funds_for_risk
from services.storage import DocumentStorage

router = APIRouter(prefix="/api", tags=["onboarding"])


async def _read_upload(upload: Optional[UploadFile]) -> Optional[workflow.UploadedDocument]:
    if upload is None or not upload.filename:
        return None
    content = await upload.read()
    return workflow.UploadedDocument(filename=upload.filename, content=content)


@router.post("/onboarding", status_code=201)
async def submit_onboarding(
    full_name: Optional[str] = Form(None, alias="fullName"),
    govt_id_number: Optional[str] = Form(None, alias="govtIdNumber"),
    mobile: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    time_horizon: Optional[str] = Form(None, alias="timeHorizon"),
    risk_tolerance: Optional[str] = Form(None, alias="riskTolerance"),
    investments_owned: Optional[str] = Form(None, alias="investmentsOwned"),
    acceptable_annual_return: Optional[str] = Form(None, alias="acceptableAnnualReturn"),
    dob: Optional[str] = Form(None),
    nationality: Optional[str] = Form(None),
    address: Optional[str] = Form(None),
    client_type: Optional[str] = Form(None, alias="clientType"),
    contact_details: Optional[str] = Form(None, alias="contactDetails"),
    source_of_funds: Optional[str] = Form(None, alias="sourceOfFunds"),
    occupation_details: Optional[str] = Form(None, alias="occupationDetails"),
    selected_funds: Optional[str] = Form(None, alias="selectedFunds"),
    terms_accepted: Optional[str] = Form(None, alias="termsAccepted"),
    govt_id_file: Optional[UploadFile] = File(None, alias="govtIdFile"),
    income_proof_file: Optional[UploadFile] = File(None, alias="incomeProofFile"),
    user: UserPublic = Depends(get_current_user),
    storage: DocumentStorage = Depends(get_document_storage),
    db: AsyncSession = Depends(get_db),
):
    """
    Multipart onboarding submission. investmentsOwned and selectedFunds are
    JSON-encoded strings; termsAccepted must be the string "true".
    """
    form = {
        "fullName": full_name,
        "govtIdNumber": govt_id_number,
        "mobile": mobile,
        "email": email,
        "timeHorizon": time_horizon,
        "riskTolerance": risk_tolerance,
        "investmentsOwned": investments_owned,
        "acceptableAnnualReturn": acceptable_annual_return,
        "dob": dob,
        "nationality": nationality,
        "address": address,
        "clientType": client_type,
        "contactDetails": contact_details,
        "sourceOfFunds": source_of_funds,
        "occupationDetails": occupation_details,
        "selectedFunds": selected_funds,
        "termsAccepted": terms_accepted,
    }
    files = {
        workflow.GOVT_ID_FILE: await _read_upload(govt_id_file),
        workflow.INCOME_PROOF_FILE: await _read_upload(income_proof_file),
    }
    result = await workflow.submit_application(db, storage, user.id, form, files)
    return {"message": "Onboarding application submitted successfully", **result}


@router.get("/funds")
async def list_funds(
    risk_tolerance: Optional[str] = Query(None, alias="riskTolerance"),
    user: UserPublic = Depends(get_current_user),
):
    if risk_tolerance is not None and risk_tolerance not in RISK_TOLERANCES:
        raise ValidationError(
            f"Invalid risk tolerance: {risk_tolerance}. Must be one of: {', '.join(RISK_TOLERANCES)}"
        )
    return funds_for_risk(risk_tolerance)
