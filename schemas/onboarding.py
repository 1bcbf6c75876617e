from __future__ import annotations

import json
from typing import Any, Literal, Optional, get_args

from pydantic import BaseModel, Field, field_validator

RiskTolerance = Literal["low", "moderate", "high"]
InvestmentKind = Literal["stocks", "bonds", "mutualfunds", "realestate", "other"]
ApplicationStatus = Literal["pending", "approved", "rejected"]
TaskStatus = Literal["open", "in_progress", "completed"]

APPLICATION_STATUSES: tuple[str, ...] = get_args(ApplicationStatus)
TERMINAL_STATUSES: tuple[str, ...] = ("approved", "rejected")


class SelectedFundSchema(BaseModel):
    id: int
    name: str
    amount: float = Field(..., ge=0)


class OnboardingSubmission(BaseModel):
    """Text part of the multipart onboarding form, keyed by the client's camelCase names."""

    # Section 1: personal
    full_name: str = Field(..., alias="fullName", min_length=1)
    govt_id_number: str = Field(..., alias="govtIdNumber", min_length=1)
    mobile: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    # Section 2: investment profile
    time_horizon: int = Field(..., alias="timeHorizon", ge=0)
    risk_tolerance: RiskTolerance = Field(..., alias="riskTolerance")
    investments_owned: list[InvestmentKind] = Field(default_factory=list, alias="investmentsOwned")
    acceptable_annual_return: str = Field(..., alias="acceptableAnnualReturn", min_length=1)
    # Section 3: KYC
    dob: str = Field(..., min_length=1)
    nationality: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    client_type: str = Field(..., alias="clientType", min_length=1)
    contact_details: Optional[str] = Field(None, alias="contactDetails")
    # Section 4: financial
    source_of_funds: str = Field(..., alias="sourceOfFunds", min_length=1)
    occupation_details: str = Field(..., alias="occupationDetails", min_length=1)
    # Section 5: fund selection
    selected_funds: list[SelectedFundSchema] = Field(default_factory=list, alias="selectedFunds")
    terms_accepted: bool = Field(..., alias="termsAccepted")

    model_config = {"populate_by_name": True, "str_strip_whitespace": True}

    @field_validator("investments_owned", "selected_funds", mode="before")
    @classmethod
    def _decode_json_list(cls, v: Any) -> Any:
        """Multipart forms carry lists as JSON strings."""
        if v is None or v == "":
            return []
        if isinstance(v, str):
            try:
                v = json.loads(v)
            except json.JSONDecodeError as e:
                raise ValueError("must be a JSON-encoded list") from e
        if not isinstance(v, list):
            raise ValueError("must be a list")
        return v

    @field_validator("terms_accepted", mode="before")
    @classmethod
    def _require_acceptance(cls, v: Any) -> bool:
        # Only an explicit "true" counts; "false", "1", "yes" do not.
        if v is True or v == "true":
            return True
        raise ValueError("terms and conditions must be accepted")


class AssignEmployeeRequest(BaseModel):
    assigned_to_employee_id: int = Field(..., alias="assignedToEmployeeId")

    model_config = {"populate_by_name": True}


class StatusUpdateRequest(BaseModel):
    status: Optional[str] = None
