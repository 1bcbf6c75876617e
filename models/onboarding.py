from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, func

from database import Base


class OnboardingApplication(Base):
    __tablename__ = "onboarding_applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    full_name = Column(String(256), nullable=False)
    govt_id_number = Column(String(128), nullable=False)
    mobile = Column(String(64), nullable=False)
    email = Column(String(256), nullable=False)
    time_horizon = Column(Integer, nullable=False)
    risk_tolerance = Column(String(32), nullable=False)
    # JSON-encoded lists; decoded by the read side
    investments_owned = Column(Text, nullable=False, default="[]")
    acceptable_annual_return = Column(String(64), nullable=False)
    dob = Column(String(32), nullable=False)
    nationality = Column(String(128), nullable=False)
    address = Column(Text, nullable=False)
    client_type = Column(String(128), nullable=False)
    govt_id_file_path = Column(String(1024), nullable=False)
    contact_details = Column(Text, nullable=True)
    source_of_funds = Column(Text, nullable=False)
    occupation_details = Column(Text, nullable=False)
    income_proof_file_path = Column(String(1024), nullable=False)
    selected_funds = Column(Text, nullable=False, default="[]")
    terms_accepted = Column(Boolean, nullable=False, default=False)
    submission_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    status = Column(String(32), nullable=False, default="pending", index=True)


class AdminTask(Base):
    __tablename__ = "admin_tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # One task per application
    application_id = Column(
        Integer,
        ForeignKey("onboarding_applications.id"),
        unique=True,
        nullable=False,
        index=True,
    )
    assigned_to_employee_id = Column(Integer, ForeignKey("employees.id"), nullable=True)
    status = Column(String(32), nullable=False, default="open", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
