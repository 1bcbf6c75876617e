"""Shared fixtures: in-memory database per test, temp upload dir, form factories."""
import json
import os
import tempfile
import unittest

from sqlalchemy import func, select

from database import build_engine, build_sessionmaker, init_db
from models import AdminTask, OnboardingApplication
from repositories import users
from services import events
from services.employees import ensure_employee_roster
from services.storage import DocumentStorage
from services.workflow import UploadedDocument

TEST_DATABASE_URL = "sqlite+aiosqlite://"


def valid_form(**overrides):
    """Onboarding form exactly as the web client posts it (all strings)."""
    form = {
        "fullName": "Alice Example",
        "govtIdNumber": "P1234567",
        "mobile": "+1 555 0100",
        "email": "alice@example.com",
        "timeHorizon": "5",
        "riskTolerance": "low",
        "investmentsOwned": json.dumps(["stocks", "bonds"]),
        "acceptableAnnualReturn": "6",
        "dob": "1990-04-12",
        "nationality": "US",
        "address": "1 Main Street, Springfield",
        "clientType": "Employment",
        "contactDetails": "Prefers email",
        "sourceOfFunds": "Salary",
        "occupationDetails": "Software engineer",
        "selectedFunds": json.dumps([{"id": 1, "name": "Conservative Bond Fund", "amount": 2500}]),
        "termsAccepted": "true",
    }
    form.update(overrides)
    return form


def pdf_documents():
    return {
        "govtIdFile": UploadedDocument(filename="passport.pdf", content=b"%PDF-1.4 passport"),
        "incomeProofFile": UploadedDocument(filename="payslip.pdf", content=b"%PDF-1.4 payslip"),
    }


class DatabaseTestCase(unittest.IsolatedAsyncioTestCase):
    """Fresh in-memory database, seeded employee roster and empty upload dir per test."""

    async def asyncSetUp(self):
        events.reset()
        self.engine = build_engine(TEST_DATABASE_URL)
        await init_db(self.engine)
        self.sessionmaker = build_sessionmaker(self.engine)
        self.session = self.sessionmaker()
        await ensure_employee_roster(self.session)
        await self.session.commit()
        self._upload_dir = tempfile.TemporaryDirectory()
        self.upload_dir = self._upload_dir.name
        self.storage = DocumentStorage(self.upload_dir)

    async def asyncTearDown(self):
        await self.session.close()
        await self.engine.dispose()
        self._upload_dir.cleanup()

    async def create_user(self, username="alice", role="user"):
        user = await users.create_user(self.session, username, "not-a-real-hash", role=role)
        await self.session.commit()
        return user.id

    async def count(self, model, session=None):
        session = session or self.session
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()

    async def count_rows(self, session=None):
        return (
            await self.count(OnboardingApplication, session),
            await self.count(AdminTask, session),
        )

    def uploaded_files(self):
        return sorted(os.listdir(self.upload_dir))
