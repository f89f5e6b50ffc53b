import asyncio
import os

# Cheap hashes for tests; must be set before settings load
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("STORAGE_BACKEND", "inmemory")

import pytest
from fastapi.testclient import TestClient

from question_bank.auth.jwt_handler import create_access_token
from question_bank.mailer import Mailer
from question_bank.main import app
from question_bank.seed import seed_database
from question_bank.storage.inmemory import InMemoryQuestionBankRepository
from question_bank.wiring import get_mailer, get_repo


class RecordingMailer(Mailer):
    def __init__(self):
        self.sent = []

    async def send(self, to, subject, message):
        self.sent.append({"to": to, "subject": subject, "message": message})


def auth_header(user):
    token = create_access_token(user_id=user.id, email=user.email, role=user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def repo():
    return InMemoryQuestionBankRepository()


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def client(repo, mailer):
    app.dependency_overrides[get_repo] = lambda: repo
    app.dependency_overrides[get_mailer] = lambda: mailer
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def seeded(repo):
    return asyncio.run(seed_database(repo))


@pytest.fixture
def admin_headers(seeded):
    return auth_header(seeded["admin"])


@pytest.fixture
def student_headers(seeded):
    return auth_header(seeded["student"])
