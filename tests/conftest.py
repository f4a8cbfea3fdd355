import os

import pytest
from fastapi.testclient import TestClient

# Environment must be in place before the application settings are loaded
os.environ.setdefault("TESTING", "1")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault(
    "AES_SECRET_KEY", "00112233445566778899aabbccddeeff00112233445566778899aabbccddeeff"
)
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from clinic_backend.core.config import settings
from clinic_backend.core.database import get_redis
from clinic_backend.core.security import create_user_token, get_password_hash
from clinic_backend.main import create_app
from clinic_backend.models.doctor import Doctor
from clinic_backend.models.user import User


class InMemoryRedis:
    """Test double for the handful of redis commands the app uses."""

    def __init__(self):
        self.data = {}

    def setex(self, key, time, value):
        self.data[key] = str(value)
        return True

    def get(self, key):
        return self.data.get(key)

    def incr(self, key):
        self.data[key] = str(int(self.data.get(key, "0")) + 1)
        return int(self.data[key])

    def close(self):
        pass


PASSWORDS = {
    "admin": "Admin@123",
    "doctor": "Doctor@123",
    "patient": "Patient@123",
}

USERS = [
    {"id": "1", "email": "admin@hospital.com", "role": "admin", "name": "Admin User", "phone": "+1234567890"},
    {"id": "2", "email": "dr.smith@hospital.com", "role": "doctor", "name": "Dr. John Smith", "phone": "+1234567891"},
    {"id": "3", "email": "dr.johnson@hospital.com", "role": "doctor", "name": "Dr. Sarah Johnson", "phone": "+1234567892"},
    {"id": "4", "email": "patient1@email.com", "role": "patient", "name": "Alice Johnson", "phone": "+1234567893"},
    {"id": "5", "email": "patient2@email.com", "role": "patient", "name": "Bob Wilson", "phone": "+1234567894"},
]


@pytest.fixture
def test_settings(tmp_path):
    return settings.model_copy(update={
        "TESTING": True,
        "TEST_DATABASE_URL": f"sqlite:///{tmp_path / 'test.db'}",
        "RATE_LIMIT_ENABLED": True,
        "LOGIN_RATE_LIMIT": 10,
    })


@pytest.fixture
def fake_redis():
    return InMemoryRedis()


@pytest.fixture
def app(test_settings, fake_redis):
    application = create_app(test_settings)
    application.dependency_overrides[get_redis] = lambda: fake_redis
    return application


@pytest.fixture
def client(app):
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client


@pytest.fixture
def db_session(client):
    session = client.app.state.database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def cipher(client):
    return client.app.state.cipher


@pytest.fixture
def seeded(db_session, cipher):
    """Admin, two doctors (only Dr. Smith has a doctor record) and two patients."""
    from clinic_backend.core.crypto import hash_value

    users = {}
    for data in USERS:
        user = User(
            password=get_password_hash(PASSWORDS[data["role"]]),
            phone_hash=hash_value(data["phone"]),
            status="active",
            **data,
        )
        db_session.add(user)
        users[data["id"]] = user

    doctor = Doctor(
        user_id="2",
        clinic_id="1",
        name="Dr. John Smith",
        specialization="Cardiology",
        experience="15 years",
        qualification="MD, FACC",
        description=cipher.encrypt("Experienced cardiologist."),
        available_slots='[{"day": "monday", "times": ["09:00", "10:00"]}]',
    )
    db_session.add(doctor)
    db_session.commit()
    db_session.refresh(doctor)
    for user in users.values():
        db_session.refresh(user)
    return {"users": users, "doctor": doctor}


def _headers(user):
    return {"Authorization": f"Bearer {create_user_token(user)}"}


@pytest.fixture
def admin_headers(seeded):
    return _headers(seeded["users"]["1"])


@pytest.fixture
def doctor_headers(seeded):
    return _headers(seeded["users"]["2"])


@pytest.fixture
def doctor_without_record_headers(seeded):
    return _headers(seeded["users"]["3"])


@pytest.fixture
def patient_headers(seeded):
    return _headers(seeded["users"]["4"])


@pytest.fixture
def other_patient_headers(seeded):
    return _headers(seeded["users"]["5"])
