"""Shared fakes and request helpers for the test suite."""

from courseload.application.services.auth_service import hash_password
from courseload.config import Settings
from courseload.domain.enums import Role
from courseload.infrastructure.mailer import MailDeliveryError

QA_EMAIL = "qa.admin@utg.edu.gm"
QA_PASSWORD = "qa-admin-password"
PASSWORD = "lecturer-password"


class RecordingMailer:
    """In-memory mailer; addresses in ``failing`` raise like a broken transport."""

    def __init__(self):
        self.sent = []
        self.failing = set()
        self.closed = False

    async def send(self, to, subject, text):
        if to in self.failing:
            raise MailDeliveryError(f"Failed to send email to {to}")
        self.sent.append({"to": to, "subject": subject, "text": text})

    def verify(self):
        return True

    def close(self):
        self.closed = True


class RecordingLogger:
    def __init__(self):
        self.events = []

    def _record(self, level, event, **kw):
        self.events.append({"level": level, "event": event, **kw})

    def info(self, event, **kw):
        self._record("info", event, **kw)

    def warning(self, event, **kw):
        self._record("warning", event, **kw)

    def error(self, event, **kw):
        self._record("error", event, **kw)


def make_settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": "sqlite://",
        "SECRET_KEY": "test-secret",
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "WARNING",
        "QAADMIN_EMAIL": QA_EMAIL,
        "QAADMIN_PASSWORD": QA_PASSWORD,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_user(users, name="Awa Jallow", email="awa@utg.edu.gm", role=Role.LECTURER):
    return users.create({
        "name": name,
        "email": email,
        "password_hash": hash_password(PASSWORD),
        "role": role,
        "bank_name": "Trust Bank",
        "bank_account_number": "1234567",
        "bank_bban": "GM0012345678",
        "school": "School of ICT",
    })


def registration(name="Awa Jallow", email="awa@utg.edu.gm", **overrides):
    body = {
        "name": name,
        "email": email,
        "password": PASSWORD,
        "bankName": "Trust Bank",
        "bankAccountNumber": "1234567",
        "bankBBAN": "GM0012345678",
        "school": "School of ICT",
    }
    body.update(overrides)
    return body


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def register(client, name="Awa Jallow", email="awa@utg.edu.gm"):
    r = client.post("/api/auth/register", json=registration(name=name, email=email))
    assert r.status_code == 201, r.text
    return r.json()["token"], r.json()["user"]


def login(client, email, password=PASSWORD):
    r = client.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["token"]


def create_course(client, token, **overrides):
    body = {"title": "CS101", "semester": "First", "enrolled": 10, "capacity": 30}
    body.update(overrides)
    r = client.post("/api/courses", json=body, headers=bearer(token))
    assert r.status_code == 201, r.text
    return r.json()["course"]
