import pytest

from courseload.application.services.auth_service import (
    assign_role,
    authenticate_user,
    create_qa_user,
    hash_password,
    is_institutional_email,
    register_lecturer,
    verify_password,
)
from courseload.core.exceptions import (
    DuplicateError,
    EntityNotFoundException,
    InvalidCredentialsException,
    ValidationError,
)
from courseload.domain.enums import Role
from courseload.domain.schemas.auth import CreateQARequest, RegisterRequest
from tests.helpers import PASSWORD, make_user, registration

DOMAIN = "utg.edu.gm"


def test_hash_is_salted_and_verifiable():
    first, second = hash_password("secret"), hash_password("secret")
    assert first != second
    assert "secret" not in first
    assert verify_password("secret", first)
    assert not verify_password("wrong", first)


@pytest.mark.parametrize("email,expected", [
    ("a@utg.edu.gm", True),
    ("first.last@utg.edu.gm", True),
    ("a@gmail.com", False),
    ("a@utg.edu.gm.evil.com", False),
    ("@utg.edu.gm", False),
])
def test_institutional_email(email, expected):
    assert is_institutional_email(email, DOMAIN) is expected


def test_register_lecturer_trims_and_forces_role(users):
    payload = RegisterRequest.model_validate(registration(name="  Awa  ", email=" AWA@utg.edu.gm "))
    user = register_lecturer(users, payload, DOMAIN)
    assert user.name == "Awa"
    assert user.email == "awa@utg.edu.gm"
    assert user.role == Role.LECTURER
    assert user.password_hash != PASSWORD


def test_register_rejects_missing_field(users):
    payload = RegisterRequest.model_validate(registration(school="   "))
    with pytest.raises(ValidationError, match="All fields are required"):
        register_lecturer(users, payload, DOMAIN)
    assert users.list() == []


def test_register_rejects_foreign_domain(users):
    payload = RegisterRequest.model_validate(registration(email="awa@gmail.com"))
    with pytest.raises(ValidationError):
        register_lecturer(users, payload, DOMAIN)
    assert users.list() == []


def test_register_rejects_duplicate(users):
    make_user(users)
    payload = RegisterRequest.model_validate(registration())
    with pytest.raises(DuplicateError):
        register_lecturer(users, payload, DOMAIN)


def test_authenticate_user(users):
    make_user(users)
    assert authenticate_user(users, "AWA@utg.edu.gm", PASSWORD).email == "awa@utg.edu.gm"
    with pytest.raises(InvalidCredentialsException):
        authenticate_user(users, "awa@utg.edu.gm", "nope")
    with pytest.raises(InvalidCredentialsException):
        authenticate_user(users, "ghost@utg.edu.gm", PASSWORD)
    with pytest.raises(ValidationError):
        authenticate_user(users, None, PASSWORD)


def test_create_qa_user_uses_bank_defaults(users):
    payload = CreateQARequest(name="Reviewer", email="rev@utg.edu.gm", password="pw")
    user = create_qa_user(users, payload, DOMAIN)
    assert user.role == Role.QA
    assert user.school == "N/A"


def test_create_qa_user_rejects_foreign_domain(users):
    payload = CreateQARequest(name="Reviewer", email="rev@example.com", password="pw")
    with pytest.raises(ValidationError):
        create_qa_user(users, payload, DOMAIN)
    assert users.list() == []


def test_assign_role(users):
    user = make_user(users)
    assert assign_role(users, user.id, "QA").role == Role.QA
    with pytest.raises(ValidationError):
        assign_role(users, user.id, "Dean")
    with pytest.raises(ValidationError):
        assign_role(users, None, "QA")
    with pytest.raises(EntityNotFoundException):
        assign_role(users, 999, "QA")
