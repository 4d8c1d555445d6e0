"""Enumerations shared by models, schemas and services."""

import enum


class Role(str, enum.Enum):
    LECTURER = "Lecturer"
    QA = "QA"


class Semester(str, enum.Enum):
    FIRST = "First"
    SECOND = "Second"


class OverloadType(str, enum.Enum):
    MASTERS = "Masters"
    BACHELOR = "Bachelor"


class PaymentStatus(str, enum.Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    # No operation sets this yet; kept so stored values stay valid.
    PAID = "Paid"


def enum_values(enum_cls) -> list[str]:
    """Persist enum values ("Lecturer"), not member names ("LECTURER")."""
    return [member.value for member in enum_cls]
