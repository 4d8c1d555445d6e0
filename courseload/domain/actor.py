"""The authenticated identity performing a request."""

from dataclasses import dataclass

from courseload.domain.enums import Role


@dataclass(frozen=True)
class Actor:
    id: int
    role: Role
    email: str
    name: str

    @property
    def is_qa(self) -> bool:
        return self.role == Role.QA

    @classmethod
    def from_user(cls, user) -> "Actor":
        return cls(id=user.id, role=user.role, email=user.email, name=user.name)
