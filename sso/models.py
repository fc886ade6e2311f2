from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ConfigurationError(RuntimeError):
    """Raised when a required setting is neither configured nor passed as an option."""


@dataclass(frozen=True)
class SSOConfig:
    secret: str | None = field(default=None, repr=False)
    url: str | None = None


@dataclass(frozen=True)
class SignedPacket:
    payload: str
    signature: str

    def as_query(self) -> dict[str, str]:
        return {"sig": self.signature, "sso": self.payload}


class ValidationFailure(str, Enum):
    INVALID_SIGNATURE = "invalid_signature"
    INVALID_ENCODING = "invalid_encoding"
    INVALID_PAYLOAD = "invalid_payload"


@dataclass(frozen=True)
class ValidationResult:
    nonce: str | None = None
    error: ValidationFailure | None = None
    fields: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: ValidationFailure) -> "ValidationResult":
        return cls(error=error)


@dataclass
class SSOUser:
    user_id: Any
    email: str
    attributes: dict[str, Any] = field(default_factory=dict)
