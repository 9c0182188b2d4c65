from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class AiServiceError(Exception):
    code: str
    message: str
    details: Optional[Any] = None
    http_status: int = 500

    def to_contract_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details is not None:
            payload["details"] = self.details
        return payload


class MissingRequiredField(AiServiceError):
    def __init__(self, field: str) -> None:
        super().__init__(
            code="MISSING_REQUIRED_FIELD",
            message=f"Required field '{field}' is missing.",
            details={"field": field},
            http_status=400,
        )


class UpstreamUnavailable(AiServiceError):
    def __init__(self, message: str = "Text generation provider is not configured.") -> None:
        super().__init__(
            code="UPSTREAM_UNAVAILABLE",
            message=message,
            http_status=503,
        )


class UpstreamCallFailed(AiServiceError):
    def __init__(self, error: str, status: Optional[int] = None) -> None:
        super().__init__(
            code="UPSTREAM_CALL_FAILED",
            message="Text generation provider call failed.",
            details={"status": status, "error": error},
            http_status=502,
        )


class UpstreamContentUnusable(AiServiceError):
    def __init__(self, error: str) -> None:
        super().__init__(
            code="UPSTREAM_CONTENT_UNUSABLE",
            message="Text generation provider returned unusable content.",
            details={"error": error},
            http_status=502,
        )
