"""Response envelope model for retrykit.

The backend answers either with a standard envelope
({success, data, message, ...}) or with a bare JSON payload; both are
normalised into ApiResponse.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApiResponse(BaseModel):
    """Standardized success envelope returned by ApiClient.request."""

    model_config = ConfigDict(extra="allow")

    success: bool = Field(True, description="Always true for returned responses")
    data: Any = Field(None, description="Response payload")
    message: Optional[str] = Field(None, description="Human readable status message")
    status: Optional[int] = Field(None, description="HTTP status code")
    timestamp: Optional[str] = Field(None, description="ISO-8601 timestamp")

    @classmethod
    def from_body(cls, body: Any, status: int) -> "ApiResponse":
        """Build an envelope from a decoded response body.

        Bodies that already carry ``success: true`` are taken as the envelope;
        anything else is wrapped as the payload.
        """
        if isinstance(body, dict) and body.get("success") is True:
            envelope = dict(body)
            envelope.setdefault("status", status)
            return cls(**envelope)

        return cls(
            success=True,
            data=body,
            message="Operation successful",
            status=status,
            timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        )
