"""Error classification model for retrykit."""

from pydantic import BaseModel, ConfigDict, Field

from retrykit.core.retry_config import ErrorType


class ClassifiedError(BaseModel):
    """User-facing description of a failure.

    should_retry is advisory for presentation only; the retry loop makes its
    own decision with is_retryable.
    """

    model_config = ConfigDict(frozen=True)

    type: ErrorType = Field(
        ...,
        description="Error category (e.g., 'timeout', 'client_error')"
    )
    user_message: str = Field(
        ...,
        description="Message safe to show to an end user"
    )
    should_retry: bool = Field(
        ...,
        description="Whether suggesting a retry to the user makes sense"
    )
