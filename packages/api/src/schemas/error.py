# This project was developed with assistance from AI tools.
"""RFC 7807 Problem Details error response schema."""

from http import HTTPStatus

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    See https://datatracker.ietf.org/doc/html/rfc7807
    """

    type: str = Field(default="about:blank", description="Problem type URI.")
    title: str = Field(description="Reason phrase of the status code.")
    status: int
    detail: str = ""
    request_id: str = Field(default="", description="Correlation ID echoed from X-Request-ID.")
    instance: str = Field(default="", description="Request path that produced the problem.")

    @classmethod
    def for_status(
        cls,
        status_code: int,
        detail: str,
        *,
        request_id: str = "",
        instance: str = "",
    ) -> "ErrorResponse":
        try:
            title = HTTPStatus(status_code).phrase
        except ValueError:
            title = "Error"
        return cls(
            title=title,
            status=status_code,
            detail=detail,
            request_id=request_id,
            instance=instance,
        )
