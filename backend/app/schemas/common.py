"""
Timeledger Backend — Shared Schema Types
=========================================

What:  Decimal aliases and the error/health response models used by every route.

Decimal rendering:
    Amounts and hours are `Decimal` everywhere inside the service layer so
    percentage and remaining-budget arithmetic never drifts. At the JSON
    boundary they are rendered as plain numbers, which is what API
    consumers (and the frontend charts) expect. Values are rounded half-up
    to cents before conversion, so a float never carries more than two
    decimals of a Decimal. Python-mode dumps keep the Decimal.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, Field, PlainSerializer

CENTS = Decimal("0.01")


def to_json_number(value: Decimal) -> float:
    return float(value.quantize(CENTS, rounding=ROUND_HALF_UP))


# Money, hours and percentages share the same wire format
DecimalNumber = Annotated[
    Decimal,
    PlainSerializer(to_json_number, return_type=float, when_used="json"),
]


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "Position with ID '42' does not exist",
            "details": {"field": "position_id"},
            "request_id": "550e8400"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer health checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
