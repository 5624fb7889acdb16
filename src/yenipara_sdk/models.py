"""Pydantic models for the YeniPara SDK.

``RequestSpec`` describes one logical API call. The remaining models are the
JSON payloads exchanged with the API; field names follow the wire format.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, JsonValue, field_validator

T = TypeVar("T")

FALLBACK_ERROR_MESSAGE = "An unknown error occurred"


class HTTPMethod(StrEnum):
    """HTTP methods used by the API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class RequestSpec(BaseModel):
    """Immutable description of one logical API call."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., min_length=1)
    method: HTTPMethod = HTTPMethod.GET
    body: JsonValue | None = None
    requires_auth: bool = True
    max_attempts: Annotated[int, Field(ge=1, le=10)] = 4

    params: dict[str, str] | None = None
    timeout: Annotated[float, Field(gt=0, le=300)] | None = None

    @field_validator("params", mode="before")
    @classmethod
    def stringify_params(cls, v: Any) -> Any:
        """Query values are sent as strings; drop ``None`` entries."""
        if v is None:
            return None
        return {str(k): str(val) for k, val in dict(v).items() if val is not None}


# Wire payloads


class ErrorResponse(BaseModel):
    """Error body returned by the API."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    error: str | None = None
    message: str | None = None
    success: bool | None = None
    code: str | None = None
    details: dict[str, Any] | None = None

    @property
    def has_message(self) -> bool:
        return bool(self.error or self.message)

    @property
    def display_message(self) -> str:
        return self.error or self.message or FALLBACK_ERROR_MESSAGE


class APIResponse(BaseModel, Generic[T]):
    """Standard ``{"success": ..., "data": ...}`` envelope."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    success: bool
    data: T | None = None
    error: str | None = None
    message: str | None = None


class MessageResponse(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    message: str
    success: bool


# Auth


class User(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    email: str
    username: str
    full_name: str | None = None
    phone_number: str | None = None
    is_quiz_completed: bool = False
    created_at: str | None = None


class AuthData(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    user_id: int | None = None
    access_token: str | None = None
    refresh_token: str | None = None
    user: User | None = None


class AuthResponse(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    success: bool
    data: AuthData | None = None
    error: str | None = None
    user_id: int | None = None


class RegisterRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    full_name: str
    phone_number: str


# Quiz


class QuizOption(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    question_id: int
    option_text: str
    option_order: int
    points: int
    created_at: str | None = None


class QuizQuestion(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    question_text: str
    question_order: int
    options: list[QuizOption] = Field(default_factory=list)
    created_at: str | None = None


class QuizQuestionsData(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    questions: list[QuizQuestion]
    total: int


class InvestorProfile(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    profile_type: str
    name: str
    description: str
    min_points: int
    max_points: int
    risk_tolerance: str
    investment_horizon: str
    preferred_sectors: list[str] = Field(default_factory=list)
    stock_allocation_percentage: int
    bond_allocation_percentage: int
    cash_allocation_percentage: int
    created_at: str | None = None
    updated_at: str | None = None


class QuizSubmitData(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    investor_profile: InvestorProfile
    total_points: int
    quiz_completed: bool
    recommendations: list[str] = Field(default_factory=list)


class QuizStatusData(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    quiz_completed: bool
    investor_profile: InvestorProfile | None = None
