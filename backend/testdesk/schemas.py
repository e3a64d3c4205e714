"""
Pydantic request bodies shared by routes and services.

The HTTP API speaks camelCase (as the browser client sends it); fields are
snake_case in Python and accept either spelling.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=1)
    role: Literal["student", "creator"] = "student"

    @field_validator("email")
    @classmethod
    def email_has_local_part_and_domain(cls, value: str) -> str:
        local, sep, domain = value.strip().partition("@")
        if not local or not sep or not domain:
            raise ValueError("email must look like name@domain")
        return value


class ResponseIn(BaseModel):
    """A student's answer to one question, as submitted."""
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    question_id: int = Field(..., alias="questionId")
    selected_option: Optional[str] = Field(None, alias="selectedOption")
    time_spent: Optional[int] = Field(0, alias="timeSpent")


class SubmitRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    test_id: int = Field(..., alias="testId")
    responses: List[ResponseIn] = Field(default_factory=list)
    time_taken: Optional[int] = Field(None, alias="timeTaken")
