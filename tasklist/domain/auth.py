"""Auth domain model supplied by the external auth provider."""

from pydantic import BaseModel, ConfigDict, Field


class AuthState(BaseModel):
    """Auth slice of the application state."""

    model_config = ConfigDict(frozen=True)

    is_authenticated: bool = Field(default=False, description="Whether the user is signed in")
    city: str | None = Field(default=None, description="User's city from their profile, used for weather lookups")
