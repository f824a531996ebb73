"""Store DTOs."""

from pydantic import BaseModel, ConfigDict


class StoreErrorPayload(BaseModel):
    """Error body returned by the hosted data backend."""

    model_config = ConfigDict(extra="ignore")

    message: str
    code: str | None = None
    details: str | None = None
    hint: str | None = None

    def describe(self) -> str:
        """Message with details appended when present."""
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message
