from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from shared.constants import Role, is_privileged


class CurrentUser(BaseModel):
    """Caller context from the JWT; trusted verbatim by every service."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: UUID
    email: str
    roles: list[Role] = Field(default_factory=list)

    @property
    def is_privileged(self) -> bool:
        return is_privileged(self.roles)
