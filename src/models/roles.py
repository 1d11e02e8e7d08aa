"""Role DTOs."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class RoleCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    role_name: StrictStr = Field(..., alias="roleName", min_length=1, examples=["EMPLOYEE"])


class RoleUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: StrictStr = Field(..., min_length=1, description="New name of the role.")
