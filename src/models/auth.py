from pydantic import BaseModel, ConfigDict, Field, StrictStr


class ResetPasswordRequest(BaseModel):
    """
    Body of a password reset confirmation.
    Only the shape is checked here; the token itself is verified elsewhere.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    token: StrictStr = Field(
        ...,
        min_length=1,
        description="Opaque token issued by the reset request",
        examples=["uuid-reset-token"],
    )
    new_password: StrictStr = Field(
        ...,
        alias="newPassword",
        min_length=8,
        description="Password to set",
        examples=["NewSecurePassword123!"],
    )


class ChangePasswordRequest(BaseModel):
    """Body of an authenticated password change."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    old_password: StrictStr = Field(
        ..., alias="oldPassword", min_length=1, examples=["OldSecurePassword123!"]
    )
    new_password: StrictStr = Field(
        ..., alias="newPassword", min_length=8, examples=["NewSecurePassword123!"]
    )
