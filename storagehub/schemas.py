from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class RequestModel(BaseModel):
    """Request bodies arrive camelCase from the web client."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SignupRequest(RequestModel):
    username: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginRequest(RequestModel):
    identifier: str = Field(..., min_length=1)
    password: str


class PasswordUpdate(RequestModel):
    user_id: int
    new_password: str = Field(..., min_length=1)


class PlanUpdate(RequestModel):
    user_id: int
    new_plan_name: Optional[str] = None
    is_custom: bool = False
    custom_amount: Optional[Union[int, float, str]] = None
    custom_unit: Optional[str] = None

    @field_validator("new_plan_name", "custom_amount", "custom_unit", mode="before")
    @classmethod
    def strip_blank(cls, value):
        # whitespace-only counts as missing
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @model_validator(mode="after")
    def check_plan_choice(self):
        if self.is_custom:
            if self.custom_amount is None or not self.custom_unit:
                raise ValueError("customAmount and customUnit are required for a custom plan")
        elif not self.new_plan_name:
            raise ValueError("newPlanName is required")
        return self


class FolderCreate(RequestModel):
    name: str = Field(..., min_length=1)
    user_id: int


class FileCreate(RequestModel):
    name: str = Field(..., min_length=1)
    size: int = Field(0, ge=0)  # numeric strings are coerced
    user_id: int
    folder_id: Optional[int] = None
    folder_name: Optional[str] = None
    content: Optional[str] = ""


class FileUpdate(RequestModel):
    content: Optional[str] = ""
    size: int = Field(0, ge=0)


class ShareCreate(RequestModel):
    file_id: int
    owner_id: int
    shared_with_email: Optional[str] = None
    user_id: Optional[int] = None
    permission: str = "viewer"

    @model_validator(mode="after")
    def check_owner_target(self):
        if self.permission == "owner" and not self.shared_with_email and self.user_id is None:
            raise ValueError("an ownership transfer needs sharedWithEmail or userId")
        return self
