from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class NumberRequest(BaseModel):
    # Older clients post the Indonesian column names.
    requester_reference: str | None = Field(
        default=None, validation_alias=AliasChoices("requester_reference", "user_id")
    )
    display_name: str | None = Field(default=None, validation_alias=AliasChoices("display_name", "nama"))
    location_name: str | None = Field(default=None, validation_alias=AliasChoices("location_name", "lokasi"))
    department_name: str | None = Field(
        default=None, validation_alias=AliasChoices("department_name", "departemen")
    )
    document_type_name: str | None = Field(
        default=None, validation_alias=AliasChoices("document_type_name", "jenis_surat")
    )
    description: str | None = Field(default=None, validation_alias=AliasChoices("description", "deskripsi"))

    @field_validator(
        "display_name",
        "location_name",
        "department_name",
        "document_type_name",
        "description",
    )
    @classmethod
    def strip_text(cls, value: str | None):
        return value.strip() if isinstance(value, str) else value

    @field_validator("requester_reference")
    @classmethod
    def blank_requester_is_anonymous(cls, value: str | None):
        if value is None:
            return None
        value = value.strip()
        return value or None


class NumberResponse(BaseModel):
    number: str


class ErrorResponse(BaseModel):
    error: str


class IssuedDocumentOut(BaseModel):
    id: str
    requester_reference: str | None = None
    display_name: str
    issued_number: str
    document_type_name: str
    description: str
    location_name: str
    department_name: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value):
        return str(value)
