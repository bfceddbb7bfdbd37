"""Pydantic models describing the operations of a batch file."""

from __future__ import annotations

from typing import Literal, Self
from uuid import UUID  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from flatingest.domain.model import MediaFileField  # noqa: TC001


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _check_pair(name: str, uuid: UUID | None, temp_id: str | None, *, required: bool) -> None:
    if uuid is not None and temp_id is not None:
        raise ValueError(f"give either {name}_uuid or {name}_temp_id, not both")
    if required and uuid is None and temp_id is None:
        raise ValueError(f"one of {name}_uuid or {name}_temp_id is required")


class BatchBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class CreateNodePayload(BatchBaseModel):
    op: Literal["create_node"]
    temp_id: str = Field(min_length=1)
    title: str
    pid: str
    model_uuid: UUID
    parent_uuid: UUID | None = None
    parent_temp_id: str | None = None

    _normalize_parent = field_validator("parent_uuid", "parent_temp_id", mode="before")(
        _blank_to_none
    )

    @model_validator(mode="after")
    def _check_parent(self) -> Self:
        _check_pair("parent", self.parent_uuid, self.parent_temp_id, required=False)
        return self


class UpdateNodePayload(BatchBaseModel):
    op: Literal["update_node"]
    temp_id: str = Field(min_length=1)
    title: str | None = None
    pid: str | None = None
    model_uuid: UUID | None = None
    parent_uuid: UUID | None = None
    parent_temp_id: str | None = None

    _normalize_parent = field_validator("parent_uuid", "parent_temp_id", mode="before")(
        _blank_to_none
    )

    @model_validator(mode="after")
    def _check_parent(self) -> Self:
        _check_pair("parent", self.parent_uuid, self.parent_temp_id, required=False)
        return self


class CreateFilePayload(BatchBaseModel):
    op: Literal["create_file"]
    temp_id: str = Field(min_length=1)
    filename: str = Field(min_length=1)
    uri: str = Field(min_length=1)
    filemime: str = Field(min_length=1)


class CreateMediaPayload(BatchBaseModel):
    op: Literal["create_media"]
    temp_id: str = Field(min_length=1)
    bundle: str = Field(min_length=1)
    name: str
    media_use_uuid: UUID
    file_uuid: UUID | None = None
    file_temp_id: str | None = None
    node_uuid: UUID | None = None
    node_temp_id: str | None = None
    relation_field: MediaFileField

    _normalize_refs = field_validator(
        "file_uuid", "file_temp_id", "node_uuid", "node_temp_id", mode="before"
    )(_blank_to_none)

    @model_validator(mode="after")
    def _check_refs(self) -> Self:
        _check_pair("file", self.file_uuid, self.file_temp_id, required=True)
        _check_pair("node", self.node_uuid, self.node_temp_id, required=True)
        return self

