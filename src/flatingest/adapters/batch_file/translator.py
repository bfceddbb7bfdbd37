"""Translate raw batch entries into typed domain operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError as PydanticValidationError

from flatingest.domain.bulk_import import (
    CreateFile,
    CreateMedia,
    CreateNode,
    IdRef,
    UnknownOperationError,
    UpdateNode,
    ValidationError,
)
from flatingest.domain.model import OperationKind

from .schema import (
    BatchBaseModel,
    CreateFilePayload,
    CreateMediaPayload,
    CreateNodePayload,
    UpdateNodePayload,
)

if TYPE_CHECKING:
    from flatingest.domain.bulk_import import Operation

_PAYLOAD_MODELS: Final[dict[OperationKind, type[BatchBaseModel]]] = {
    OperationKind.CREATE_NODE: CreateNodePayload,
    OperationKind.UPDATE_NODE: UpdateNodePayload,
    OperationKind.CREATE_FILE: CreateFilePayload,
    OperationKind.CREATE_MEDIA: CreateMediaPayload,
}


def decode_operation(raw: object) -> Operation:
    """Validate ``raw`` against the wire model of its ``op`` and build the operation."""

    if not isinstance(raw, Mapping):
        raise ValidationError(f"operation must be an object, got {type(raw).__name__}")
    op_value = raw.get("op") or ""
    kind = OperationKind.parse(op_value)
    if kind is None:
        raise UnknownOperationError(op_value)

    try:
        payload = _PAYLOAD_MODELS[kind].model_validate(raw)
    except PydanticValidationError as exc:
        raise ValidationError(_format_errors(kind, exc)) from exc
    return translate_payload(payload)


def translate_payload(payload: BatchBaseModel) -> Operation:
    if isinstance(payload, CreateNodePayload):
        return CreateNode(
            temp_id=payload.temp_id,
            title=payload.title,
            pid=payload.pid,
            model_uuid=payload.model_uuid,
            parent=IdRef.optional(uuid=payload.parent_uuid, temp_id=payload.parent_temp_id),
        )
    if isinstance(payload, UpdateNodePayload):
        return UpdateNode(
            temp_id=payload.temp_id,
            title=payload.title,
            pid=payload.pid,
            model_uuid=payload.model_uuid,
            parent=IdRef.optional(uuid=payload.parent_uuid, temp_id=payload.parent_temp_id),
        )
    if isinstance(payload, CreateFilePayload):
        return CreateFile(
            temp_id=payload.temp_id,
            filename=payload.filename,
            uri=payload.uri,
            filemime=payload.filemime,
        )
    if not isinstance(payload, CreateMediaPayload):
        raise UnknownOperationError(type(payload).__name__)
    return CreateMedia(
        temp_id=payload.temp_id,
        bundle=payload.bundle,
        name=payload.name,
        media_use_uuid=payload.media_use_uuid,
        file=IdRef(uuid=payload.file_uuid, temp_id=payload.file_temp_id),
        node=IdRef(uuid=payload.node_uuid, temp_id=payload.node_temp_id),
        relation_field=payload.relation_field,
    )


def _format_errors(kind: OperationKind, exc: PydanticValidationError) -> str:
    details: list[str] = []
    for error in exc.errors(include_url=False):
        location = ".".join(str(part) for part in error["loc"])
        message = error["msg"]
        details.append(f"{location}: {message}" if location else message)
    return f"Invalid {kind} operation: " + "; ".join(details)
