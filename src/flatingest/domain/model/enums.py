"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityType(StrEnum):
    """Record types held by the repository store."""

    NODE = "node"
    FILE = "file"
    MEDIA = "media"
    TAXONOMY_TERM = "taxonomy_term"


class OperationKind(StrEnum):
    """Discriminant of batch operations (wire value of the ``op`` field)."""

    CREATE_NODE = "create_node"
    UPDATE_NODE = "update_node"
    CREATE_FILE = "create_file"
    CREATE_MEDIA = "create_media"

    @classmethod
    def parse(cls, value: object) -> OperationKind | None:
        """Return the kind named by ``value`` or ``None`` when it is not recognised."""

        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class ReferenceKind(StrEnum):
    """Auxiliary classification records resolved by uuid and cached per run."""

    TAXONOMY_TERM = "taxonomy_term"


class MediaFileField(StrEnum):
    """Media attributes that may hold the file relation."""

    FILE = "field_media_file"
    IMAGE = "field_media_image"
    AUDIO_FILE = "field_media_audio_file"
    VIDEO_FILE = "field_media_video_file"
    DOCUMENT = "field_media_document"


class FileStatus(StrEnum):
    TEMPORARY = "temporary"
    PERMANENT = "permanent"
