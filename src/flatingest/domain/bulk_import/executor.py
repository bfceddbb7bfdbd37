"""Per-kind handlers that turn typed operations into store mutations.

Every handler resolves all references before it touches the store, so a
failure in resolution leaves nothing behind. Identifiers of created records are
bound in the :class:`IdentifierResolver` only after the unit of work committed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from flatingest.domain.bulk_import.errors import (
    NotFoundError,
    ReferenceKindError,
    ReferenceNotFoundError,
    UnknownOperationError,
    UnresolvedReferenceError,
)
from flatingest.domain.bulk_import.operations import (
    CreateFile,
    CreateMedia,
    CreateNode,
    UpdateNode,
)
from flatingest.domain.bulk_import.report import ProcessedEntry
from flatingest.domain.model import (
    EntityType,
    FileRecord,
    MediaRecord,
    ReferenceKind,
    RepositoryObject,
)

if TYPE_CHECKING:
    from uuid import UUID

    from flatingest.domain.bulk_import.operations import IdRef, Operation
    from flatingest.domain.bulk_import.reference_cache import ReferenceCache
    from flatingest.domain.bulk_import.resolver import Binding, IdentifierResolver
    from flatingest.domain.model import StoredRef
    from flatingest.domain.ports import BulkImportRepositories, BulkImportUnitOfWork, Repository

log = logging.getLogger(__name__)

DEFAULT_NODE_BUNDLE = "islandora_object"

_LABELS: dict[EntityType, str] = {
    EntityType.NODE: "Node",
    EntityType.FILE: "File",
    EntityType.MEDIA: "Media",
    EntityType.TAXONOMY_TERM: "Taxonomy term",
}


class OperationExecutor:
    """Execute one operation at a time against the unit of work's repositories."""

    def __init__(
        self,
        uow: BulkImportUnitOfWork,
        *,
        resolver: IdentifierResolver,
        reference_cache: ReferenceCache,
        node_bundle: str = DEFAULT_NODE_BUNDLE,
    ) -> None:
        self._uow = uow
        self._resolver = resolver
        self._cache = reference_cache
        self._node_bundle = node_bundle

    @property
    def _repositories(self) -> BulkImportRepositories:
        return self._uow.repositories

    def execute(self, operation: Operation) -> ProcessedEntry:
        if isinstance(operation, CreateNode):
            return self._create_node(operation)
        if isinstance(operation, UpdateNode):
            return self._update_node(operation)
        if isinstance(operation, CreateFile):
            return self._create_file(operation)
        if isinstance(operation, CreateMedia):
            return self._create_media(operation)
        raise UnknownOperationError(getattr(operation, "kind", type(operation).__name__))

    # Handlers -------------------------------------------------------------------

    def _create_node(self, operation: CreateNode) -> ProcessedEntry:
        self._resolver.ensure_unbound(operation.temp_id)
        model_id = self._term_id(operation.model_uuid)
        parent_id = self._resolve_optional(operation.parent, EntityType.NODE)

        node = RepositoryObject(
            bundle=self._node_bundle,
            title=operation.title,
            pid=operation.pid,
            model_id=model_id,
            member_of_id=parent_id,
        )
        stored = self._repositories.objects.add(node)
        return self._commit_created(operation.temp_id, stored, node.entity_type)

    def _update_node(self, operation: UpdateNode) -> ProcessedEntry:
        uuid = self._bound(operation.temp_id, EntityType.NODE).uuid
        node = self._repositories.objects.get_by_uuid(uuid)
        if node is None:
            raise NotFoundError(EntityType.NODE, uuid)

        model_id = (
            self._term_id(operation.model_uuid) if operation.model_uuid is not None else None
        )
        parent_id = self._resolve_optional(operation.parent, EntityType.NODE)

        if operation.title is not None:
            node.title = operation.title
        if operation.pid is not None:
            node.pid = operation.pid
        if model_id is not None:
            node.model_id = model_id
        if parent_id is not None:
            node.member_of_id = parent_id

        stored = self._repositories.objects.save_revision(node)
        self._uow.commit()
        log.debug("Updated node %s (vid=%s)", stored.uuid, stored.revision_id)
        return ProcessedEntry(
            temp_id=operation.temp_id,
            uuid=stored.uuid,
            revision_id=stored.revision_id,
        )

    def _create_file(self, operation: CreateFile) -> ProcessedEntry:
        self._resolver.ensure_unbound(operation.temp_id)
        file = FileRecord(
            filename=operation.filename,
            uri=operation.uri,
            filemime=operation.filemime,
        )
        file.set_permanent()
        stored = self._repositories.files.add(file)
        return self._commit_created(operation.temp_id, stored, file.entity_type)

    def _create_media(self, operation: CreateMedia) -> ProcessedEntry:
        self._resolver.ensure_unbound(operation.temp_id)
        media_use_id = self._term_id(operation.media_use_uuid)
        file_id = self._resolve_required(operation.file, EntityType.FILE)
        node_id = self._resolve_required(operation.node, EntityType.NODE)

        media = MediaRecord(
            bundle=operation.bundle,
            name=operation.name,
            media_use_id=media_use_id,
            media_of_id=node_id,
            file_field=operation.relation_field,
            file_id=file_id,
        )
        stored = self._repositories.media.add(media)
        return self._commit_created(operation.temp_id, stored, media.entity_type)

    # Reference resolution -------------------------------------------------------

    def _term_id(self, uuid: UUID) -> int:
        return self._cache.resolve(ReferenceKind.TAXONOMY_TERM, uuid, self._lookup_term_id)

    def _lookup_term_id(self, uuid: UUID) -> int | None:
        term = self._repositories.terms.get_by_uuid(uuid)
        return term.id if term is not None else None

    def _resolve_optional(self, ref: IdRef | None, entity_type: EntityType) -> int | None:
        """Absent references are valid and mean "no relation"."""

        if ref is None:
            return None
        return self._resolve_required(ref, entity_type)

    def _resolve_required(self, ref: IdRef, entity_type: EntityType) -> int:
        if ref.temp_id is not None:
            return self._bound(ref.temp_id, entity_type).id

        uuid = cast("UUID", ref.uuid)
        record = self._repository_for(entity_type).get_by_uuid(uuid)
        if record is None or record.id is None:
            raise ReferenceNotFoundError(entity_type, uuid)
        return record.id

    def _bound(self, temp_id: str, entity_type: EntityType) -> Binding:
        """Return the binding of ``temp_id``, which must name a record of ``entity_type``."""

        binding = self._resolver.binding(temp_id)
        if binding is None:
            raise UnresolvedReferenceError(temp_id, label=_LABELS[entity_type])
        if binding.entity_type is not entity_type:
            raise ReferenceKindError(temp_id, expected=entity_type, actual=binding.entity_type)
        return binding

    def _repository_for(self, entity_type: EntityType) -> Repository[Any]:
        repositories = self._repositories
        if entity_type is EntityType.NODE:
            return repositories.objects
        if entity_type is EntityType.FILE:
            return repositories.files
        if entity_type is EntityType.MEDIA:
            return repositories.media
        return repositories.terms

    # Persistence ----------------------------------------------------------------

    def _commit_created(
        self, temp_id: str, stored: StoredRef, entity_type: EntityType
    ) -> ProcessedEntry:
        self._uow.commit()
        self._resolver.record(temp_id, stored.id, stored.uuid, entity_type)
        log.debug("Created %s -> id=%s uuid=%s", temp_id, stored.id, stored.uuid)
        return ProcessedEntry(temp_id=temp_id, uuid=stored.uuid, revision_id=stored.revision_id)
