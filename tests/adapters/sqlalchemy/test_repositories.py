from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from flatingest.adapters.sqlalchemy import (
    SqlAlchemyFileRepository,
    SqlAlchemyMediaRepository,
    SqlAlchemyObjectRepository,
    SqlAlchemyTermRepository,
)
from flatingest.adapters.sqlalchemy.mappings import file_table
from flatingest.domain.model import (
    FileRecord,
    FileStatus,
    MediaFileField,
    MediaRecord,
    NotPersistedError,
    RepositoryObject,
    Term,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


def _term(session: Session) -> Term:
    term = Term(vocabulary="islandora_models", name="Collection")
    SqlAlchemyTermRepository(session).add(term)
    return term


def _node(model: Term, *, title: str = "Root", member_of_id: int | None = None) -> RepositoryObject:
    assert model.id is not None
    return RepositoryObject(
        bundle="islandora_object",
        title=title,
        pid="p:1",
        model_id=model.id,
        member_of_id=member_of_id,
    )


def test_add_assigns_store_identifiers(sqlite_session: Session) -> None:
    term = Term(vocabulary="islandora_models", name="Collection")
    assert not term.is_persisted

    ref = SqlAlchemyTermRepository(sqlite_session).add(term)

    assert term.is_persisted
    assert ref.id == term.id
    assert ref.uuid == term.uuid
    assert ref.revision_id is None


def test_get_by_uuid(sqlite_session: Session) -> None:
    repo = SqlAlchemyTermRepository(sqlite_session)
    term = _term(sqlite_session)
    sqlite_session.commit()

    assert repo.get_by_uuid(term.uuid) is term
    assert repo.get_by_uuid(uuid4()) is None


def test_node_revisions_form_a_history(sqlite_session: Session) -> None:
    repo = SqlAlchemyObjectRepository(sqlite_session)
    model = _term(sqlite_session)
    node = _node(model)

    created = repo.add(node)
    node.title = "Renamed"
    updated = repo.save_revision(node)
    sqlite_session.commit()

    assert created.id == updated.id
    assert created.revision_id is not None
    assert updated.revision_id is not None
    assert updated.revision_id > created.revision_id
    revisions = repo.list_revisions(node)
    assert [revision.title for revision in revisions] == ["Root", "Renamed"]
    assert revisions[-1].id == node.revision_id
    assert all(revision.object_id == node.id for revision in revisions)


def test_save_revision_requires_created_node(sqlite_session: Session) -> None:
    model = _term(sqlite_session)

    with pytest.raises(NotPersistedError):
        SqlAlchemyObjectRepository(sqlite_session).save_revision(_node(model))


def test_node_membership_references_parent(sqlite_session: Session) -> None:
    repo = SqlAlchemyObjectRepository(sqlite_session)
    model = _term(sqlite_session)
    parent = _node(model)
    repo.add(parent)
    child = _node(model, title="Child", member_of_id=parent.id)
    repo.add(child)
    sqlite_session.commit()

    loaded = repo.get_by_uuid(child.uuid)

    assert loaded is not None
    assert loaded.member_of_id == parent.id


def test_file_status_is_stored_as_value(sqlite_session: Session) -> None:
    file = FileRecord(filename="page.tif", uri="public://page.tif", filemime="image/tiff")
    file.set_permanent()
    SqlAlchemyFileRepository(sqlite_session).add(file)
    sqlite_session.commit()

    stored = sqlite_session.execute(
        select(file_table.c.status).where(file_table.c.id == file.id)
    ).scalar_one()

    assert stored == FileStatus.PERMANENT
    assert file.status is FileStatus.PERMANENT


def test_media_links_file_and_node(sqlite_session: Session) -> None:
    model = _term(sqlite_session)
    node = _node(model)
    SqlAlchemyObjectRepository(sqlite_session).add(node)
    file = FileRecord(filename="a", uri="public://a", filemime="image/tiff")
    SqlAlchemyFileRepository(sqlite_session).add(file)
    assert node.id is not None
    assert file.id is not None
    assert model.id is not None

    media_repo = SqlAlchemyMediaRepository(sqlite_session)
    media = MediaRecord(
        bundle="image",
        name="a",
        media_use_id=model.id,
        media_of_id=node.id,
        file_field=MediaFileField.IMAGE,
        file_id=file.id,
    )
    media_repo.add(media)
    sqlite_session.commit()
    sqlite_session.expire_all()

    loaded = media_repo.get_by_uuid(media.uuid)
    assert loaded is not None
    assert loaded.file_field is MediaFileField.IMAGE
    assert (loaded.file_id, loaded.media_of_id) == (file.id, node.id)


def test_uuid_must_be_unique(sqlite_session: Session) -> None:
    repo = SqlAlchemyTermRepository(sqlite_session)
    first = _term(sqlite_session)

    with pytest.raises(IntegrityError):
        repo.add(Term(vocabulary="islandora_models", name="Other", uuid=first.uuid))
