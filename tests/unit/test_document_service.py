"""Unit tests for document services and the master document guard."""

import pytest

from app.core.errors import AppError, ErrorKind
from app.db.repositories.document_repository import DocumentRepository
from app.domains.documents.entities import Document
from app.domains.documents.schemas import DocumentCreate
from app.domains.documents.services import DocumentService


@pytest.mark.unit
def test_master_guard_allows_document_name_only():
    document = Document(id=1, document_name="doc1", owner="user1", created_on=None, is_master=True)

    document.check_update({})
    document.check_update({"document_name": "renamed"})

    for props in ({"is_template": True}, {"document_name": "x", "is_locked": True}):
        with pytest.raises(AppError) as exc_info:
            document.check_update(props)
        assert exc_info.value.kind is ErrorKind.BAD_REQUEST
        assert exc_info.value.message == (
            "Only document name can be updated for primary resume templates."
        )


@pytest.mark.unit
def test_non_master_guard_allows_any_subset():
    document = Document(id=2, document_name="doc2", owner="user1", created_on=None)
    document.check_update({"is_template": True, "is_locked": True, "document_name": "x"})


@pytest.mark.unit
async def test_registration_creates_master_document(session, user1):
    user, master = user1
    documents = await DocumentService(session).get_user_documents(user.username)

    assert [d.id for d in documents] == [master.id]
    assert master.is_master and not master.is_template and not master.is_locked


@pytest.mark.unit
async def test_update_master_with_other_fields_leaves_row_unchanged(session, user1):
    user, master = user1
    service = DocumentService(session)

    with pytest.raises(AppError) as exc_info:
        await service.update_document(
            user.username, master.id, {"document_name": "new", "is_template": True}
        )
    assert exc_info.value.kind is ErrorKind.BAD_REQUEST

    unchanged = await DocumentRepository(session).get(master.id)
    assert unchanged.document_name == master.document_name
    assert unchanged.is_template is False

    renamed = await service.update_document(user.username, master.id, {"document_name": "new"})
    assert renamed.document_name == "new"


@pytest.mark.unit
async def test_update_non_master_and_empty_update(session, user1):
    user, _ = user1
    service = DocumentService(session)
    document = await service.create_document(user.username, DocumentCreate(document_name="doc2"))

    same = await service.update_document(user.username, document.id, {})
    assert same.document_name == "doc2"

    updated = await service.update_document(
        user.username, document.id, {"is_template": True, "is_locked": True}
    )
    assert updated.is_template and updated.is_locked
    assert updated.last_updated >= document.last_updated


@pytest.mark.unit
async def test_duplicate_document_name_is_bad_request(session, user1):
    user, master = user1
    with pytest.raises(AppError) as exc_info:
        await DocumentService(session).create_document(
            user.username, DocumentCreate(document_name=master.document_name)
        )
    assert exc_info.value.kind is ErrorKind.BAD_REQUEST
    assert exc_info.value.message == f'Document with name "{master.document_name}" already exists.'


@pytest.mark.unit
async def test_update_of_vanished_document_is_server_error(session, user1):
    user, _ = user1
    repository = DocumentRepository(session)
    document = await repository.create(owner=user.username, document_name="gone")
    await repository.delete(document.id)

    with pytest.raises(AppError) as exc_info:
        await repository.update(document, {"document_name": "still gone"})
    assert exc_info.value.kind is ErrorKind.SERVER_ERROR


@pytest.mark.unit
async def test_delete_document(session, user1):
    user, master = user1
    service = DocumentService(session)
    document = await service.create_document(user.username, DocumentCreate(document_name="doc2"))

    await service.delete_document(user.username, document.id)
    await service.delete_document(user.username, document.id)
    await service.delete_document(user.username, 12345)

    with pytest.raises(AppError) as exc_info:
        await service.delete_document(user.username, master.id)
    assert exc_info.value.kind is ErrorKind.FORBIDDEN
    assert exc_info.value.message == "Can not delete primary resume template."

    assert [d.id for d in await service.get_user_documents(user.username)] == [master.id]


@pytest.mark.unit
async def test_other_users_document_is_forbidden(session, user1):
    _, master = user1
    with pytest.raises(AppError) as exc_info:
        await DocumentService(session).get_document("user2", master.id)
    assert exc_info.value.kind is ErrorKind.FORBIDDEN
