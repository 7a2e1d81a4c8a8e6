"""Unit tests for versioned text snippets under document experiences."""

from datetime import date

import pytest

from app.core.errors import AppError, ErrorKind
from app.db.repositories.relationship_repository import (
    DOCUMENT_EXPERIENCES, EXPERIENCE_TEXT_SNIPPETS, RelationshipRepository
)
from app.db.repositories.text_snippet_repository import TextSnippetRepository
from app.domains.documents.schemas import DocumentCreate
from app.domains.documents.services import DocumentService
from app.domains.resume.section_items import EXPERIENCE, SectionItemService
from app.domains.resume.services import TextSnippetService

EXPERIENCE_PROPS = {
    "title": "Software Engineer I",
    "organization": "Company 1",
    "location": "City 1",
    "start_date": date(2000, 2, 2),
}


def bullet(n):
    return {"type": "bullet", "content": f"Did thing {n}"}


@pytest.fixture
async def experience(session, user1):
    user, master = user1
    created, _ = await SectionItemService(session, EXPERIENCE).create_section_item(
        user.username, master.id, dict(EXPERIENCE_PROPS)
    )
    return created


async def snippet_rows(session, document_id, experience_id):
    document_x_experience = await RelationshipRepository(session, DOCUMENT_EXPERIENCES).get(
        document_id, experience_id
    )
    rows = await RelationshipRepository(session, EXPERIENCE_TEXT_SNIPPETS).get_all(
        document_x_experience.id
    )
    return [(row.text_snippet_id, row.text_snippet_version, row.position) for row in rows]


@pytest.mark.unit
async def test_create_appends_snippets_in_order(session, user1, experience):
    user, master = user1
    service = TextSnippetService(session)

    created = []
    for n in (1, 2, 3):
        snippet, relationship = await service.create_text_snippet(
            user.username, master.id, experience.id, bullet(n)
        )
        assert snippet.parent is None
        assert relationship.text_snippet_version == snippet.version
        created.append(snippet)

    assert [s.id for s in created] == sorted({s.id for s in created})
    assert await snippet_rows(session, master.id, experience.id) == [
        (s.id, s.version, i) for i, s in enumerate(created)
    ]


@pytest.mark.unit
async def test_create_on_non_master_document_is_forbidden(session, user1, experience):
    user, _ = user1
    document = await DocumentService(session).create_document(
        user.username, DocumentCreate(document_name="copy")
    )
    await SectionItemService(session, EXPERIENCE).attach_item(
        user.username, document.id, experience.id
    )

    with pytest.raises(AppError) as exc_info:
        await TextSnippetService(session).create_text_snippet(
            user.username, document.id, experience.id, bullet(1)
        )
    assert exc_info.value.kind is ErrorKind.FORBIDDEN


@pytest.mark.unit
async def test_experience_not_in_document_is_not_found(session, user1, experience):
    user, _ = user1
    document = await DocumentService(session).create_document(
        user.username, DocumentCreate(document_name="copy")
    )

    with pytest.raises(AppError) as exc_info:
        await TextSnippetService(session).attach_text_snippet(
            user.username, document.id, experience.id, 1
        )
    assert exc_info.value.kind is ErrorKind.NOT_FOUND


@pytest.mark.unit
async def test_update_writes_new_version_for_one_document_only(session, user1, experience):
    user, master = user1
    service = TextSnippetService(session)
    original, _ = await service.create_text_snippet(
        user.username, master.id, experience.id, bullet(1)
    )

    document = await DocumentService(session).create_document(
        user.username, DocumentCreate(document_name="copy")
    )
    await SectionItemService(session, EXPERIENCE).attach_item(
        user.username, document.id, experience.id
    )
    await service.attach_text_snippet(user.username, document.id, experience.id, original.id)

    updated, relationship = await service.update_text_snippet(
        user.username, master.id, experience.id, original.id, {"content": "Did it better"}
    )

    assert updated.id == original.id
    assert updated.version > original.version
    assert updated.parent == original.version
    assert updated.type == original.type
    assert relationship.text_snippet_version == updated.version

    assert await snippet_rows(session, master.id, experience.id) == [
        (original.id, updated.version, 0)
    ]
    assert await snippet_rows(session, document.id, experience.id) == [
        (original.id, original.version, 0)
    ]

    latest = await service.get_all(user.username)
    assert [(s.id, s.content) for s in latest] == [(original.id, "Did it better")]


@pytest.mark.unit
async def test_update_rejects_unknown_fields(session, user1, experience):
    user, master = user1
    service = TextSnippetService(session)
    snippet, _ = await service.create_text_snippet(
        user.username, master.id, experience.id, bullet(1)
    )

    with pytest.raises(AppError) as exc_info:
        await service.update_text_snippet(
            user.username, master.id, experience.id, snippet.id, {"owner": "user2"}
        )
    assert exc_info.value.kind is ErrorKind.BAD_REQUEST


@pytest.mark.unit
async def test_reorder_snippets(session, user1, experience):
    user, master = user1
    service = TextSnippetService(session)
    s1, s2 = [
        (await service.create_text_snippet(user.username, master.id, experience.id, bullet(n)))[0]
        for n in (1, 2)
    ]

    reordered = await service.reorder_text_snippets(
        user.username, master.id, experience.id, [s2.id, s1.id]
    )
    assert [s.id for s in reordered] == [s2.id, s1.id]

    with pytest.raises(AppError) as exc_info:
        await service.reorder_text_snippets(user.username, master.id, experience.id, [s1.id])
    assert exc_info.value.kind is ErrorKind.BAD_REQUEST


@pytest.mark.unit
async def test_delete_version_orphans_newer_version(session, user1, experience):
    user, master = user1
    service = TextSnippetService(session)
    original, _ = await service.create_text_snippet(
        user.username, master.id, experience.id, bullet(1)
    )
    updated, _ = await service.update_text_snippet(
        user.username, master.id, experience.id, original.id, {"content": "v2"}
    )

    await service.delete_text_snippet(user.username, original.id, original.version)
    await service.delete_text_snippet(user.username, original.id, original.version)

    repository = TextSnippetRepository(session)
    assert await repository.get(original.id, original.version) is None
    survivor = await repository.get(original.id)
    assert survivor.version == updated.version
    assert survivor.parent is None


@pytest.mark.unit
async def test_detach_keeps_snippet(session, user1, experience):
    user, master = user1
    service = TextSnippetService(session)
    snippet, _ = await service.create_text_snippet(
        user.username, master.id, experience.id, bullet(1)
    )

    await service.detach_text_snippet(user.username, master.id, experience.id, snippet.id)

    assert await snippet_rows(session, master.id, experience.id) == []
    assert [s.id for s in await service.get_all(user.username)] == [snippet.id]


@pytest.mark.unit
async def test_new_snippets_never_share_an_id(session, user1, experience):
    """Ids are not reused even after the newest snippet is deleted"""
    user, master = user1
    service = TextSnippetService(session)
    first, _ = await service.create_text_snippet(user.username, master.id, experience.id, bullet(1))
    second, _ = await service.create_text_snippet(user.username, master.id, experience.id, bullet(2))

    await service.delete_text_snippet(user.username, second.id, second.version)
    third, _ = await service.create_text_snippet(user.username, master.id, experience.id, bullet(3))

    assert len({first.id, second.id, third.id}) == 3

    repository = TextSnippetRepository(session)
    other = await repository.add("user1", bullet(4))
    assert other.id not in {first.id, second.id, third.id}
    assert (await repository.get(third.id)).content == "Did thing 3"
