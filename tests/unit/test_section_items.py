"""Unit tests for the ordered section item protocol."""

from datetime import date

import pytest

from app.core.errors import AppError, ErrorKind
from app.db.repositories.relationship_repository import (
    DOCUMENT_EDUCATIONS, DOCUMENT_SECTIONS, RelationshipRepository
)
from app.domains.documents.schemas import DocumentCreate
from app.domains.documents.services import DocumentService
from app.domains.identity.schemas import UserCreate
from app.domains.identity.services import IdentityService
from app.domains.resume.section_items import (
    EDUCATION, SECTION, SectionItemService, check_exact_permutation
)
from app.domains.resume.services import SectionService

from tests.helpers import PASSWORD


def education_props(n):
    return {
        "school": f"School {n}",
        "location": f"Location {n}",
        "start_date": date(2020, 1, n),
        "degree": f"Degree {n}",
    }


async def positions(session, document_id):
    rows = await RelationshipRepository(session, DOCUMENT_EDUCATIONS).get_all(document_id)
    return [(row.education_id, row.position) for row in rows]


@pytest.mark.unit
@pytest.mark.parametrize("ordered", [[1, 2], [1, 2, 3, 4], [1, 2, 2], [1, 2, 4]])
def test_check_exact_permutation_rejects_mismatches(ordered):
    """Missing, extra, duplicate and unknown ids all fail."""
    with pytest.raises(AppError) as exc_info:
        check_exact_permutation([1, 2, 3], ordered, "education")
    assert exc_info.value.kind is ErrorKind.BAD_REQUEST
    assert exc_info.value.message == (
        "Exactly all educations need to be included when updating their positions in a document."
    )


@pytest.mark.unit
def test_check_exact_permutation_accepts_any_order():
    check_exact_permutation([1, 2, 3], [3, 1, 2], "education")
    check_exact_permutation([], [], "education")


@pytest.mark.unit
async def test_create_section_items_get_increasing_positions(session, user1):
    user, master = user1
    service = SectionItemService(session, EDUCATION)

    created = []
    for n in (1, 2, 3):
        education, relationship = await service.create_section_item(
            user.username, master.id, education_props(n)
        )
        created.append(education)
        assert relationship.document_id == master.id
        assert relationship.education_id == education.id

    assert await positions(session, master.id) == [(e.id, i) for i, e in enumerate(created)]


@pytest.mark.unit
async def test_reorder_attach_detach_scenario(session, user1):
    """E1, E2, E3 -> reorder [E3, E1, E2] -> detach E1 -> stale reorder fails."""
    user, master = user1
    service = SectionItemService(session, EDUCATION)
    e1, e2, e3 = [
        (await service.create_section_item(user.username, master.id, education_props(n)))[0]
        for n in (1, 2, 3)
    ]

    reordered = await service.reorder_items(user.username, master.id, [e3.id, e1.id, e2.id])
    assert [e.id for e in reordered] == [e3.id, e1.id, e2.id]
    assert await positions(session, master.id) == [(e3.id, 0), (e1.id, 1), (e2.id, 2)]

    await service.detach_item(user.username, master.id, e1.id)
    remaining = await service.get_all_in_document(master.id)
    assert [e.id for e in remaining] == [e3.id, e2.id]

    before = await positions(session, master.id)
    with pytest.raises(AppError) as exc_info:
        await service.reorder_items(user.username, master.id, [e3.id, e1.id, e2.id])
    assert exc_info.value.kind is ErrorKind.BAD_REQUEST
    assert await positions(session, master.id) == before


@pytest.mark.unit
async def test_create_on_non_master_document_is_forbidden(session, user1):
    user, _ = user1
    document = await DocumentService(session).create_document(
        user.username, DocumentCreate(document_name="copy")
    )
    service = SectionItemService(session, EDUCATION)

    with pytest.raises(AppError) as exc_info:
        await service.create_section_item(user.username, document.id, education_props(1))

    assert exc_info.value.kind is ErrorKind.FORBIDDEN
    assert exc_info.value.message == "Educations can only be added to the primary resume template."
    assert await service.get_all(user.username) == []


@pytest.mark.unit
async def test_attach_existing_item_to_copy(session, user1):
    user, master = user1
    service = SectionItemService(session, EDUCATION)
    e1, _ = await service.create_section_item(user.username, master.id, education_props(1))
    e2, _ = await service.create_section_item(user.username, master.id, education_props(2))
    document = await DocumentService(session).create_document(
        user.username, DocumentCreate(document_name="copy")
    )

    first = await service.attach_item(user.username, document.id, e2.id)
    second = await service.attach_item(user.username, document.id, e1.id)

    assert (first.position, second.position) == (0, 1)
    assert [e.id for e in await service.get_all_in_document(document.id)] == [e2.id, e1.id]


@pytest.mark.unit
async def test_attach_twice_is_bad_request(session, user1):
    user, master = user1
    service = SectionItemService(session, EDUCATION)
    education, _ = await service.create_section_item(user.username, master.id, education_props(1))

    with pytest.raises(AppError) as exc_info:
        await service.attach_item(user.username, master.id, education.id)

    assert exc_info.value.kind is ErrorKind.BAD_REQUEST
    assert exc_info.value.message == "Can not add education to document, as it already exists."
    assert len(await positions(session, master.id)) == 1


@pytest.mark.unit
async def test_attach_other_users_item_is_forbidden(session, user1):
    user, master = user1
    identity = IdentityService(session)
    await identity.register_user(UserCreate(username="user2", password=PASSWORD))
    other_master = await DocumentService(session).get_user_documents("user2")

    service = SectionItemService(session, EDUCATION)
    education, _ = await service.create_section_item(
        "user2", other_master[0].id, education_props(1)
    )

    with pytest.raises(AppError) as exc_info:
        await service.attach_item(user.username, master.id, education.id)
    assert exc_info.value.kind is ErrorKind.FORBIDDEN


@pytest.mark.unit
async def test_delete_item_is_idempotent(session, user1):
    user, master = user1
    service = SectionItemService(session, EDUCATION)
    education, _ = await service.create_section_item(user.username, master.id, education_props(1))

    await service.delete_item(user.username, education.id)
    await service.delete_item(user.username, education.id)
    await service.detach_item(user.username, master.id, education.id)

    assert await service.get_all(user.username) == []
    assert await positions(session, master.id) == []


@pytest.mark.unit
async def test_update_item_rejects_unknown_fields(session, user1):
    user, master = user1
    service = SectionItemService(session, EDUCATION)
    education, _ = await service.create_section_item(user.username, master.id, education_props(1))

    updated = await service.update_item(user.username, education.id, {"gpa": "3.9"})
    assert updated.gpa == "3.9"

    with pytest.raises(AppError) as exc_info:
        await service.update_item(user.username, education.id, {"owner": "user2"})
    assert exc_info.value.kind is ErrorKind.BAD_REQUEST


@pytest.mark.unit
async def test_sections_attach_and_reorder(session, user1):
    user, master = user1
    sections = await SectionService(session).get_all()
    service = SectionItemService(session, SECTION)

    for section in sections:
        await service.attach_item(user.username, master.id, section.id)

    reversed_ids = [s.id for s in reversed(sections)]
    reordered = await service.reorder_items(user.username, master.id, reversed_ids)
    assert [s.id for s in reordered] == reversed_ids

    rows = await RelationshipRepository(session, DOCUMENT_SECTIONS).get_all(master.id)
    assert [row.position for row in rows] == list(range(len(sections)))


@pytest.mark.unit
async def test_attach_unknown_section_is_not_found(session, user1):
    user, master = user1
    with pytest.raises(AppError) as exc_info:
        await SectionItemService(session, SECTION).attach_item(user.username, master.id, 999)
    assert exc_info.value.kind is ErrorKind.NOT_FOUND
