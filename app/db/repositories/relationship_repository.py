import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, insert, update, delete, func, and_
from sqlalchemy.exc import IntegrityError

from app.core.errors import bad_request, server_error
from app.db.models.education import Education as EducationModel
from app.db.models.experience import Experience as ExperienceModel
from app.db.models.relationships import (
    DocumentSection as DocumentSectionModel,
    DocumentEducation as DocumentEducationModel,
    DocumentExperience as DocumentExperienceModel,
    ExperienceTextSnippet as ExperienceTextSnippetModel,
    DocumentSkill as DocumentSkillModel,
)
from app.db.models.section import Section as SectionModel
from app.db.models.text_snippet import TextSnippet as TextSnippetModel
from app.db.repositories.base import check_fields, raise_for_integrity_error
from app.domains.resume import entities

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelationshipSpec:
    """Table metadata for one ordered relationship.

    scope_column is the column positions are unique within, item_column the
    column naming the attached item. join_columns pairs relationship columns
    with item table columns for reading the items back in order.
    """
    label: str
    model: Any
    entity: Any
    scope_column: str
    item_column: str
    item_model: Any
    join_columns: Tuple[Tuple[str, str], ...]
    # Columns besides position that may be rewritten after insert
    extra_updatable: Tuple[str, ...] = ()

    @property
    def fields(self) -> List[str]:
        return list(self.model.__table__.columns.keys())

    @property
    def updatable(self) -> Tuple[str, ...]:
        return ("position",) + self.extra_updatable


DOCUMENT_SECTIONS = RelationshipSpec(
    label="section",
    model=DocumentSectionModel,
    entity=entities.DocumentSection,
    scope_column="document_id",
    item_column="section_id",
    item_model=SectionModel,
    join_columns=(("section_id", "id"),),
)

DOCUMENT_EDUCATIONS = RelationshipSpec(
    label="education",
    model=DocumentEducationModel,
    entity=entities.DocumentEducation,
    scope_column="document_id",
    item_column="education_id",
    item_model=EducationModel,
    join_columns=(("education_id", "id"),),
)

DOCUMENT_EXPERIENCES = RelationshipSpec(
    label="experience",
    model=DocumentExperienceModel,
    entity=entities.DocumentExperience,
    scope_column="document_id",
    item_column="experience_id",
    item_model=ExperienceModel,
    join_columns=(("experience_id", "id"),),
)

EXPERIENCE_TEXT_SNIPPETS = RelationshipSpec(
    label="text snippet",
    model=ExperienceTextSnippetModel,
    entity=entities.ExperienceTextSnippet,
    scope_column="document_x_experience_id",
    item_column="text_snippet_id",
    item_model=TextSnippetModel,
    join_columns=(("text_snippet_id", "id"), ("text_snippet_version", "version")),
    extra_updatable=("text_snippet_version",),
)

DOCUMENT_SKILLS = RelationshipSpec(
    label="skill",
    model=DocumentSkillModel,
    entity=entities.DocumentSkill,
    scope_column="document_id",
    item_column="text_snippet_id",
    item_model=TextSnippetModel,
    join_columns=(("text_snippet_id", "id"), ("text_snippet_version", "version")),
    extra_updatable=("text_snippet_version",),
)


class RelationshipRepository:
    """Ordered rows linking items to a scope, driven by a RelationshipSpec"""

    def __init__(self, session: AsyncSession, spec: RelationshipSpec):
        self.session = session
        self.spec = spec
        self.model = spec.model
        self.scope = getattr(spec.model, spec.scope_column)
        self.item = getattr(spec.model, spec.item_column)

    async def add(self, scope_id: int, item_id: int, position: int, **extra: Any):
        """Inserts a relationship row at the given position"""
        if position < 0:
            raise bad_request("Position can not be less than 0.")

        values = {self.spec.scope_column: scope_id, self.spec.item_column: item_id}
        values.update(extra, position=position)
        try:
            await self.session.execute(insert(self.model).values(**values))
        except IntegrityError as err:
            raise_for_integrity_error(
                err,
                unique_message=(
                    f"Can not add {self.spec.label} to document, as it already exists."
                ),
                foreign_key_message=f"Document or {self.spec.label} not found.",
            )
        return await self.get(scope_id, item_id)

    async def get(self, scope_id: int, item_id: int):
        result = await self.session.execute(
            select(self.model).where(self.scope == scope_id, self.item == item_id)
            .execution_options(populate_existing=True)
        )
        db_row = result.scalar_one_or_none()
        return self._to_domain(db_row) if db_row else None

    async def get_all(self, scope_id: int) -> list:
        """Rows of a scope ordered by position"""
        result = await self.session.execute(
            select(self.model)
            .where(self.scope == scope_id)
            .order_by(self.model.position)
            .execution_options(populate_existing=True)
        )
        return [self._to_domain(row) for row in result.scalars().all()]

    async def get_item_rows(self, scope_id: int) -> Sequence[Any]:
        """Item table rows attached to a scope, in position order"""
        item_model = self.spec.item_model
        conditions = [
            getattr(self.model, rel_column) == getattr(item_model, item_column)
            for rel_column, item_column in self.spec.join_columns
        ]
        result = await self.session.execute(
            select(item_model)
            .join(self.model, and_(*conditions))
            .where(self.scope == scope_id)
            .order_by(self.model.position)
            .execution_options(populate_existing=True)
        )
        return result.scalars().all()

    async def last_position(self, scope_id: int) -> int:
        """Highest position in a scope, -1 when it is empty"""
        result = await self.session.execute(
            select(func.max(self.model.position)).where(self.scope == scope_id)
        )
        last = result.scalar_one_or_none()
        return -1 if last is None else last

    async def update_position(self, scope_id: int, item_id: int, position: int):
        """Moves one row; the row is expected to exist"""
        return await self.update(scope_id, item_id, {"position": position})

    async def update(self, scope_id: int, item_id: int, props: Dict[str, Any]):
        """Rewrites the updatable columns of one row"""
        check_fields(props, self.spec.updatable)
        if props.get("position", 0) < 0:
            raise bad_request("Position can not be less than 0.")

        try:
            result = await self.session.execute(
                update(self.model)
                .where(self.scope == scope_id, self.item == item_id)
                .values(**props)
            )
        except IntegrityError as err:
            raise_for_integrity_error(
                err,
                unique_message=f"Position is already taken by another {self.spec.label}.",
                foreign_key_message=f"{self.spec.label.capitalize()} not found.",
            )

        if result.rowcount == 0:
            logger.error(
                "%s relationship (%s, %s) not found while updating",
                self.spec.label, scope_id, item_id
            )
            raise server_error(
                f"Relationship between {self.spec.scope_column} {scope_id} and "
                f"{self.spec.label} {item_id} could not be updated."
            )
        return await self.get(scope_id, item_id)

    async def update_all_positions(self, scope_id: int, ordered_item_ids: List[int]) -> None:
        """Sets every row's position to the index of its item in the list.

        Rows are first moved above the current maximum so no intermediate
        state collides with the unique position constraint.
        """
        offset = await self.last_position(scope_id) + 1
        await self.session.execute(
            update(self.model)
            .where(self.scope == scope_id)
            .values(position=self.model.position + offset)
            .execution_options(synchronize_session=False)
        )
        for position, item_id in enumerate(ordered_item_ids):
            await self.session.execute(
                update(self.model)
                .where(self.scope == scope_id, self.item == item_id)
                .values(position=position)
                .execution_options(synchronize_session=False)
            )

    async def delete(self, scope_id: int, item_id: int) -> int:
        """Removes one row; a missing row is not an error"""
        result = await self.session.execute(
            delete(self.model).where(self.scope == scope_id, self.item == item_id)
        )
        return result.rowcount

    def _to_domain(self, db_row: Any):
        return self.spec.entity(**{field: getattr(db_row, field) for field in self.spec.fields})
