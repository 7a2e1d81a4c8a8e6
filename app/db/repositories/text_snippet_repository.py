import logging
from datetime import datetime, timedelta
from typing import Optional, List, Dict, Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func
from sqlalchemy.exc import IntegrityError

from app.db.base import utc_now
from app.db.models.text_snippet import (
    TextSnippet as TextSnippetModel, TextSnippetId as TextSnippetIdModel
)
from app.db.repositories.base import check_fields, raise_for_integrity_error
from app.db.repositories.relationship_repository import (
    DOCUMENT_SKILLS, EXPERIENCE_TEXT_SNIPPETS, RelationshipRepository
)
from app.domains.resume.entities import TextSnippet

logger = logging.getLogger(__name__)


class TextSnippetRepository:
    """Append-only snippet versions keyed by (id, version)"""

    UPDATABLE_FIELDS = ("type", "content")

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, owner: str, props: Dict[str, Any]) -> TextSnippet:
        """Inserts the first version of a new snippet"""
        check_fields(props, self.UPDATABLE_FIELDS)
        # every new snippet takes a fresh id from text_snippet_ids
        snippet_id = TextSnippetIdModel()
        self.session.add(snippet_id)
        await self.session.flush()

        return await self._insert(
            TextSnippetModel(id=snippet_id.id, version=utc_now(), owner=owner, parent=None, **props)
        )

    async def add_version(self, snippet: TextSnippet, props: Dict[str, Any]) -> TextSnippet:
        """Inserts a newer version of snippet with props applied on top"""
        check_fields(props, self.UPDATABLE_FIELDS)
        values = {"type": snippet.type, "content": snippet.content}
        values.update(props)

        version = utc_now()
        if version <= snippet.version:
            version = snippet.version + timedelta(microseconds=1)

        return await self._insert(
            TextSnippetModel(
                id=snippet.id,
                version=version,
                owner=snippet.owner,
                parent=snippet.version,
                **values
            )
        )

    async def _insert(self, db_snippet: TextSnippetModel) -> TextSnippet:
        self.session.add(db_snippet)
        try:
            await self.session.flush()
        except IntegrityError as err:
            raise_for_integrity_error(
                err, foreign_key_message=f'User "{db_snippet.owner}" does not exist.'
            )
        return self._to_domain(db_snippet)

    async def get(self, snippet_id: int, version: Optional[datetime] = None) -> Optional[TextSnippet]:
        """A specific version, or the newest one when version is None"""
        query = (
            select(TextSnippetModel)
            .where(TextSnippetModel.id == snippet_id)
            .execution_options(populate_existing=True)
        )
        if version is None:
            query = query.order_by(TextSnippetModel.version.desc()).limit(1)
        else:
            query = query.where(TextSnippetModel.version == version)

        result = await self.session.execute(query)
        db_snippet = result.scalar_one_or_none()
        return self._to_domain(db_snippet) if db_snippet else None

    async def get_all(self, owner: str) -> List[TextSnippet]:
        """Newest version of every snippet of a user"""
        latest = (
            select(TextSnippetModel.id, func.max(TextSnippetModel.version).label("version"))
            .where(TextSnippetModel.owner == owner)
            .group_by(TextSnippetModel.id)
            .subquery()
        )
        result = await self.session.execute(
            select(TextSnippetModel)
            .join(
                latest,
                (TextSnippetModel.id == latest.c.id)
                & (TextSnippetModel.version == latest.c.version)
            )
            .order_by(TextSnippetModel.id)
        )
        return [self._to_domain(row) for row in result.scalars().all()]

    async def get_all_in_experience(self, document_x_experience_id: int) -> List[TextSnippet]:
        """Snippets under one document experience, in position order"""
        rows = await RelationshipRepository(
            self.session, EXPERIENCE_TEXT_SNIPPETS
        ).get_item_rows(document_x_experience_id)
        return [self._to_domain(row) for row in rows]

    async def get_all_in_document(self, document_id: int) -> List[TextSnippet]:
        """Skills of a document, in position order"""
        rows = await RelationshipRepository(self.session, DOCUMENT_SKILLS).get_item_rows(document_id)
        return [self._to_domain(row) for row in rows]

    async def delete(self, snippet_id: int, version: datetime) -> int:
        """Deletes one version; a newer version survives with no parent"""
        await self.session.execute(
            update(TextSnippetModel)
            .where(TextSnippetModel.id == snippet_id, TextSnippetModel.parent == version)
            .values(parent=None)
        )
        result = await self.session.execute(
            delete(TextSnippetModel).where(
                TextSnippetModel.id == snippet_id, TextSnippetModel.version == version
            )
        )
        logger.info("Deleted %s row(s) of text snippet %s", result.rowcount, snippet_id)
        return result.rowcount

    def _to_domain(self, db_snippet: TextSnippetModel) -> TextSnippet:
        return TextSnippet(
            id=db_snippet.id,
            version=db_snippet.version,
            owner=db_snippet.owner,
            parent=db_snippet.parent,
            type=db_snippet.type,
            content=db_snippet.content
        )
