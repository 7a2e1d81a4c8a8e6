from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.section import Section as SectionModel

SECTION_NAMES = ("Education", "Experience", "Skills")


async def seed_sections(session: AsyncSession) -> None:
    """Inserts any missing section from SECTION_NAMES"""
    result = await session.execute(select(SectionModel.section_name))
    existing = set(result.scalars().all())
    session.add_all(
        SectionModel(section_name=name) for name in SECTION_NAMES if name not in existing
    )
    await session.flush()
