from sqlalchemy import Column, String, Integer

from app.db.base import Base


class Section(Base):
    __tablename__ = "sections"

    id = Column(Integer, primary_key=True, autoincrement=True)
    section_name = Column(String(50), nullable=False, unique=True)
