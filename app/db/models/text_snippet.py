from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey

from app.db.base import Base, utc_now


class TextSnippetId(Base):
    """Hands out snippet ids; every version of a snippet shares one"""
    __tablename__ = "text_snippet_ids"

    id = Column(Integer, primary_key=True, autoincrement=True)


class TextSnippet(Base):
    """One version of a snippet; (id, version) identifies the row"""
    __tablename__ = "text_snippets"

    id = Column(
        Integer,
        ForeignKey("text_snippet_ids.id", ondelete="CASCADE"),
        primary_key=True,
        autoincrement=False
    )
    version = Column(DateTime, primary_key=True, default=utc_now)
    owner = Column(String(30), ForeignKey("users.username", ondelete="CASCADE"), nullable=False)
    # version of the snippet this one replaced
    parent = Column(DateTime)
    type = Column(String(50), nullable=False)
    content = Column(Text, nullable=False)
