from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, UniqueConstraint

from app.db.base import Base, utc_now


class Document(Base):
    __tablename__ = "documents"
    __table_args__ = (
        UniqueConstraint("owner", "document_name", name="uq_documents_owner_name"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_name = Column(String(50), nullable=False)
    owner = Column(String(30), ForeignKey("users.username", ondelete="CASCADE"), nullable=False)
    created_on = Column(DateTime, nullable=False, default=utc_now)
    last_updated = Column(DateTime, default=utc_now)
    is_master = Column(Boolean, nullable=False, default=False)
    is_template = Column(Boolean, nullable=False, default=False)
    is_locked = Column(Boolean, nullable=False, default=False)
