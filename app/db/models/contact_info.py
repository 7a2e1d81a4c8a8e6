from sqlalchemy import Column, String, ForeignKey

from app.db.base import Base


class ContactInfo(Base):
    __tablename__ = "contact_info"

    username = Column(
        String(30), ForeignKey("users.username", ondelete="CASCADE"), primary_key=True
    )
    full_name = Column(String(255), nullable=False)
    location = Column(String(255))
    email = Column(String(255))
    phone = Column(String(50))
    linkedin = Column(String(255))
    github = Column(String(255))
