from sqlalchemy import Column, String

from app.db.base import Base


class User(Base):
    __tablename__ = "users"

    username = Column(String(30), primary_key=True)
    password = Column(String(255), nullable=False)
