from sqlalchemy import Column, String, Integer, Date, ForeignKey

from app.db.base import Base


class Experience(Base):
    __tablename__ = "experiences"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner = Column(String(30), ForeignKey("users.username", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    organization = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)
