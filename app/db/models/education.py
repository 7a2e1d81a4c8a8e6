from sqlalchemy import Column, String, Integer, Date, ForeignKey

from app.db.base import Base


class Education(Base):
    __tablename__ = "educations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner = Column(String(30), ForeignKey("users.username", ondelete="CASCADE"), nullable=False)
    school = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)
    degree = Column(String(255), nullable=False)
    gpa = Column(String(50))
    awards_and_honors = Column(String(500))
    activities = Column(String(500))
