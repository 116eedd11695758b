from sqlalchemy import Column, Integer, Float, Date, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.base import Base


class Activity(Base):
    __tablename__ = "activities"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_activities_user_date"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    steps = Column(Integer, default=0, nullable=False)
    calories = Column(Integer, default=0, nullable=False)
    distance = Column(Float, default=0, nullable=False)
    active_time = Column(Integer, default=0, nullable=False)

    user = relationship("User", back_populates="activities")
