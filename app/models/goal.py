from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.core.base import Base


class Goal(Base):
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    current = Column(Float, nullable=False)
    target = Column(Float, nullable=False)
    unit = Column(String, nullable=False)
    # Обратная цель: чем меньше current, тем лучше (например, снижение веса)
    inverse = Column(Boolean, default=False, nullable=False)
    icon_name = Column(String, nullable=False)
    color = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="goals")
