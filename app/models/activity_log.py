from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, func
from sqlalchemy.orm import relationship
from app.database.session import Base


class ActivityLog(Base):
    """Member activity trail, written by other services and only read here."""
    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    action = Column(String(100), nullable=False)
    description = Column(Text)
    created_at = Column(DateTime, default=func.now(), nullable=False)

    __table_args__ = {'extend_existing': True}

    member = relationship("Member", back_populates="activity_logs")
