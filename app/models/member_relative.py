from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from app.database.session import Base


class MemberRelative(Base):
    __tablename__ = "member_relatives"

    id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("members.id", ondelete="CASCADE"), nullable=False)
    full_name = Column(String(200), nullable=False)
    relation_type = Column(String(50))
    phone_number = Column(String(30))
    is_emergency = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)

    __table_args__ = {'extend_existing': True}

    member = relationship("Member", back_populates="relatives")
