from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from app.database.session import Base


class MemberAdministration(Base):
    __tablename__ = "member_administrations"

    id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, unique=True)
    tax_number = Column(String(50))
    tax_number_attachment = Column(String(255))
    identity_number = Column(String(50))
    card_number = Column(String(50))
    identity_number_attachment = Column(String(255))
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = {'extend_existing': True}

    member = relationship("Member", back_populates="administration")
