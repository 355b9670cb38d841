from sqlalchemy import Column, Integer, String, DateTime, Text, JSON, func
from sqlalchemy.orm import relationship
from app.database.session import Base
from app.models.status import EntityStatus


class Role(Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    # Opaque to the API, whatever structure the admin UI stores
    authorized_menu = Column(JSON, nullable=False)
    status = Column(String(20), default=EntityStatus.ACTIVE.value, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = {'extend_existing': True}

    members = relationship("Member", back_populates="role")
