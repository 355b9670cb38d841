from sqlalchemy import Column, Integer, String, DateTime, Text, func
from sqlalchemy.orm import relationship
from app.database.session import Base
from app.models.status import EntityStatus


class Team(Base):
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, index=True)
    team_name = Column(String(150), nullable=False, unique=True)
    company_name = Column(String(150))
    hq_address = Column(Text)
    manager_first_name = Column(String(100))
    manager_last_name = Column(String(100))
    manager_full_name = Column(String(200))
    manager_email = Column(String(150))
    manager_phone = Column(String(30))
    image_url = Column(String(255))
    status = Column(String(20), default=EntityStatus.ACTIVE.value, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = {'extend_existing': True}

    # Relationships
    members = relationship("Member", back_populates="team")
    contracts = relationship("TeamContract", back_populates="team")
