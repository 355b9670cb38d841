from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from app.database.session import Base
from app.models.status import EntityStatus


class TeamContract(Base):
    __tablename__ = "team_contracts"

    id = Column(Integer, primary_key=True, index=True)
    contract_number = Column(String(100), unique=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False)
    active_period_start = Column(DateTime)
    active_period_end = Column(DateTime, nullable=False)
    member_quota = Column(Integer, nullable=False)
    package_id = Column(Integer, ForeignKey("packages.id"), nullable=False)
    status = Column(String(20), default=EntityStatus.ACTIVE.value, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = {'extend_existing': True}

    team = relationship("Team", back_populates="contracts")
    package = relationship("Package", back_populates="contracts")
