from sqlalchemy import Column, Integer, String, DateTime, Text, JSON, func
from sqlalchemy.orm import relationship
from app.database.session import Base
from app.models.status import EntityStatus


class Package(Base):
    __tablename__ = "packages"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False)
    description = Column(Text)
    image_url = Column(String(255))
    # Ordered list of menu ids
    selected_menu = Column(JSON, default=list)
    status = Column(String(20), default=EntityStatus.ACTIVE.value, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = {'extend_existing': True}

    contracts = relationship("TeamContract", back_populates="package")
