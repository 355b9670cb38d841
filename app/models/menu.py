from sqlalchemy import Column, Integer, String, DateTime, Text, JSON, func
from app.database.session import Base
from app.models.status import EntityStatus


class Menu(Base):
    __tablename__ = "menus"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    url_menu = Column(String(255))
    icon_menu = Column(String(100))
    category = Column(String(100))
    ordering_number = Column(Integer)
    parent_menu = Column(JSON)
    status = Column(String(20), default=EntityStatus.ACTIVE.value, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = {'extend_existing': True}
