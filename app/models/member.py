from sqlalchemy import Column, Integer, String, DateTime, Date, Text, ForeignKey, func
from sqlalchemy.orm import relationship
from app.database.session import Base
from app.models.status import EntityStatus


class Member(Base):
    __tablename__ = "members"

    id = Column(Integer, primary_key=True, index=True)
    uid = Column(String(9), nullable=False, index=True)
    email = Column(String(150), nullable=False, unique=True)
    # Null until credentials are issued
    password = Column(String(255))
    phone_number = Column(String(30))
    first_name = Column(String(100))
    last_name = Column(String(100))
    full_name = Column(String(200))
    name = Column(String(200))
    employee_number = Column(String(50))
    joined_date = Column(Date)
    resigned_date = Column(Date)
    home_address = Column(Text)
    district = Column(String(100))
    sub_district = Column(String(100))
    birth_place = Column(String(100))
    birth_date = Column(Date)
    gender = Column(String(20))
    nationality = Column(String(100))
    religion = Column(String(50))
    marital_status = Column(String(50))
    profile_image = Column(String(255))
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="SET NULL"))
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False)
    status = Column(String(20), default=EntityStatus.ACTIVE.value, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = {'extend_existing': True}

    # Relationships
    team = relationship("Team", back_populates="members")
    role = relationship("Role", back_populates="members")
    administration = relationship(
        "MemberAdministration", back_populates="member", uselist=False, cascade="all, delete-orphan"
    )
    relatives = relationship(
        "MemberRelative", back_populates="member", cascade="all, delete-orphan",
        order_by="MemberRelative.id",
    )
    activity_logs = relationship(
        "ActivityLog", back_populates="member", order_by="ActivityLog.created_at.desc()"
    )
