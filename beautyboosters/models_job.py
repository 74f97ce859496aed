from datetime import datetime

from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base, generate_uuid


class Job(Base):
    __tablename__ = "jobs"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    service_type = Column(String(500), nullable=False, default="")
    location = Column(String(500), nullable=False)
    required_skills = Column(JSON, default=list, nullable=False)
    # Total price for the job, named after the legacy column
    hourly_rate = Column(Float, nullable=False, default=0)
    date_needed = Column(Date, nullable=False, index=True)
    time_needed = Column(String(5), nullable=True)  # HH:MM
    duration_hours = Column(Float, nullable=True)
    client_name = Column(String(255), nullable=True)
    client_email = Column(String(255), nullable=True)
    client_phone = Column(String(50), nullable=True)
    client_type = Column(String(20), nullable=False, default="privat")  # privat, virksomhed
    boosters_needed = Column(Integer, nullable=False, default=1)
    status = Column(String(20), default="open", nullable=False)  # open, assigned, completed, cancelled
    assigned_booster_id = Column(String(36), ForeignKey("booster_profiles.id"), nullable=True)
    created_by = Column(String(50), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    services = relationship("JobService", back_populates="job", cascade="all, delete-orphan")
    competence_tags = relationship(
        "JobCompetenceTag", back_populates="job", cascade="all, delete-orphan"
    )
    applications = relationship(
        "JobApplication", back_populates="job", cascade="all, delete-orphan"
    )
    assignments = relationship(
        "JobBoosterAssignment", back_populates="job", cascade="all, delete-orphan",
        order_by="JobBoosterAssignment.created_at",
    )
    communications = relationship(
        "JobCommunication", back_populates="job", cascade="all, delete-orphan"
    )


class JobService(Base):
    __tablename__ = "job_services"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    job_id = Column(String(36), ForeignKey("jobs.id"), nullable=False, index=True)
    service_id = Column(String(36), nullable=False)
    service_name = Column(String(255), nullable=False)
    service_price = Column(Float, nullable=False)
    people_count = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, server_default=func.now())

    job = relationship("Job", back_populates="services")


class JobCompetenceTag(Base):
    __tablename__ = "job_competence_tags"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    job_id = Column(String(36), ForeignKey("jobs.id"), nullable=False, index=True)
    competence_tag_id = Column(String(36), ForeignKey("competence_tags.id"), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    job = relationship("Job", back_populates="competence_tags")


class JobApplication(Base):
    __tablename__ = "job_applications"
    __table_args__ = (UniqueConstraint("job_id", "booster_id", name="uq_job_application"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    job_id = Column(String(36), ForeignKey("jobs.id"), nullable=False, index=True)
    booster_id = Column(String(36), ForeignKey("booster_profiles.id"), nullable=False, index=True)
    message = Column(Text, nullable=True)
    status = Column(String(20), default="pending", nullable=False)  # pending, accepted, rejected
    applied_at = Column(DateTime, server_default=func.now())

    job = relationship("Job", back_populates="applications")


class JobBoosterAssignment(Base):
    __tablename__ = "job_booster_assignments"
    __table_args__ = (UniqueConstraint("job_id", "booster_id", name="uq_job_assignment"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    job_id = Column(String(36), ForeignKey("jobs.id"), nullable=False, index=True)
    booster_id = Column(String(36), ForeignKey("booster_profiles.id"), nullable=False, index=True)
    assigned_by = Column(String(50), nullable=False, default="admin")
    created_at = Column(DateTime, default=datetime.utcnow)

    job = relationship("Job", back_populates="assignments")


class JobCommunication(Base):
    __tablename__ = "job_communications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    job_id = Column(String(36), ForeignKey("jobs.id"), nullable=False, index=True)
    sender_type = Column(String(20), nullable=False)  # admin, booster
    sender_id = Column(String(36), nullable=True)
    message_text = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    read_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    job = relationship("Job", back_populates="communications")
