"""Job repository - Database operations for jobs, applications and chat"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models_job import Job, JobApplication, JobBoosterAssignment, JobCommunication


class JobRepository:
    """Repository for job database operations"""

    @staticmethod
    def get_all(db: Session, status: Optional[str] = None) -> list[Job]:
        query = db.query(Job)
        if status:
            query = query.filter(Job.status == status)
        return query.order_by(Job.date_needed, Job.time_needed).all()

    @staticmethod
    def get_open_from(db: Session, from_date: date) -> list[Job]:
        return (
            db.query(Job)
            .filter(Job.status == "open", Job.date_needed >= from_date)
            .order_by(Job.date_needed, Job.time_needed)
            .all()
        )

    @staticmethod
    def get_by_id(db: Session, job_id: str) -> Optional[Job]:
        return db.query(Job).filter(Job.id == job_id).first()

    @staticmethod
    def get_assigned_to(db: Session, booster_id: str) -> list[Job]:
        return (
            db.query(Job)
            .join(JobBoosterAssignment, JobBoosterAssignment.job_id == Job.id)
            .filter(JobBoosterAssignment.booster_id == booster_id)
            .order_by(Job.date_needed)
            .all()
        )

    @staticmethod
    def get_assignment(db: Session, job_id: str, booster_id: str) -> Optional[JobBoosterAssignment]:
        return (
            db.query(JobBoosterAssignment)
            .filter(JobBoosterAssignment.job_id == job_id, JobBoosterAssignment.booster_id == booster_id)
            .first()
        )

    @staticmethod
    def get_application(db: Session, application_id: str) -> Optional[JobApplication]:
        return db.query(JobApplication).filter(JobApplication.id == application_id).first()

    @staticmethod
    def get_application_for(db: Session, job_id: str, booster_id: str) -> Optional[JobApplication]:
        return (
            db.query(JobApplication)
            .filter(JobApplication.job_id == job_id, JobApplication.booster_id == booster_id)
            .first()
        )

    @staticmethod
    def get_messages(db: Session, job_id: str) -> list[JobCommunication]:
        return (
            db.query(JobCommunication)
            .filter(JobCommunication.job_id == job_id)
            .order_by(JobCommunication.created_at)
            .all()
        )

    @staticmethod
    def mark_messages_read(db: Session, job_id: str, from_sender_type: str) -> int:
        updated = (
            db.query(JobCommunication)
            .filter(
                JobCommunication.job_id == job_id,
                JobCommunication.sender_type == from_sender_type,
                JobCommunication.read_at.is_(None),
            )
            .update({JobCommunication.read_at: datetime.utcnow()}, synchronize_session=False)
        )
        db.commit()
        return updated
