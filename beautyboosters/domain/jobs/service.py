"""Job service - admin job management, booster applications and job chat"""

import logging
import math
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import PLATFORM_SHARE, VAT_SHARE_OF_GROSS
from ...models import ROLE_ADMIN, BoosterProfile, CompetenceTag, Service, User
from ...models_job import (
    Job,
    JobApplication,
    JobBoosterAssignment,
    JobCommunication,
    JobCompetenceTag,
    JobService,
)
from ..catalog.repository import ServiceRepository
from ..notifications.service import notify, notify_admins
from .repository import JobRepository
from .schemas import JobCreate, JobEarnings, JobMessageCreate, JobResponse, JobServiceResponse, JobUpdate

logger = logging.getLogger(__name__)


def price_job(lines: list[tuple[Service, int]]) -> tuple[float, float, str]:
    """Total price, duration in whole hours and service_type for catalog lines"""
    total = sum(service.price * people for service, people in lines)
    minutes = sum(service.duration_minutes * people for service, people in lines)
    service_type = ", ".join(service.name for service, _ in lines)
    return float(total), float(math.ceil(minutes / 60)), service_type


def job_earnings(total: float, client_type: str, boosters_needed: int = 1) -> JobEarnings:
    """
    Split a job price between platform and boosters.

    Private prices include VAT, which comes off first; business prices
    are quoted without it.
    """
    vat = round(total * VAT_SHARE_OF_GROSS, 2) if client_type == "privat" else 0.0
    net = round(total - vat, 2)
    platform = round(net * PLATFORM_SHARE, 2)
    booster = round(net - platform, 2)
    return JobEarnings(
        gross=round(total, 2),
        vat=vat,
        net=net,
        platform_share=platform,
        booster_share=booster,
        per_booster=round(booster / max(boosters_needed, 1), 2),
    )


def skills_match(required: list[str], specialties: list[str]) -> bool:
    """No required skills, or at least one in common"""
    if not required:
        return True
    have = {s.strip().lower() for s in specialties or []}
    return any(skill.strip().lower() in have for skill in required)


def to_job_response(job: Job) -> JobResponse:
    return JobResponse(
        id=job.id,
        title=job.title,
        description=job.description,
        service_type=job.service_type or "",
        location=job.location,
        required_skills=job.required_skills or [],
        hourly_rate=job.hourly_rate or 0,
        date_needed=job.date_needed,
        time_needed=job.time_needed,
        duration_hours=job.duration_hours,
        client_name=job.client_name,
        client_email=job.client_email,
        client_phone=job.client_phone,
        client_type=job.client_type,
        boosters_needed=job.boosters_needed,
        status=job.status,
        assigned_booster_id=job.assigned_booster_id,
        assigned_booster_ids=[a.booster_id for a in job.assignments],
        services=[JobServiceResponse.model_validate(s) for s in job.services],
        competence_tag_ids=[t.competence_tag_id for t in job.competence_tags],
        earnings=job_earnings(job.hourly_rate or 0, job.client_type, job.boosters_needed),
        created_at=job.created_at,
    )


class JobManagementService:
    """Service layer for job business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = JobRepository()

    def get_job(self, job_id: str) -> Job:
        job = self.repo.get_by_id(self.db, job_id)
        if not job:
            raise HTTPException(status_code=404, detail="Job not found")
        return job

    def list_jobs(self, status: Optional[str] = None) -> list[Job]:
        return self.repo.get_all(self.db, status)

    def _sync_status(self, job: Job) -> None:
        if job.status not in ("open", "assigned"):
            return
        job.status = "assigned" if len(job.assignments) >= job.boosters_needed else "open"

    # ------------------------------------------------------------------
    # Admin CRUD
    # ------------------------------------------------------------------

    def create_job(self, data: JobCreate, admin: User) -> Job:
        service_rows = []
        if data.services:
            catalog = ServiceRepository.get_services(self.db, [line.service_id for line in data.services])
            for line in data.services:
                service = catalog.get(line.service_id)
                if not service:
                    raise HTTPException(status_code=404, detail=f"Service {line.service_id} not found")
                service_rows.append((service, line.people_count))

        tags = []
        if data.competence_tag_ids:
            tags = self.db.query(CompetenceTag).filter(CompetenceTag.id.in_(data.competence_tag_ids)).all()
            if len(tags) != len(set(data.competence_tag_ids)):
                raise HTTPException(status_code=404, detail="Unknown competence tag")

        if service_rows:
            total, duration, service_type = price_job(service_rows)
        else:
            total, duration, service_type = data.hourly_rate, data.duration_hours, data.service_type or data.title

        job = Job(
            title=data.title,
            description=data.description,
            service_type=service_type,
            location=data.location,
            required_skills=data.required_skills,
            hourly_rate=total,
            date_needed=data.date_needed,
            time_needed=data.time_needed,
            duration_hours=duration,
            client_name=data.client_name,
            client_email=data.client_email,
            client_phone=data.client_phone,
            client_type=data.client_type,
            boosters_needed=data.boosters_needed,
            status="open",
            created_by=admin.id,
        )
        for service, people in service_rows:
            job.services.append(
                JobService(
                    service_id=service.id,
                    service_name=service.name,
                    service_price=service.price,
                    people_count=people,
                )
            )
        for tag in tags:
            job.competence_tags.append(JobCompetenceTag(competence_tag_id=tag.id))

        try:
            self.db.add(job)
            self.db.flush()
            notified = self._notify_boosters(job, data.notify_booster_ids)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(job)
        logger.info(f"🆕 Job {job.id} created ({job.title}), {notified} boosters notified")
        return job

    def _notify_boosters(self, job: Job, booster_ids: list[str]) -> int:
        if not booster_ids:
            return 0
        boosters = self.db.query(BoosterProfile).filter(BoosterProfile.id.in_(booster_ids)).all()
        for booster in boosters:
            notify(
                self.db,
                booster.id,
                "Nyt job tilgængeligt",
                f"{job.title} den {job.date_needed} i {job.location}.",
                "new_job",
                job_id=job.id,
            )
        return len(boosters)

    def update_job(self, job_id: str, data: JobUpdate) -> Job:
        job = self.get_job(job_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(job, key, value)
        if data.status is None:
            self._sync_status(job)
        self.db.commit()
        self.db.refresh(job)
        return job

    def delete_job(self, job_id: str) -> dict:
        job = self.get_job(job_id)
        self.db.delete(job)
        self.db.commit()
        logger.info(f"🗑️ Job {job_id} deleted")
        return {"message": "Job deleted"}

    # ------------------------------------------------------------------
    # Assignment
    # ------------------------------------------------------------------

    def _add_assignment(self, job: Job, booster_id: str, assigned_by: str) -> None:
        job.assignments.append(JobBoosterAssignment(booster_id=booster_id, assigned_by=assigned_by))
        if not job.assigned_booster_id:
            job.assigned_booster_id = booster_id
        notify(
            self.db,
            booster_id,
            "Job tildelt!",
            f"Du er blevet tildelt jobbet: {job.title}",
            "job_assignment",
            job_id=job.id,
        )

    def assign_boosters(self, job_id: str, booster_ids: list[str]) -> Job:
        """Add boosters up to the number the job needs"""
        job = self.get_job(job_id)
        if job.status in ("completed", "cancelled"):
            raise HTTPException(status_code=400, detail=f"Cannot assign boosters to a {job.status} job")

        known = {
            b.id for b in self.db.query(BoosterProfile).filter(BoosterProfile.id.in_(booster_ids)).all()
        }
        missing = [b for b in booster_ids if b not in known]
        if missing:
            raise HTTPException(status_code=404, detail=f"Booster {missing[0]} not found")

        already = {a.booster_id for a in job.assignments}
        new_ids = []
        for booster_id in booster_ids:
            if booster_id not in already and booster_id not in new_ids:
                new_ids.append(booster_id)

        remaining = job.boosters_needed - len(already)
        if new_ids and remaining <= 0:
            raise HTTPException(status_code=400, detail="Job already has all the boosters it needs")
        new_ids = new_ids[:remaining]

        for booster_id in new_ids:
            self._add_assignment(job, booster_id, "admin")
            application = self.repo.get_application_for(self.db, job.id, booster_id)
            if application and application.status == "pending":
                application.status = "accepted"

        self._sync_status(job)
        self.db.commit()
        self.db.refresh(job)
        logger.info(f"👥 Job {job.id}: assigned {len(new_ids)} boosters ({len(job.assignments)}/{job.boosters_needed})")
        return job

    def remove_assignment(self, job_id: str, booster_id: str) -> Job:
        job = self.get_job(job_id)
        assignment = self.repo.get_assignment(self.db, job.id, booster_id)
        if not assignment:
            raise HTTPException(status_code=404, detail="Booster is not assigned to this job")

        job.assignments.remove(assignment)
        if job.assigned_booster_id == booster_id:
            job.assigned_booster_id = job.assignments[0].booster_id if job.assignments else None
        if job.status == "assigned":
            job.status = "open"
        self.db.commit()
        self.db.refresh(job)
        logger.info(f"➖ Booster {booster_id} removed from job {job.id}")
        return job

    # ------------------------------------------------------------------
    # Booster applications
    # ------------------------------------------------------------------

    def job_board(self, booster: BoosterProfile, matching_only: bool = False) -> list[Job]:
        jobs = self.repo.get_open_from(self.db, date.today())
        if matching_only:
            jobs = [j for j in jobs if skills_match(j.required_skills or [], booster.specialties or [])]
        return jobs

    def assigned_jobs(self, booster: BoosterProfile) -> list[Job]:
        return self.repo.get_assigned_to(self.db, booster.id)

    def apply(self, job_id: str, booster: BoosterProfile, message: Optional[str] = None) -> dict:
        """
        Apply for an open job.

        Boosters whose skills fit are accepted on the spot while the job
        still has room; everyone else waits for an admin.
        """
        job = self.get_job(job_id)
        if job.status != "open":
            raise HTTPException(status_code=400, detail="This job is no longer available")
        if self.repo.get_application_for(self.db, job.id, booster.id):
            raise HTTPException(status_code=409, detail="You have already applied for this job")
        if self.repo.get_assignment(self.db, job.id, booster.id):
            raise HTTPException(status_code=400, detail="You are already assigned to this job")

        auto_assign = skills_match(job.required_skills or [], booster.specialties or []) and (
            len(job.assignments) < job.boosters_needed
        )
        application = JobApplication(
            job_id=job.id,
            booster_id=booster.id,
            message=message or "Jeg er interesseret i dette job",
            status="accepted" if auto_assign else "pending",
        )
        self.db.add(application)
        if auto_assign:
            self._add_assignment(job, booster.id, "auto")
            self._sync_status(job)
        else:
            notify_admins(
                self.db,
                "Ny jobansøgning",
                f"{booster.name} har ansøgt om {job.title}.",
                "job_application",
                job_id=job.id,
            )
        self.db.commit()
        self.db.refresh(application)

        logger.info(f"🎯 Booster {booster.id} applied for job {job.id}: {application.status}")
        return {
            "application": application,
            "auto_assigned": auto_assign,
            "message": "You have been assigned to the job"
            if auto_assign
            else "Your application has been sent for approval",
        }

    def list_applications(self, job_id: str) -> list[JobApplication]:
        return list(self.get_job(job_id).applications)

    def decide_application(self, application_id: str, accept: bool) -> JobApplication:
        application = self.repo.get_application(self.db, application_id)
        if not application:
            raise HTTPException(status_code=404, detail="Application not found")
        if application.status != "pending":
            raise HTTPException(status_code=400, detail="Application has already been processed")

        job = application.job
        if accept:
            if len(job.assignments) >= job.boosters_needed:
                raise HTTPException(status_code=400, detail="Job already has all the boosters it needs")
            application.status = "accepted"
            self._add_assignment(job, application.booster_id, "application")
            self._sync_status(job)
        else:
            application.status = "rejected"
            notify(
                self.db,
                application.booster_id,
                "Jobansøgning afvist",
                f"Din ansøgning til {job.title} blev ikke godkendt.",
                "job_application_rejected",
                job_id=job.id,
            )
        self.db.commit()
        self.db.refresh(application)
        return application

    # ------------------------------------------------------------------
    # Job chat
    # ------------------------------------------------------------------

    def _chat_job(self, job_id: str, user: User) -> Job:
        job = self.get_job(job_id)
        if user.has_role(ROLE_ADMIN):
            return job
        if self.repo.get_assignment(self.db, job.id, user.id) or self.repo.get_application_for(
            self.db, job.id, user.id
        ):
            return job
        raise HTTPException(status_code=403, detail="You are not part of this job")

    def list_messages(self, job_id: str, user: User) -> list[JobCommunication]:
        job = self._chat_job(job_id, user)
        return self.repo.get_messages(self.db, job.id)

    def post_message(self, job_id: str, user: User, data: JobMessageCreate) -> JobCommunication:
        job = self._chat_job(job_id, user)
        sender_type = "admin" if user.has_role(ROLE_ADMIN) else "booster"
        message = JobCommunication(
            job_id=job.id,
            sender_type=sender_type,
            sender_id=user.id,
            message_text=data.message_text.strip() if data.message_text else None,
            image_url=data.image_url,
        )
        self.db.add(message)

        preview = (message.message_text or "Billede")[:100]
        if sender_type == "admin":
            for assignment in job.assignments:
                notify(self.db, assignment.booster_id, f"Ny besked: {job.title}", preview, "job_message", job.id)
        else:
            notify_admins(self.db, f"Ny besked: {job.title}", preview, "job_message", job.id)

        self.db.commit()
        self.db.refresh(message)
        return message

    def mark_read(self, job_id: str, user: User) -> dict:
        """Mark the other side's messages as read"""
        job = self._chat_job(job_id, user)
        other_side = "booster" if user.has_role(ROLE_ADMIN) else "admin"
        updated = self.repo.mark_messages_read(self.db, job.id, other_side)
        return {"updated": updated}
