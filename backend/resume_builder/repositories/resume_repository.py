"""
Résumé Repository

The only component that talks to storage for résumés. Each write runs in one
session transaction: either every row of the aggregate lands, or none do.
Updates are a full replace of the child rows, guarded by the résumé's version.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session, selectinload

from resume_builder.core.database import Database, as_utc
from resume_builder.core.errors import ResumeNotFoundError, StaleResumeError
from resume_builder.domain.resume import Resume
from resume_builder.models.resume import (
    EducationRecord,
    ExperienceRecord,
    LanguageRecord,
    ProjectRecord,
    ProjectTechnologyRecord,
    ResumeRecord,
    SkillRecord,
)

logger = logging.getLogger(__name__)

_EAGER = (
    selectinload(ResumeRecord.education),
    selectinload(ResumeRecord.experience),
    selectinload(ResumeRecord.skills),
    selectinload(ResumeRecord.projects).selectinload(ProjectRecord.technologies),
    selectinload(ResumeRecord.languages),
)


# ---------------------------------------------------------------------------
# Mapping
# ---------------------------------------------------------------------------

def _scalar_fields(resume: Resume) -> dict:
    contact = resume.get_props()["contact_information"]
    return {
        "title": resume.title,
        "summary": resume.summary,
        "status": resume.status,
        "contact_information": contact,
        "template_id": resume.template_id,
        "updated_at": resume.updated_at,
    }


def _child_records(resume: Resume, resume_id: int) -> list:
    """Fresh rows for every child of the aggregate, tagged with ``resume_id``."""
    records: list = []
    for order, edu in enumerate(resume.education):
        records.append(EducationRecord(
            resume_id=resume_id,
            item_id=edu.id,
            sort_order=order,
            institution=edu.institution,
            degree=edu.degree,
            field_of_study=edu.field_of_study,
            start_date=edu.start_date,
            end_date=edu.end_date,
            description=edu.description,
        ))
    for order, exp in enumerate(resume.experience):
        records.append(ExperienceRecord(
            resume_id=resume_id,
            item_id=exp.id,
            sort_order=order,
            company=exp.company,
            position=exp.position,
            location=exp.location,
            start_date=exp.start_date,
            end_date=exp.end_date,
            description=exp.description,
            achievements=list(exp.achievements),
        ))
    for order, skill in enumerate(resume.skills):
        records.append(SkillRecord(
            resume_id=resume_id,
            item_id=skill.id,
            sort_order=order,
            name=skill.name,
            level=skill.level,
            category=skill.category,
        ))
    for order, project in enumerate(resume.projects):
        # technologies ride along through the relationship and get the project's id on flush
        records.append(ProjectRecord(
            resume_id=resume_id,
            item_id=project.id,
            sort_order=order,
            name=project.name,
            description=project.description,
            url=project.url,
            technologies=[
                ProjectTechnologyRecord(sort_order=tech_order, technology=tech)
                for tech_order, tech in enumerate(project.technologies)
            ],
        ))
    for order, lang in enumerate(resume.languages):
        records.append(LanguageRecord(
            resume_id=resume_id,
            item_id=lang.id,
            sort_order=order,
            name=lang.name,
            proficiency=lang.proficiency,
        ))
    return records


def _to_domain(record: ResumeRecord) -> Resume:
    return Resume.create({
        "id": record.id,
        "version": record.version,
        "user_id": record.user_id,
        "title": record.title,
        "summary": record.summary,
        "status": record.status,
        "contact_information": record.contact_information,
        "template_id": record.template_id,
        "education": [
            {
                "id": e.item_id,
                "institution": e.institution,
                "degree": e.degree,
                "field_of_study": e.field_of_study,
                "start_date": e.start_date,
                "end_date": e.end_date,
                "description": e.description,
            }
            for e in record.education
        ],
        "experience": [
            {
                "id": e.item_id,
                "company": e.company,
                "position": e.position,
                "location": e.location,
                "start_date": e.start_date,
                "end_date": e.end_date,
                "description": e.description,
                "achievements": list(e.achievements or []),
            }
            for e in record.experience
        ],
        "skills": [
            {"id": s.item_id, "name": s.name, "level": s.level, "category": s.category}
            for s in record.skills
        ],
        "projects": [
            {
                "id": p.item_id,
                "name": p.name,
                "description": p.description,
                "url": p.url,
                "technologies": [t.technology for t in p.technologies],
            }
            for p in record.projects
        ],
        "languages": [
            {"id": lang.item_id, "name": lang.name, "proficiency": lang.proficiency}
            for lang in record.languages
        ],
        "created_at": as_utc(record.created_at),
        "updated_at": as_utc(record.updated_at),
    })


def _delete_children(db: Session, resume_id: int) -> None:
    db.execute(delete(EducationRecord).where(EducationRecord.resume_id == resume_id))
    db.execute(delete(ExperienceRecord).where(ExperienceRecord.resume_id == resume_id))
    db.execute(delete(SkillRecord).where(SkillRecord.resume_id == resume_id))
    db.execute(delete(LanguageRecord).where(LanguageRecord.resume_id == resume_id))

    project_ids = db.scalars(select(ProjectRecord.id).where(ProjectRecord.resume_id == resume_id)).all()
    if project_ids:
        db.execute(delete(ProjectTechnologyRecord).where(ProjectTechnologyRecord.project_id.in_(project_ids)))
    db.execute(delete(ProjectRecord).where(ProjectRecord.resume_id == resume_id))


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

class ResumeRepository:
    """Résumé data access layer"""

    def __init__(self, database: Database):
        self.database = database

    def find_by_id(self, resume_id: int) -> Optional[Resume]:
        """Load a résumé with all children. No owner filtering."""
        with self.database.session() as db:
            record = db.scalars(
                select(ResumeRecord).where(ResumeRecord.id == resume_id).options(*_EAGER)
            ).first()
            return _to_domain(record) if record else None

    def find_by_user_id(self, user_id: int) -> List[Resume]:
        with self.database.session() as db:
            records = db.scalars(
                select(ResumeRecord)
                .where(ResumeRecord.user_id == user_id)
                .order_by(ResumeRecord.id)
                .options(*_EAGER)
            ).all()
            return [_to_domain(r) for r in records]

    def create(self, resume: Resume) -> int:
        """Insert the résumé and every child row atomically; binds the new id onto ``resume``."""
        with self.database.session() as db:
            try:
                record = ResumeRecord(
                    user_id=resume.user_id,
                    version=1,
                    created_at=resume.created_at,
                    **_scalar_fields(resume),
                )
                if resume.id is not None:
                    record.id = resume.id
                db.add(record)
                db.flush()

                db.add_all(_child_records(resume, record.id))
                db.commit()
            except Exception:
                db.rollback()
                raise

            resume.mark_persisted(record.id, record.version)
            logger.info("Created resume %s for user %s", record.id, resume.user_id)
            return record.id

    def update(self, resume: Resume) -> None:
        """
        Overwrite scalars and replace every child row of an existing résumé.

        Raises:
            ResumeNotFoundError: no résumé row with ``resume.id``.
            StaleResumeError: the stored version moved past ``resume.version``.
        """
        if resume.id is None:
            raise ResumeNotFoundError(None)

        with self.database.session() as db:
            try:
                current_version = db.scalar(select(ResumeRecord.version).where(ResumeRecord.id == resume.id))
                if current_version is None:
                    raise ResumeNotFoundError(resume.id)

                expected = resume.version if resume.version is not None else current_version
                result = db.execute(
                    update(ResumeRecord)
                    .where(ResumeRecord.id == resume.id, ResumeRecord.version == expected)
                    .values(version=expected + 1, **_scalar_fields(resume))
                )
                if result.rowcount == 0:
                    raise StaleResumeError(resume.id, expected)

                _delete_children(db, resume.id)
                db.add_all(_child_records(resume, resume.id))
                db.commit()
            except Exception:
                db.rollback()
                raise

        resume.mark_persisted(resume.id, expected + 1)
        logger.info("Updated resume %s to version %s", resume.id, expected + 1)

    def delete(self, resume_id: int) -> bool:
        """Delete the résumé row; children go with it via ON DELETE CASCADE."""
        with self.database.session() as db:
            try:
                result = db.execute(delete(ResumeRecord).where(ResumeRecord.id == resume_id))
                db.commit()
            except Exception:
                db.rollback()
                raise
        deleted = result.rowcount > 0
        if deleted:
            logger.info("Deleted resume %s", resume_id)
        return deleted
