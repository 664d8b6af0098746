"""
Resume use cases: create, fetch one (owner only), list a user's résumés.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any, Optional

from resume_builder.domain.resume import Resume, ResumeStatus
from resume_builder.repositories.resume_repository import ResumeRepository
from resume_builder.schemas.resume import CreateResumeRequest, SkillInput


def _iso(value: date | datetime | None) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class ResumeSummary:
    id: int
    title: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_resume(cls, resume: Resume) -> "ResumeSummary":
        return cls(id=resume.id, title=resume.title, created_at=resume.created_at, updated_at=resume.updated_at)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


def resume_detail(resume: Resume) -> dict[str, Any]:
    """Full JSON view of a résumé."""
    contact = resume.contact_information
    return {
        "id": resume.id,
        "title": resume.title,
        "summary": resume.summary,
        "status": resume.status.value,
        "templateId": resume.template_id,
        "personalInfo": asdict(contact) if contact else None,
        "education": [
            {
                "id": e.id,
                "institution": e.institution,
                "degree": e.degree,
                "fieldOfStudy": e.field_of_study,
                "startDate": _iso(e.start_date),
                "endDate": _iso(e.end_date),
                "description": e.description,
            }
            for e in resume.education
        ],
        "experience": [
            {
                "id": e.id,
                "company": e.company,
                "position": e.position,
                "location": e.location,
                "startDate": _iso(e.start_date),
                "endDate": _iso(e.end_date),
                "description": e.description,
                "achievements": e.achievements,
            }
            for e in resume.experience
        ],
        "skills": [asdict(s) for s in resume.skills],
        "projects": [asdict(p) for p in resume.projects],
        "languages": [asdict(lang) for lang in resume.languages],
        "createdAt": _iso(resume.created_at),
        "updatedAt": _iso(resume.updated_at),
    }


class ResumeService:
    """Thin orchestration between request input, the aggregate and the repository."""

    def __init__(self, repository: ResumeRepository):
        self.repository = repository

    def create_resume(self, user_id: int, request: CreateResumeRequest) -> ResumeSummary:
        info = request.personal_info
        props: dict[str, Any] = {
            "user_id": user_id,
            "title": request.title,
            "status": ResumeStatus.draft,
            "summary": info.summary if info else None,
            "contact_information": {
                "email": info.email,
                "phone": info.phone,
                "address": info.location,
                "website": info.website,
                "linkedin": info.linkedin,
                "github": info.github,
            } if info else None,
            # projects and languages only ever arrive with the initial property bag
            "projects": [p.model_dump() for p in request.projects],
            "languages": [lang.model_dump() for lang in request.languages],
        }
        resume = Resume.create(props)

        for edu in request.education:
            resume.add_education(edu.model_dump())
        for exp in request.experience:
            resume.add_experience(exp.model_dump())
        for skill in request.skills:
            resume.add_skill(skill.model_dump() if isinstance(skill, SkillInput) else {"name": skill})

        self.repository.create(resume)
        return ResumeSummary.from_resume(resume)

    def get_resume_by_id(self, resume_id: int, user_id: int) -> dict[str, Any]:
        """``{"resume": None}`` both when missing and when owned by someone else."""
        resume = self.repository.find_by_id(resume_id)
        if resume is None or resume.user_id != user_id:
            return {"resume": None}
        return {"resume": resume}

    def get_user_resumes(self, user_id: int) -> list[ResumeSummary]:
        return [ResumeSummary.from_resume(r) for r in self.repository.find_by_user_id(user_id)]
