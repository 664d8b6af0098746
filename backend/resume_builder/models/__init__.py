"""
SQLAlchemy Models
"""
from resume_builder.models.user import UserRecord
from resume_builder.models.resume import (
    EducationRecord,
    ExperienceRecord,
    LanguageRecord,
    ProjectRecord,
    ProjectTechnologyRecord,
    ResumeRecord,
    SkillRecord,
)

__all__ = [
    "UserRecord",
    "ResumeRecord",
    "EducationRecord",
    "ExperienceRecord",
    "SkillRecord",
    "ProjectRecord",
    "ProjectTechnologyRecord",
    "LanguageRecord",
]
