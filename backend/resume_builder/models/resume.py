"""
Relational mapping for the résumé aggregate.

Seven tables: resumes, education, experience, skills, projects,
project_technologies, languages. Every key is an auto-increment integer. Child
rows keep the aggregate's collection-local id in ``item_id`` and their place in
the collection in ``sort_order``; all foreign keys cascade on delete.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import JSON, Date, DateTime, Enum, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from resume_builder.core.database import Base
from resume_builder.domain.resume import ResumeStatus
from resume_builder.models.user import _enum_values


def _resume_fk() -> Mapped[int]:
    return mapped_column(Integer, ForeignKey("resumes.id", ondelete="CASCADE"), nullable=False, index=True)


class ResumeRecord(Base):
    __tablename__ = "resumes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[ResumeStatus] = mapped_column(
        Enum(ResumeStatus, name="resumestatus", values_callable=_enum_values),
        nullable=False,
        default=ResumeStatus.draft,
    )
    contact_information: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    template_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    # Optimistic concurrency token, bumped on every update
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    education: Mapped[List["EducationRecord"]] = relationship(
        order_by="EducationRecord.sort_order", cascade="all, delete-orphan", passive_deletes=True
    )
    experience: Mapped[List["ExperienceRecord"]] = relationship(
        order_by="ExperienceRecord.sort_order", cascade="all, delete-orphan", passive_deletes=True
    )
    skills: Mapped[List["SkillRecord"]] = relationship(
        order_by="SkillRecord.sort_order", cascade="all, delete-orphan", passive_deletes=True
    )
    projects: Mapped[List["ProjectRecord"]] = relationship(
        order_by="ProjectRecord.sort_order", cascade="all, delete-orphan", passive_deletes=True
    )
    languages: Mapped[List["LanguageRecord"]] = relationship(
        order_by="LanguageRecord.sort_order", cascade="all, delete-orphan", passive_deletes=True
    )


class EducationRecord(Base):
    __tablename__ = "education"
    __table_args__ = (UniqueConstraint("resume_id", "item_id", name="uq_education_resume_item"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    resume_id: Mapped[int] = _resume_fk()
    item_id: Mapped[int] = mapped_column(Integer, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    institution: Mapped[str] = mapped_column(String(255), nullable=False)
    degree: Mapped[str] = mapped_column(String(255), nullable=False)
    field_of_study: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class ExperienceRecord(Base):
    __tablename__ = "experience"
    __table_args__ = (UniqueConstraint("resume_id", "item_id", name="uq_experience_resume_item"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    resume_id: Mapped[int] = _resume_fk()
    item_id: Mapped[int] = mapped_column(Integer, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    company: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    achievements: Mapped[list] = mapped_column(JSON, nullable=False, default=list)


class SkillRecord(Base):
    __tablename__ = "skills"
    __table_args__ = (UniqueConstraint("resume_id", "item_id", name="uq_skills_resume_item"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    resume_id: Mapped[int] = _resume_fk()
    item_id: Mapped[int] = mapped_column(Integer, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    level: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)


class ProjectRecord(Base):
    __tablename__ = "projects"
    __table_args__ = (UniqueConstraint("resume_id", "item_id", name="uq_projects_resume_item"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    resume_id: Mapped[int] = _resume_fk()
    item_id: Mapped[int] = mapped_column(Integer, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)

    technologies: Mapped[List["ProjectTechnologyRecord"]] = relationship(
        order_by="ProjectTechnologyRecord.sort_order", cascade="all, delete-orphan", passive_deletes=True
    )


class ProjectTechnologyRecord(Base):
    __tablename__ = "project_technologies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    technology: Mapped[str] = mapped_column(String(255), nullable=False)


class LanguageRecord(Base):
    __tablename__ = "languages"
    __table_args__ = (UniqueConstraint("resume_id", "item_id", name="uq_languages_resume_item"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    resume_id: Mapped[int] = _resume_fk()
    item_id: Mapped[int] = mapped_column(Integer, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    proficiency: Mapped[str] = mapped_column(String(255), nullable=False)
