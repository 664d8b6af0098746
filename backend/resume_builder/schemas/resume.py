"""
Resume request schemas (camelCase on the wire, snake_case in Python).
"""
from __future__ import annotations

from datetime import date
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Camel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PersonalInfoInput(_Camel):
    name: Optional[str] = None
    email: str = Field(min_length=1)
    phone: Optional[str] = None
    location: Optional[str] = None
    summary: Optional[str] = None
    website: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None


class EducationInput(_Camel):
    institution: str = Field(min_length=1)
    degree: str = Field(min_length=1)
    field_of_study: str = Field(alias="fieldOfStudy", min_length=1)
    start_date: Optional[date] = Field(default=None, alias="startDate")
    end_date: Optional[date] = Field(default=None, alias="endDate")
    description: Optional[str] = None


class ExperienceInput(_Camel):
    company: str = Field(min_length=1)
    position: str = Field(min_length=1)
    location: Optional[str] = None
    start_date: Optional[date] = Field(default=None, alias="startDate")
    end_date: Optional[date] = Field(default=None, alias="endDate")
    description: Optional[str] = None
    achievements: List[str] = Field(default_factory=list)


class SkillInput(_Camel):
    name: str = Field(min_length=1)
    level: Optional[int] = Field(default=None, ge=1, le=5)
    category: Optional[str] = None


class ProjectInput(_Camel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    url: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)


class LanguageInput(_Camel):
    name: str = Field(min_length=1)
    proficiency: str = Field(min_length=1)


class CreateResumeRequest(_Camel):
    title: str = Field(min_length=1, max_length=255)
    personal_info: Optional[PersonalInfoInput] = Field(default=None, alias="personalInfo")
    education: List[EducationInput] = Field(default_factory=list)
    experience: List[ExperienceInput] = Field(default_factory=list)
    # plain names or {name, level, category}
    skills: List[Union[str, SkillInput]] = Field(default_factory=list)
    projects: List[ProjectInput] = Field(default_factory=list)
    languages: List[LanguageInput] = Field(default_factory=list)

    @field_validator("education", "experience", "skills", "projects", "languages", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value
