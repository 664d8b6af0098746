"""
Résumé aggregate.

A ``Resume`` owns five child collections (education, experience, skills,
projects, languages). Child ids are local to their collection: a new item gets
``max(existing ids) + 1``, or 1 for an empty collection. Every mutation refreshes
``updated_at``. Getters hand out deep copies so callers cannot reach internal state.
"""
from __future__ import annotations

import copy
import enum
from dataclasses import asdict, dataclass, field, fields, replace
from datetime import date, datetime, timezone
from typing import Any, Iterable, Optional, TypeVar

from resume_builder.core.errors import ItemNotFoundError, ValidationError


class ResumeStatus(str, enum.Enum):
    draft = "Draft"
    published = "Published"
    archived = "Archived"


@dataclass
class ContactInformation:
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    website: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.email or not str(self.email).strip():
            raise ValidationError("Contact information requires an email")


@dataclass
class Education:
    id: int
    institution: str
    degree: str
    field_of_study: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = None


@dataclass
class Experience:
    id: int
    company: str
    position: str
    location: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = None
    achievements: list[str] = field(default_factory=list)


@dataclass
class Skill:
    id: int
    name: str
    level: Optional[int] = None  # 1-5
    category: Optional[str] = None

    def __post_init__(self) -> None:
        if self.level is not None and (
            isinstance(self.level, bool) or not isinstance(self.level, int) or not 1 <= self.level <= 5
        ):
            raise ValidationError(f"Skill level must be an integer between 1 and 5, got {self.level!r}")


@dataclass
class Project:
    id: int
    name: str
    description: Optional[str] = None
    url: Optional[str] = None
    technologies: list[str] = field(default_factory=list)


@dataclass
class Language:
    id: int
    name: str
    proficiency: str


Item = TypeVar("Item", Education, Experience, Skill, Project, Language)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _next_id(items: Iterable[Any]) -> int:
    ids = [item.id for item in items]
    return max(ids) + 1 if ids else 1


def _coerce(cls: type[Item], value: Item | dict[str, Any]) -> Item:
    if isinstance(value, cls):
        return copy.deepcopy(value)
    if isinstance(value, dict):
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in value.items() if k in known})
    raise TypeError(f"Expected {cls.__name__} or dict, got {type(value).__name__}")


def _coerce_list(cls: type[Item], values: Optional[Iterable[Any]]) -> list[Item]:
    items: list[Item] = []
    for value in values or []:
        if isinstance(value, dict) and value.get("id") is None:
            value = {**value, "id": _next_id(items)}
        items.append(_coerce(cls, value))
    return items


def _coerce_contact(value: ContactInformation | dict[str, Any] | None) -> Optional[ContactInformation]:
    if value is None:
        return None
    if isinstance(value, ContactInformation):
        return replace(value)
    return _coerce(ContactInformation, {"email": None, **value})


class Resume:
    """Aggregate root. Build with :meth:`create`, never with the constructor directly."""

    def __init__(self, props: dict[str, Any], _token: object = None) -> None:
        if _token is not _FACTORY_TOKEN:
            raise TypeError("Use Resume.create(props) to build a Resume")

        user_id = props.get("user_id")
        if user_id is None:
            raise ValidationError("Resume requires a user_id")
        title = props.get("title")
        if not title or not str(title).strip():
            raise ValidationError("Resume title is required")

        now = _now()
        self._id: Optional[int] = props.get("id")
        self._version: Optional[int] = props.get("version")
        self._user_id: int = user_id
        self._title: str = title
        self._summary: Optional[str] = props.get("summary")
        self._status = ResumeStatus(props.get("status") or ResumeStatus.draft)
        self._contact_information = _coerce_contact(props.get("contact_information"))
        self._template_id: Optional[int] = props.get("template_id")
        self._education: list[Education] = _coerce_list(Education, props.get("education"))
        self._experience: list[Experience] = _coerce_list(Experience, props.get("experience"))
        self._skills: list[Skill] = _coerce_list(Skill, props.get("skills"))
        self._projects: list[Project] = _coerce_list(Project, props.get("projects"))
        self._languages: list[Language] = _coerce_list(Language, props.get("languages"))
        self._created_at: datetime = props.get("created_at") or now
        self._updated_at: datetime = props.get("updated_at") or now

    @classmethod
    def create(cls, props: dict[str, Any]) -> "Resume":
        return cls(props, _FACTORY_TOKEN)

    # -- identity ----------------------------------------------------------

    @property
    def id(self) -> Optional[int]:
        return self._id

    @property
    def version(self) -> Optional[int]:
        return self._version

    @property
    def user_id(self) -> int:
        return self._user_id

    def mark_persisted(self, resume_id: int, version: int) -> None:
        """Bind the storage-assigned identity. The id can be set once, never changed."""
        if self._id is not None and self._id != resume_id:
            raise ValueError(f"Resume already has id {self._id}; cannot rebind to {resume_id}")
        self._id = resume_id
        self._version = version

    # -- scalar fields -----------------------------------------------------

    @property
    def title(self) -> str:
        return self._title

    @property
    def summary(self) -> Optional[str]:
        return self._summary

    @property
    def status(self) -> ResumeStatus:
        return self._status

    @property
    def contact_information(self) -> Optional[ContactInformation]:
        return replace(self._contact_information) if self._contact_information else None

    @property
    def template_id(self) -> Optional[int]:
        return self._template_id

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    # -- child collections (copies) ----------------------------------------

    @property
    def education(self) -> list[Education]:
        return copy.deepcopy(self._education)

    @property
    def experience(self) -> list[Experience]:
        return copy.deepcopy(self._experience)

    @property
    def skills(self) -> list[Skill]:
        return copy.deepcopy(self._skills)

    @property
    def projects(self) -> list[Project]:
        return copy.deepcopy(self._projects)

    @property
    def languages(self) -> list[Language]:
        return copy.deepcopy(self._languages)

    # -- mutations ---------------------------------------------------------

    def _touch(self) -> None:
        self._updated_at = _now()

    def update_basic_info(self, title: str, summary: Optional[str] = None) -> None:
        if not title or not title.strip():
            raise ValidationError("Resume title is required")
        self._title = title
        self._summary = summary
        self._touch()

    def update_status(self, status: ResumeStatus | str) -> None:
        self._status = ResumeStatus(status)
        self._touch()

    def update_contact_information(self, info: ContactInformation | dict[str, Any] | None) -> None:
        self._contact_information = _coerce_contact(info)
        self._touch()

    def set_template_id(self, template_id: Optional[int]) -> None:
        self._template_id = template_id
        self._touch()

    def _add(self, collection: list[Item], cls: type[Item], item: Item | dict[str, Any]) -> int:
        data = asdict(item) if isinstance(item, cls) else dict(item)
        data["id"] = _next_id(collection)
        collection.append(_coerce(cls, data))
        self._touch()
        return data["id"]

    def _update(self, collection: list[Item], kind: str, item_id: int, changes: dict[str, Any]) -> None:
        if "id" in changes:
            raise ValidationError(f"{kind} id cannot be changed")
        for index, existing in enumerate(collection):
            if existing.id == item_id:
                unknown = sorted(set(changes) - {f.name for f in fields(existing)})
                if unknown:
                    raise ValidationError(f"Unknown {kind} field(s): {', '.join(unknown)}")
                collection[index] = replace(existing, **copy.deepcopy(changes))
                self._touch()
                return
        raise ItemNotFoundError(kind, item_id)

    def _remove(self, collection: list[Item], item_id: int) -> list[Item]:
        self._touch()
        return [item for item in collection if item.id != item_id]

    def add_education(self, education: Education | dict[str, Any]) -> int:
        return self._add(self._education, Education, education)

    def update_education(self, education_id: int, **changes: Any) -> None:
        self._update(self._education, "Education", education_id, changes)

    def remove_education(self, education_id: int) -> None:
        self._education = self._remove(self._education, education_id)

    def add_experience(self, experience: Experience | dict[str, Any]) -> int:
        return self._add(self._experience, Experience, experience)

    def update_experience(self, experience_id: int, **changes: Any) -> None:
        self._update(self._experience, "Experience", experience_id, changes)

    def remove_experience(self, experience_id: int) -> None:
        self._experience = self._remove(self._experience, experience_id)

    def add_skill(self, skill: Skill | dict[str, Any]) -> int:
        return self._add(self._skills, Skill, skill)

    def update_skill(self, skill_id: int, **changes: Any) -> None:
        self._update(self._skills, "Skill", skill_id, changes)

    def remove_skill(self, skill_id: int) -> None:
        self._skills = self._remove(self._skills, skill_id)

    # -- snapshot ----------------------------------------------------------

    def get_props(self) -> dict[str, Any]:
        """Full copy of every field, suitable for serialization or Resume.create()."""
        return {
            "id": self._id,
            "version": self._version,
            "user_id": self._user_id,
            "title": self._title,
            "summary": self._summary,
            "status": self._status,
            "contact_information": asdict(self._contact_information) if self._contact_information else None,
            "template_id": self._template_id,
            "education": [asdict(item) for item in self._education],
            "experience": [asdict(item) for item in self._experience],
            "skills": [asdict(item) for item in self._skills],
            "projects": [asdict(item) for item in self._projects],
            "languages": [asdict(item) for item in self._languages],
            "created_at": self._created_at,
            "updated_at": self._updated_at,
        }

    def __repr__(self) -> str:
        return f"Resume(id={self._id!r}, user_id={self._user_id!r}, title={self._title!r})"


_FACTORY_TOKEN = object()
