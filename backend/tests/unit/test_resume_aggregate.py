"""Unit tests for the Resume aggregate (no DB)."""
from datetime import date, datetime, timezone

import pytest

from resume_builder.core.errors import ItemNotFoundError, ValidationError
from resume_builder.domain.resume import ContactInformation, Resume, ResumeStatus

PAST = datetime(2020, 1, 1, tzinfo=timezone.utc)


def _resume(**overrides) -> Resume:
    props = {"user_id": 7, "title": "Dev Resume", "created_at": PAST, "updated_at": PAST}
    props.update(overrides)
    return Resume.create(props)


def _education(**overrides) -> dict:
    data = {"institution": "X", "degree": "BSc", "field_of_study": "CS", "start_date": date(2020, 1, 1)}
    data.update(overrides)
    return data


class TestCreate:
    def test_title_and_default_status(self):
        resume = Resume.create({"user_id": 1, "title": "Backend Engineer"})
        assert resume.title == "Backend Engineer"
        assert resume.status == ResumeStatus.draft

    def test_collections_default_to_empty_lists(self):
        resume = Resume.create({"user_id": 1, "title": "T"})
        assert resume.education == []
        assert resume.experience == []
        assert resume.skills == []
        assert resume.projects == []
        assert resume.languages == []

    def test_timestamps_default_to_now(self):
        before = datetime.now(timezone.utc)
        resume = Resume.create({"user_id": 1, "title": "T"})
        assert resume.created_at >= before
        assert resume.updated_at >= before
        assert resume.id is None

    def test_status_accepts_value_string(self):
        assert _resume(status="Published").status == ResumeStatus.published

    def test_constructor_is_not_public(self):
        with pytest.raises(TypeError):
            Resume({"user_id": 1, "title": "T"})

    def test_missing_title_rejected(self):
        with pytest.raises(ValidationError):
            Resume.create({"user_id": 1, "title": "  "})

    def test_missing_user_rejected(self):
        with pytest.raises(ValidationError):
            Resume.create({"title": "T"})

    def test_projects_and_languages_get_sequential_ids(self):
        resume = _resume(
            projects=[{"name": "A", "technologies": ["Go"]}, {"name": "B"}],
            languages=[{"name": "English", "proficiency": "Native"}],
        )
        assert [p.id for p in resume.projects] == [1, 2]
        assert resume.projects[0].technologies == ["Go"]
        assert resume.projects[1].technologies == []
        assert resume.languages[0].id == 1

    def test_contact_information_requires_email(self):
        with pytest.raises(ValidationError):
            _resume(contact_information={"phone": "555"})


class TestChildIds:
    def test_first_item_gets_id_one(self):
        resume = _resume()
        assert resume.add_education(_education()) == 1

    def test_next_id_is_max_plus_one_not_count(self):
        resume = _resume(education=[_education(id=1), _education(id=3)])
        assert resume.add_education(_education(institution="Y")) == 4
        assert [e.id for e in resume.education] == [1, 3, 4]

    def test_ids_are_scoped_per_collection(self):
        resume = _resume()
        resume.add_skill({"name": "Python"})
        assert resume.add_experience({"company": "Acme", "position": "Dev"}) == 1
        assert resume.add_skill({"name": "SQL"}) == 2

    def test_supplied_id_on_add_is_ignored(self):
        resume = _resume(skills=[{"id": 5, "name": "Go"}])
        assert resume.add_skill({"id": 1, "name": "Rust"}) == 6


class TestUpdateAndRemove:
    def test_update_merges_fields(self):
        resume = _resume(education=[_education(id=1, description="old")])
        resume.update_education(1, degree="MSc")
        edu = resume.education[0]
        assert edu.degree == "MSc"
        assert edu.institution == "X"
        assert edu.description == "old"

    def test_update_unknown_id_raises(self):
        resume = _resume(experience=[{"id": 1, "company": "Acme", "position": "Dev"}])
        with pytest.raises(ItemNotFoundError) as info:
            resume.update_experience(2, company="Other")
        assert info.value.item_id == 2
        assert "Experience with ID 2 not found" in str(info.value)

    def test_update_cannot_change_id(self):
        resume = _resume(skills=[{"id": 1, "name": "Go"}])
        with pytest.raises(ValidationError):
            resume.update_skill(1, id=9)

    def test_update_rejects_unknown_field(self):
        resume = _resume(education=[_education(id=1)])
        with pytest.raises(ValidationError) as info:
            resume.update_education(1, bogus=1)
        assert "bogus" in info.value.message
        assert resume.education[0].degree == "BSc"
        assert resume.updated_at == PAST

    def test_update_validates_skill_level(self):
        resume = _resume(skills=[{"id": 1, "name": "Go"}])
        with pytest.raises(ValidationError):
            resume.update_skill(1, level=6)

    def test_remove_existing(self):
        resume = _resume(skills=[{"id": 1, "name": "Go"}, {"id": 2, "name": "SQL"}])
        resume.remove_skill(1)
        assert [s.name for s in resume.skills] == ["SQL"]

    def test_remove_missing_is_noop(self):
        resume = _resume(skills=[{"id": 1, "name": "Go"}])
        resume.remove_skill(42)
        assert [s.id for s in resume.skills] == [1]

    def test_remove_experience_and_education(self):
        resume = _resume(
            education=[_education(id=1)],
            experience=[{"id": 1, "company": "Acme", "position": "Dev"}],
        )
        resume.remove_education(1)
        resume.remove_experience(1)
        assert resume.education == []
        assert resume.experience == []


class TestUpdatedAt:
    @pytest.mark.parametrize(
        "mutate",
        [
            lambda r: r.add_education(_education()),
            lambda r: r.add_experience({"company": "Acme", "position": "Dev"}),
            lambda r: r.add_skill({"name": "Go"}),
            lambda r: r.remove_skill(99),
            lambda r: r.update_basic_info("New title", "summary"),
            lambda r: r.update_status(ResumeStatus.archived),
            lambda r: r.update_contact_information({"email": "a@b.com"}),
            lambda r: r.set_template_id(3),
        ],
    )
    def test_every_mutation_refreshes_updated_at(self, mutate):
        resume = _resume()
        mutate(resume)
        assert resume.updated_at > PAST
        assert resume.created_at == PAST

    def test_basic_info_and_status(self):
        resume = _resume()
        resume.update_basic_info("Staff Engineer", "Ten years of Python")
        resume.update_status("Published")
        resume.set_template_id(2)
        assert resume.title == "Staff Engineer"
        assert resume.summary == "Ten years of Python"
        assert resume.status == ResumeStatus.published
        assert resume.template_id == 2


class TestEncapsulation:
    def test_collection_getters_return_copies(self):
        resume = _resume(experience=[{"id": 1, "company": "Acme", "position": "Dev", "achievements": ["a"]}])
        exp = resume.experience
        exp[0].achievements.append("b")
        exp.clear()
        assert resume.experience[0].achievements == ["a"]

    def test_contact_getter_returns_copy(self):
        resume = _resume(contact_information=ContactInformation(email="a@b.com"))
        info = resume.contact_information
        info.email = "changed@b.com"
        assert resume.contact_information.email == "a@b.com"

    def test_get_props_is_a_snapshot(self):
        resume = _resume(skills=[{"id": 1, "name": "Go"}])
        props = resume.get_props()
        props["skills"].append({"id": 2, "name": "SQL"})
        props["title"] = "changed"
        assert resume.title == "Dev Resume"
        assert len(resume.skills) == 1

    def test_get_props_round_trips_through_create(self):
        resume = _resume(skills=[{"id": 2, "name": "Go", "level": 4}])
        clone = Resume.create(resume.get_props())
        assert clone.get_props() == resume.get_props()

    def test_user_id_is_read_only(self):
        resume = _resume()
        with pytest.raises(AttributeError):
            resume.user_id = 99

    def test_identity_binds_once(self):
        resume = _resume()
        resume.mark_persisted(10, 1)
        resume.mark_persisted(10, 2)
        assert (resume.id, resume.version) == (10, 2)
        with pytest.raises(ValueError):
            resume.mark_persisted(11, 3)


class TestSkillLevel:
    @pytest.mark.parametrize("level", [0, 6, True, "3"])
    def test_out_of_range_rejected(self, level):
        with pytest.raises(ValidationError):
            _resume().add_skill({"name": "Go", "level": level})

    def test_none_and_bounds_accepted(self):
        resume = _resume()
        resume.add_skill({"name": "Go"})
        resume.add_skill({"name": "SQL", "level": 1})
        resume.add_skill({"name": "Rust", "level": 5})
        assert [s.level for s in resume.skills] == [None, 1, 5]
