"""Integration tests for the résumé use cases."""
from datetime import date

from resume_builder.schemas.resume import CreateResumeRequest
from resume_builder.services.resume_service import ResumeService, resume_detail


def _request(**overrides) -> CreateResumeRequest:
    payload = {
        "title": "Dev Resume",
        "personalInfo": {
            "name": "A B",
            "email": "a@b.com",
            "phone": "555-0100",
            "location": "Berlin",
            "summary": "Pragmatic backend developer",
            "github": "ab",
        },
        "education": [{"institution": "X", "degree": "BSc", "fieldOfStudy": "CS", "startDate": "2020-01-01"}],
        "experience": [{"company": "Acme", "position": "Dev", "achievements": ["one", "two"]}],
        "skills": ["Python", {"name": "SQL", "level": 3}],
        "projects": [{"name": "Site", "technologies": ["Flask", "Postgres"]}],
        "languages": [{"name": "English", "proficiency": "Fluent"}],
    }
    payload.update(overrides)
    return CreateResumeRequest.model_validate(payload)


class TestCreateResume:
    def test_returns_summary(self, resume_repository, user):
        summary = ResumeService(resume_repository).create_resume(user.id, _request())
        assert summary.id is not None
        assert summary.title == "Dev Resume"
        data = summary.to_dict()
        assert set(data) == {"id", "title", "createdAt", "updatedAt"}

    def test_maps_personal_info_and_children(self, resume_repository, user):
        summary = ResumeService(resume_repository).create_resume(user.id, _request())
        resume = resume_repository.find_by_id(summary.id)

        contact = resume.contact_information
        assert contact.email == "a@b.com"
        assert contact.address == "Berlin"
        assert contact.github == "ab"
        assert resume.summary == "Pragmatic backend developer"
        assert resume.education[0].start_date == date(2020, 1, 1)
        assert resume.experience[0].achievements == ["one", "two"]
        assert [(s.id, s.name, s.level) for s in resume.skills] == [(1, "Python", None), (2, "SQL", 3)]
        assert resume.projects[0].technologies == ["Flask", "Postgres"]
        assert resume.languages[0].proficiency == "Fluent"

    def test_without_personal_info(self, resume_repository, user):
        summary = ResumeService(resume_repository).create_resume(user.id, _request(personalInfo=None))
        resume = resume_repository.find_by_id(summary.id)
        assert resume.contact_information is None
        assert resume.summary is None


class TestGetResumeById:
    def test_owner_sees_resume(self, resume_repository, user):
        service = ResumeService(resume_repository)
        summary = service.create_resume(user.id, _request())
        result = service.get_resume_by_id(summary.id, user.id)
        assert result["resume"] is not None
        assert result["resume"].title == "Dev Resume"

    def test_other_user_gets_none(self, resume_repository, user, other_user):
        service = ResumeService(resume_repository)
        summary = service.create_resume(user.id, _request())
        assert resume_repository.find_by_id(summary.id) is not None
        assert service.get_resume_by_id(summary.id, other_user.id) == {"resume": None}

    def test_missing_gets_none(self, resume_repository, user):
        assert ResumeService(resume_repository).get_resume_by_id(12345, user.id) == {"resume": None}


class TestGetUserResumes:
    def test_lists_only_own(self, resume_repository, user, other_user):
        service = ResumeService(resume_repository)
        service.create_resume(user.id, _request(title="First"))
        service.create_resume(user.id, _request(title="Second"))
        service.create_resume(other_user.id, _request(title="Not mine"))

        titles = [s.title for s in service.get_user_resumes(user.id)]
        assert titles == ["First", "Second"]

    def test_empty(self, resume_repository, user):
        assert ResumeService(resume_repository).get_user_resumes(user.id) == []


class TestResumeDetail:
    def test_dates_are_iso_strings(self, resume_repository, user):
        summary = ResumeService(resume_repository).create_resume(user.id, _request())
        detail = resume_detail(resume_repository.find_by_id(summary.id))
        assert detail["education"][0]["startDate"] == "2020-01-01"
        assert detail["education"][0]["endDate"] is None
        assert detail["status"] == "Draft"
        assert detail["personalInfo"]["email"] == "a@b.com"
        assert isinstance(detail["createdAt"], str)
