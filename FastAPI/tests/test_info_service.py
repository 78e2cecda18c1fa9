import pytest

from myjob.core.errors import NotFoundError
from myjob.models import CompanyFollowed, Resume, ResumeSaved, ResumeViewed, RoleName
from myjob.schemas.info import CompanyUpdate, JobSeekerProfileUpdate, ResumeCreate
from myjob.services import info_service


@pytest.fixture
def employer(make_user, make_company):
    user = make_user(RoleName.EMPLOYER.value, email="hr@x.com")
    make_company(user, name="Acme")
    return user


@pytest.fixture
def seeker(make_user):
    return make_user(email="seeker@x.com")


def test_get_company_for_owner_only(db_session, employer, seeker):
    company = info_service.get_company(db_session, employer.id)
    assert company.slug == "acme"
    assert company.job_post_count == 0
    with pytest.raises(NotFoundError):
        info_service.get_company(db_session, seeker.id)


def test_update_company_regenerates_slug_on_rename(db_session, lookups, employer, make_user, make_company):
    make_company(make_user(RoleName.EMPLOYER.value), name="Globex", slug="globex")
    out = info_service.update_company(
        db_session,
        employer.id,
        CompanyUpdate(
            company_name="Globex",
            description="We build things",
            location={"city_id": lookups.other_city.id, "district_id": lookups.other_district.id, "address": "5 Bay"},
        ),
    )
    assert out.slug == "globex-1"
    assert out.description == "We build things"
    assert out.location.city_id == lookups.other_city.id


def test_update_company_without_rename_keeps_slug(db_session, employer):
    out = info_service.update_company(db_session, employer.id, CompanyUpdate(employee_size=50))
    assert out.slug == "acme"
    assert out.employee_size == 50


def test_update_company_clears_optional_fields(db_session, employer):
    info_service.update_company(db_session, employer.id, CompanyUpdate(website_url="https://acme.example"))
    out = info_service.update_company(db_session, employer.id, CompanyUpdate(website_url=None))
    assert out.website_url is None
    assert out.company_name == "Acme"


def test_list_companies_keyword_and_city(db_session, lookups, employer, make_user, make_company):
    make_company(make_user(RoleName.EMPLOYER.value), name="Initech", slug="initech")
    assert info_service.list_companies(db_session).count == 2
    only = info_service.list_companies(db_session, keyword="init")
    assert [c.slug for c in only.results] == ["initech"]
    assert only.results[0].city_id == lookups.city.id
    assert info_service.list_companies(db_session, city_id=lookups.other_city.id).count == 0


def test_public_company_follow_toggle(db_session, employer, seeker, make_job_post):
    make_job_post(employer.company)
    anon = info_service.get_public_company(db_session, "acme")
    assert anon.is_followed is None
    assert anon.job_post_count == 1

    assert info_service.toggle_follow_company(db_session, "acme", seeker.id) is True
    assert info_service.get_public_company(db_session, "acme", seeker.id).is_followed is True
    assert info_service.toggle_follow_company(db_session, "acme", seeker.id) is False
    assert db_session.query(CompanyFollowed).count() == 0

    with pytest.raises(NotFoundError):
        info_service.get_public_company(db_session, "nope")


def test_company_images_add_and_delete(db_session, employer, make_user, make_company):
    image = info_service.add_company_image(db_session, employer.id, "https://img.example/1.png")
    image_id = image.id
    assert info_service.get_public_company(db_session, "acme").images[0].image_url == "https://img.example/1.png"

    other = make_user(RoleName.EMPLOYER.value)
    make_company(other, name="Other", slug="other")
    with pytest.raises(NotFoundError):
        info_service.delete_company_image(db_session, other.id, image_id)

    info_service.delete_company_image(db_session, employer.id, image_id)
    with pytest.raises(NotFoundError):
        info_service.delete_company_image(db_session, employer.id, image_id)


def test_job_seeker_profile_get_and_update(db_session, seeker):
    profile = info_service.get_job_seeker_profile(db_session, seeker.id)
    assert profile.email == "seeker@x.com"
    assert profile.phone is None

    updated = info_service.update_job_seeker_profile(
        db_session, seeker.id, JobSeekerProfileUpdate(full_name="New Name", phone="0900", gender="F")
    )
    assert updated.full_name == "New Name"
    assert updated.phone == "0900"
    assert updated.gender == "F"


def test_job_seeker_profile_unknown_user(db_session):
    with pytest.raises(NotFoundError):
        info_service.get_job_seeker_profile(db_session, "ghost")


def test_resume_crud_scoped_to_owner(db_session, lookups, seeker, make_user):
    resume = info_service.create_resume(db_session, seeker.id, ResumeCreate(title="CV", city_id=lookups.city.id))
    assert [r.id for r in info_service.list_resumes(db_session, seeker.id)] == [resume.id]
    assert info_service.get_resume(db_session, resume.id, seeker.id).title == "CV"

    stranger = make_user(email="stranger@x.com")
    with pytest.raises(NotFoundError):
        info_service.get_resume(db_session, resume.id, stranger.id)
    with pytest.raises(NotFoundError):
        info_service.delete_resume(db_session, resume.id, stranger.id)

    info_service.delete_resume(db_session, resume.id, seeker.id)
    assert info_service.list_resumes(db_session, seeker.id) == []


def test_create_resume_unknown_city(db_session, seeker):
    with pytest.raises(NotFoundError):
        info_service.create_resume(db_session, seeker.id, ResumeCreate(title="CV", city_id=999))


# --- Candidate resumes ---

def test_view_candidate_resume_counts_views_per_company(db_session, employer, seeker, make_user, make_company, make_resume):
    resume = make_resume(seeker, title="Backend CV")
    other = make_user(RoleName.EMPLOYER.value, email="other@x.com")
    make_company(other, name="Globex")

    first = info_service.view_candidate_resume(db_session, employer.id, resume.id)
    info_service.view_candidate_resume(db_session, employer.id, resume.id)
    info_service.view_candidate_resume(db_session, other.id, resume.id)

    assert first.full_name == seeker.full_name
    assert first.is_saved is False
    rows = {r.company_id: r.views for r in db_session.query(ResumeViewed).all()}
    assert rows == {employer.company.id: 2, other.company.id: 1}

    views = info_service.get_resume_views(db_session, seeker.id)
    assert views.count == 2
    assert {v.company_name: v.views for v in views.results} == {"Acme": 2, "Globex": 1}


def test_view_candidate_resume_rejects_missing_or_inactive(db_session, employer, seeker, make_resume):
    with pytest.raises(NotFoundError):
        info_service.view_candidate_resume(db_session, employer.id, 999)
    resume = make_resume(seeker)
    resume.is_active = False
    db_session.commit()
    with pytest.raises(NotFoundError):
        info_service.view_candidate_resume(db_session, employer.id, resume.id)
    with pytest.raises(NotFoundError):
        info_service.view_candidate_resume(db_session, seeker.id, resume.id)


def test_toggle_save_resume_and_saved_list(db_session, employer, seeker, make_resume):
    resume = make_resume(seeker, title="Data CV")
    assert info_service.toggle_save_resume(db_session, employer.id, resume.id) is True
    assert info_service.view_candidate_resume(db_session, employer.id, resume.id).is_saved is True

    saved = info_service.get_saved_resumes(db_session, employer.id)
    assert saved.count == 1
    assert saved.results[0].resume.title == "Data CV"
    assert saved.results[0].resume.email == seeker.email

    assert info_service.toggle_save_resume(db_session, employer.id, resume.id) is False
    assert db_session.query(ResumeSaved).count() == 0
    assert info_service.get_saved_resumes(db_session, employer.id).count == 0


def test_deleting_resume_drops_saved_and_viewed_rows(db_session, employer, seeker, make_resume):
    resume = make_resume(seeker)
    info_service.toggle_save_resume(db_session, employer.id, resume.id)
    info_service.view_candidate_resume(db_session, employer.id, resume.id)

    info_service.delete_resume(db_session, resume.id, seeker.id)
    assert db_session.query(Resume).count() == 0
    assert db_session.query(ResumeSaved).count() == 0
    assert db_session.query(ResumeViewed).count() == 0
