import pytest
from pydantic import ValidationError

from myjob.schemas.info import CompanyUpdate
from myjob.schemas.job import JobPostUpdate


def test_job_post_update_rejects_inverted_salary_range():
    with pytest.raises(ValidationError):
        JobPostUpdate(salary_min=2000, salary_max=10)

    upd = JobPostUpdate(salary_max=10)
    assert upd.model_dump(exclude_unset=True) == {"salary_max": 10}


@pytest.mark.parametrize("field", ["job_name", "deadline", "quantity", "career_id", "location", "is_hot", "is_urgent"])
def test_job_post_update_required_columns_cannot_be_nulled(field):
    with pytest.raises(ValidationError):
        JobPostUpdate(**{field: None})


def test_job_post_update_keeps_explicit_nulls_for_optional_columns():
    upd = JobPostUpdate(contact_person_name=None, salary_max=None)
    assert upd.model_dump(exclude_unset=True) == {"contact_person_name": None, "salary_max": None}


def test_company_update_null_handling():
    with pytest.raises(ValidationError):
        CompanyUpdate(company_name=None)
    with pytest.raises(ValidationError):
        CompanyUpdate(tax_code=None)

    upd = CompanyUpdate(website_url=None, description=None)
    assert upd.model_dump(exclude_unset=True) == {"website_url": None, "description": None}
