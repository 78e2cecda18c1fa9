import pytest

import myjob.scripts.ensure_tables as ensure_tables
import myjob.scripts.seed_common as seed_common
import myjob.scripts.set_job_post_status as set_status
from myjob.models import Career, City, District, JobPostStatus, RoleName


def test_ensure_tables_reports_created(monkeypatch, capsys):
    monkeypatch.setattr(ensure_tables, "ensure_tables_exist", lambda: ["job_posts"])
    ensure_tables.main()
    assert "job_posts" in capsys.readouterr().out


def test_ensure_tables_nothing_to_create(monkeypatch, capsys):
    monkeypatch.setattr(ensure_tables, "ensure_tables_exist", lambda: [])
    ensure_tables.main()
    assert "nothing to create" in capsys.readouterr().out


def test_seed_common_is_idempotent(db_session):
    first = seed_common.seed(db_session)
    assert first["cities"] == len(seed_common.CITIES)
    assert first["careers"] == len(seed_common.CAREERS)
    second = seed_common.seed(db_session)
    assert second == {"cities": 0, "districts": 0, "careers": 0}
    assert db_session.query(City).count() == len(seed_common.CITIES)
    assert db_session.query(District).count() == sum(len(d) for d in seed_common.CITIES.values())
    assert db_session.query(Career).count() == len(seed_common.CAREERS)


def _patch_session(monkeypatch, db_session):
    class _Session:
        def __getattr__(self, name):
            return getattr(db_session, name)

        def close(self):
            return None

    monkeypatch.setattr(set_status, "init_db", lambda: None)
    monkeypatch.setattr(set_status, "SessionLocal", lambda: _Session())


def test_set_job_post_status_publishes(monkeypatch, db_session, make_user, make_company, make_job_post):
    company = make_company(make_user(RoleName.EMPLOYER.value))
    job_post = make_job_post(company, status=JobPostStatus.PENDING.value, slug="pending-job")
    _patch_session(monkeypatch, db_session)
    monkeypatch.setattr(set_status.sys, "argv", ["prog", "pending-job", "published"])
    set_status.main()
    db_session.refresh(job_post)
    assert job_post.status == JobPostStatus.PUBLISHED.value


def test_set_job_post_status_unknown_status(monkeypatch):
    monkeypatch.setattr(set_status.sys, "argv", ["prog", "slug", "archived"])
    with pytest.raises(SystemExit):
        set_status.main()


def test_set_job_post_status_missing_job(monkeypatch, db_session):
    _patch_session(monkeypatch, db_session)
    monkeypatch.setattr(set_status.sys, "argv", ["prog", "missing", "published"])
    with pytest.raises(SystemExit):
        set_status.main()
