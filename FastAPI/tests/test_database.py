import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool

import myjob.database as dbmod


@pytest.fixture
def fresh_engine(monkeypatch):
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    monkeypatch.setattr(dbmod, "engine", engine)
    yield engine
    engine.dispose()


def _unique_columns(engine, table: str) -> list[tuple[str, ...]]:
    return [tuple(uc["column_names"]) for uc in inspect(engine).get_unique_constraints(table)]


def test_init_db_creates_job_board_schema(fresh_engine):
    dbmod.init_db()
    tables = set(inspect(fresh_engine).get_table_names())
    assert {"users", "companies", "job_posts", "job_posts_saved", "resumes_saved", "resumes_viewed"} <= tables

    assert ("user_id", "job_post_id") in _unique_columns(fresh_engine, "job_posts_saved")
    assert ("user_id", "company_id") in _unique_columns(fresh_engine, "company_followed")
    assert ("resume_id", "company_id") in _unique_columns(fresh_engine, "resumes_saved")
    slug_index = [ix for ix in inspect(fresh_engine).get_indexes("job_posts") if ix["column_names"] == ["slug"]]
    assert slug_index and slug_index[0]["unique"]


def test_ensure_tables_exist_only_reports_missing(fresh_engine):
    created = dbmod.ensure_tables_exist()
    assert "job_posts" in created
    assert created == sorted(created)
    assert dbmod.ensure_tables_exist() == []


def test_init_db_propagates_failures(monkeypatch):
    def _boom(bind):
        raise RuntimeError("db down")

    monkeypatch.setattr(dbmod.Base.metadata, "create_all", _boom)
    with pytest.raises(RuntimeError):
        dbmod.init_db()


def test_get_db_closes_session(monkeypatch):
    closed = []

    class _Session:
        def close(self):
            closed.append(True)

    monkeypatch.setattr(dbmod, "SessionLocal", _Session)
    gen = dbmod.get_db()
    assert isinstance(next(gen), _Session)
    gen.close()
    assert closed == [True]


def test_engine_kwargs_depend_on_backend():
    assert dbmod._engine_kwargs("sqlite://") == {"connect_args": {"check_same_thread": False}}
    assert dbmod._engine_kwargs("postgresql://u:p@db/myjob") == {"pool_pre_ping": True}
