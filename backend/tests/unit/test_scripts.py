from pathlib import Path

from scripts.check_migration_chain import Revision, check_chain, read_revisions
from scripts.db_preflight import collect_checks, run


def test_repository_migrations_form_a_single_chain():
    revisions = read_revisions()
    assert revisions
    assert check_chain(revisions) == []


def test_check_chain_reports_branches_and_missing_parents():
    revisions = [
        Revision("0001", None, Path("0001_root.py")),
        Revision("0002", "0001", Path("0002_a.py")),
        Revision("0003", "0001", Path("0003_b.py")),
        Revision("0004", "9999", Path("0004_orphan.py")),
    ]
    errors = check_chain(revisions)
    assert any("missing down_revision 9999" in e for e in errors)
    assert any("exactly one head" in e for e in errors)


def test_check_chain_requires_revision_prefixed_file_names():
    errors = check_chain([Revision("0001", None, Path("initial.py"))])
    assert errors == ["initial.py: file name does not start with revision id 0001"]


def test_preflight_passes_for_development_defaults():
    assert run({"ENVIRONMENT": "development"}) == 0


def test_preflight_rejects_unsafe_production_settings():
    env = {"ENVIRONMENT": "production", "DATABASE_URL": "sqlite:///./referencedata.db"}
    failed = [title for title, ok, _ in collect_checks(env) if not ok]
    assert "DATABASE_URL is not SQLite" in failed
    assert run(env) == 1


def test_preflight_rejects_inconsistent_page_sizes():
    assert run({"DEFAULT_PAGE_SIZE": "500", "MAX_PAGE_SIZE": "100"}) == 1
