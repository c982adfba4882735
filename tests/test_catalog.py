"""Static checks over the revision scripts."""

from alembic.script import ScriptDirectory

from dnd_game.infra.catalog import CatalogEntry, load_catalog, validate_catalog

_REVISION = '''"""{doc}"""
revision = {revision!r}
down_revision = {down!r}


def upgrade():
    pass
{downgrade}'''


def _write(versions, revision, down, doc="step", with_downgrade=True):
    downgrade = "\n\ndef downgrade():\n    pass\n" if with_downgrade else ""
    (versions / f"{revision}_step.py").write_text(
        _REVISION.format(doc=doc, revision=revision, down=down, downgrade=downgrade)
    )


def _script(tmp_path) -> ScriptDirectory:
    return ScriptDirectory(str(tmp_path))


def test_shipped_catalog_is_valid():
    assert validate_catalog() == []


def test_entries_carry_docs_and_paths():
    first = load_catalog()[0]
    assert first.revision == "0001"
    assert "users" in first.doc.lower()
    assert first.path.endswith("0001_create_users.py")


def test_lossy_entries_are_flagged_in_listing():
    entry = CatalogEntry(revision="0013", down_revision="0012", doc="nullable", path="x", destructive=True)
    assert str(entry) == "0013 nullable [lossy down]"
    assert str(CatalogEntry("0001", None, "users", "x")) == "0001 users"


def test_out_of_order_ids_reported(tmp_path):
    versions = tmp_path / "versions"
    versions.mkdir()
    _write(versions, "0002", None)
    _write(versions, "0001", "0002")

    problems = validate_catalog(_script(tmp_path))
    assert problems == ["0001: does not sort after 0002"]


def test_missing_downgrade_reported(tmp_path):
    versions = tmp_path / "versions"
    versions.mkdir()
    _write(versions, "0001", None)
    _write(versions, "0002", "0001", with_downgrade=False)

    assert validate_catalog(_script(tmp_path)) == ["0002: missing downgrade()"]


def test_branches_reported(tmp_path):
    versions = tmp_path / "versions"
    versions.mkdir()
    _write(versions, "0001", None)
    _write(versions, "0002", "0001")
    _write(versions, "0003", "0001")

    problems = validate_catalog(_script(tmp_path))
    assert len(problems) == 1
    assert problems[0].startswith("expected one head")
