"""Static view and checks over the revision scripts."""

from __future__ import annotations

import re
from dataclasses import dataclass

from alembic.script import ScriptDirectory

from dnd_game.infra.migrate import script_directory

_REVISION_ID = re.compile(r"^\d{4}$")


@dataclass(frozen=True)
class CatalogEntry:
    revision: str
    down_revision: str | None
    doc: str
    path: str
    destructive: bool = False

    def __str__(self) -> str:
        flag = " [lossy down]" if self.destructive else ""
        return f"{self.revision} {self.doc}{flag}"


def load_catalog(script: ScriptDirectory | None = None) -> list[CatalogEntry]:
    """All revisions, oldest first."""
    script = script or script_directory()
    entries = []
    for rev in script.walk_revisions():
        entries.append(CatalogEntry(
            revision=rev.revision,
            down_revision=rev.down_revision,
            doc=rev.doc,
            path=rev.path,
            destructive=bool(getattr(rev.module, "destructive_downgrade", False)),
        ))
    entries.reverse()
    return entries


def validate_catalog(script: ScriptDirectory | None = None) -> list[str]:
    """Return a list of problems; empty means the catalog is well-formed."""
    script = script or script_directory()
    problems: list[str] = []

    heads = script.get_heads()
    bases = script.get_bases()
    if len(heads) != 1:
        problems.append(f"expected one head, found {sorted(heads)}")
    if len(bases) != 1:
        problems.append(f"expected one base, found {sorted(bases)}")
    if problems:
        return problems

    previous: str | None = None
    for rev in reversed(list(script.walk_revisions())):
        rid = rev.revision
        if not _REVISION_ID.match(rid):
            problems.append(f"{rid}: revision id is not a zero-padded number")
        elif previous is not None and _REVISION_ID.match(previous) and int(rid) <= int(previous):
            problems.append(f"{rid}: does not sort after {previous}")
        if rev.down_revision != previous:
            problems.append(f"{rid}: revises {rev.down_revision!r}, expected {previous!r}")

        for fn in ("upgrade", "downgrade"):
            if not callable(getattr(rev.module, fn, None)):
                problems.append(f"{rid}: missing {fn}()")
        if getattr(rev.module, "destructive_downgrade", False) and not callable(
            getattr(rev.module, "count_downgrade_losses", None)
        ):
            problems.append(f"{rid}: lossy downgrade without count_downgrade_losses()")
        previous = rid

    return problems
