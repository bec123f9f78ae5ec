"""Static checks for the reference data Alembic revision files.

Usage:
    python scripts/check_migration_chain.py

A revision file must be named ``<revision>_<slug>.py`` and the chain must
form a single line of history ending in one head.
"""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional

VERSIONS_DIR = Path(__file__).resolve().parents[1] / "alembic" / "versions"

REVISION_RE = re.compile(r'^revision\s*=\s*["\']([^"\']+)["\']', re.MULTILINE)
DOWN_RE = re.compile(r'^down_revision\s*=\s*(?:["\']([^"\']+)["\']|None)', re.MULTILINE)


class Revision(NamedTuple):
    revision: str
    down_revision: Optional[str]
    path: Path


def read_revisions(versions_dir: Path = VERSIONS_DIR) -> List[Revision]:
    revisions = []
    for path in sorted(versions_dir.glob("*.py")):
        text = path.read_text(encoding="utf-8")
        rev = REVISION_RE.search(text)
        down = DOWN_RE.search(text)
        revisions.append(
            Revision(
                revision=rev.group(1) if rev else "",
                down_revision=down.group(1) if down else None,
                path=path,
            )
        )
    return revisions


def check_chain(revisions: List[Revision]) -> List[str]:
    """Returns the list of problems found; empty when the chain is sound."""
    errors: List[str] = []
    by_id: Dict[str, Revision] = {}

    for rev in revisions:
        if not rev.revision:
            errors.append(f"{rev.path.name}: missing revision")
            continue
        if not rev.path.name.startswith(f"{rev.revision}_"):
            errors.append(f"{rev.path.name}: file name does not start with revision id {rev.revision}")
        if rev.revision in by_id:
            errors.append(f"duplicate revision id {rev.revision} in {rev.path.name} and {by_id[rev.revision].path.name}")
        by_id[rev.revision] = rev

    roots = [r.revision for r in by_id.values() if r.down_revision is None]
    if len(roots) > 1:
        errors.append(f"expected one root revision, found {roots}")

    for rev in by_id.values():
        if rev.down_revision is not None and rev.down_revision not in by_id:
            errors.append(f"revision {rev.revision} references missing down_revision {rev.down_revision}")

    referenced = {r.down_revision for r in by_id.values() if r.down_revision}
    heads = sorted(r for r in by_id if r not in referenced)
    if by_id and len(heads) != 1:
        errors.append(f"expected exactly one head revision, found {heads}")
    return errors


def main() -> int:
    revisions = read_revisions()
    errors = check_chain(revisions)

    print("Reference data migration chain")
    print(f"- revisions: {len(revisions)}")
    for err in errors:
        print(f"[FAIL] {err}")
    if errors:
        return 1
    print("[PASS] single linear history")
    return 0


if __name__ == "__main__":
    sys.exit(main())
