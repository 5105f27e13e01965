from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..context import StepContext

logger = logging.getLogger(__name__)


def clone_or_pull(
    ctx: StepContext,
    url: str,
    dest: str | Path,
    *,
    branch: Optional[str] = None,
    depth: Optional[int] = None,
) -> Path:
    """Clone url into dest, or pull if dest is already a checkout.

    A failed pull is tolerated (the existing checkout is still usable);
    a failed clone raises.
    """

    d = Path(dest)
    if (d / ".git").exists():
        logger.info("%s exists, pulling updates", d)
        r = ctx.runner.run(["git", "pull"], cwd=str(d), check=False)
        if not r.ok:
            logger.warning("git pull failed in %s", d)
        return d

    argv = ["git", "clone", url]
    if branch:
        argv.append(f"--branch={branch}")
    if depth:
        argv.append(f"--depth={depth}")
    argv.append(str(d))
    d.parent.mkdir(parents=True, exist_ok=True)
    ctx.runner.run(argv)
    return d


def clone_repo(ctx: StepContext, repo: dict, dest: str | Path) -> Path:
    """clone_or_pull driven by a repos.<name> config mapping."""
    depth = repo.get("depth")
    return clone_or_pull(
        ctx,
        str(repo["url"]),
        dest,
        branch=repo.get("branch"),
        depth=int(depth) if depth else None,
    )
