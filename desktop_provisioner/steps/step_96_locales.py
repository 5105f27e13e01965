from __future__ import annotations

import re
from pathlib import Path

from ..context import StepContext
from ..pipeline import StepFailed

LOCALE_GEN = "/etc/locale.gen"


def normalize_locale(name: str) -> str:
    """fr_CH.UTF-8 and fr_CH.utf8 compare equal."""
    return re.sub(r"[-_.]", "", name).lower()


class ModifyLocalesStep:
    step_id = "96_locales"
    description = "Enable and generate extra locales"

    def is_satisfied(self, ctx: StepContext) -> bool:
        r = ctx.runner.query(["locale", "-a"])
        available = {normalize_locale(l) for l in r.stdout.split()}
        return all(normalize_locale(l) in available for l in ctx.cfg.locales)

    def run(self, ctx: StepContext) -> None:
        try:
            text = Path(LOCALE_GEN).read_text(encoding="utf-8")
        except OSError as e:
            raise StepFailed(f"Cannot read {LOCALE_GEN}: {e}") from e

        for loc in ctx.cfg.locales:
            if loc not in text:
                raise StepFailed(f"{loc} locale not found in {LOCALE_GEN}")
            pattern = loc.replace(".", r"\.")
            ctx.runner.run(ctx.as_root(["sed", "-i", f"s/^# *{pattern}/{loc}/", LOCALE_GEN]))

        ctx.runner.run(ctx.as_root(["locale-gen"]))
