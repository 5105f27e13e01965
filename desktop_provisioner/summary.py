from __future__ import annotations

from typing import List

from .pipeline import RunResult, StepStatus

RULE = "=" * 77

_MARKS = {
    StepStatus.SUCCEEDED: "ok",
    StepStatus.SKIPPED: "skip",
    StepStatus.FAILED: "FAIL",
    StepStatus.PENDING: "-",
}


def format_summary(result: RunResult) -> str:
    lines: List[str] = [
        "",
        RULE,
        "Installation Summary".center(77).rstrip(),
        RULE,
        f"Log file location: {result.log_path}",
        f"Steps run: {result.total} "
        f"({len(result.ran_steps)} executed, {len(result.skipped_steps)} already satisfied)",
        f"Total errors encountered: {result.error_count}",
        "",
    ]
    for o in result.outcomes:
        line = f"  [{_MARKS[o.status]:>4}] {o.step_id}"
        if o.status is StepStatus.FAILED and o.detail:
            line += f": {o.detail.splitlines()[0]}"
        lines.append(line)
    lines.append("")

    if result.succeeded:
        lines.append("All steps completed successfully!")
    else:
        lines.append(f"{result.error_count} step(s) failed. See {result.log_path} for details.")

    lines += [
        "",
        "Next steps:",
        f"  1. Review log file: less {result.log_path}",
        "  2. Change default shell: chsh -s $(which zsh)",
        "  3. Re-login for libvirt group membership to take effect",
        "  4. Reboot for all changes to take effect",
        RULE,
    ]
    return "\n".join(lines)
