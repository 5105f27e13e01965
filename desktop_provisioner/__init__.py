"""Desktop provisioner (best-effort, step-driven).

Core design goals:
- Ordered, idempotent steps
- A failing step never stops the run
- Every failure is logged and counted for the final summary
- External commands go through one injectable runner
"""

__version__ = "0.3.0"

__all__ = ["__version__"]
