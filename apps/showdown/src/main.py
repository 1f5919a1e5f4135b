"""
Entrypoint for the showdown run (ingestion, then query benchmark).
"""

import sys

from apps.showdown.src.service import ShowdownService
from libs.observability import get_logger


def main() -> int:
    """
    Build the service and run it to completion.

    Returns the process exit status: 0 on success, 1 if startup or any phase failed.
    """
    try:
        service = ShowdownService()
    except Exception:
        get_logger("showdown").exception("Startup failed")
        return 1

    try:
        service.run_sync()
    except RuntimeError:
        # run_sync already logged the failure with its traceback
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
