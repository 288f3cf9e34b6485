import argparse
import logging
import os
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Sequence

from .analyze import analyze
from .data import fetch_report
from .errors import UptimeError
from .logging_utils import setup_logging
from .render import ERROR_LINE, render_html, render_text

logger = logging.getLogger(__name__)


def _env_flag(name: str) -> bool:
    value = os.getenv(name)
    if value is None:
        return False
    return value.strip().lower() not in {"", "0", "false", "no", "off"}


def run(source: str, html: Path | None = None) -> str:
    """Compute the uptime report for ``source`` and return it as text.

    When ``html`` is given the HTML page is written there as well.
    """
    start = time.monotonic()
    logger.info("Reading report from %s", source)
    rows = analyze(fetch_report(source))
    if html is not None:
        page = render_html(
            rows,
            updated=datetime.now().astimezone().isoformat(timespec="seconds"),
            elapsed=time.monotonic() - start,
        )
        html.parent.mkdir(parents=True, exist_ok=True)
        html.write_text(page, encoding="utf-8")
        logger.info("Wrote HTML report to %s", html)
    logger.info("Computed uptime for %d stations", len(rows))
    return render_text(rows)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Compute station uptime from a charger availability report"
    )
    parser.add_argument(
        "report",
        nargs="?",
        help="Path or http(s) URL of the report file",
    )
    parser.add_argument("--html", type=Path, help="Also write an HTML report here")
    parser.add_argument(
        "--debug",
        action="store_true",
        default=_env_flag("CHARGER_UPTIME_DEBUG"),
        help="Enable debug logging (default: CHARGER_UPTIME_DEBUG)",
    )
    args = parser.parse_args(argv)

    setup_logging(args.debug)

    if not args.report:
        logger.error("No report file given")
        print(ERROR_LINE)
        return 1

    try:
        output = run(args.report, args.html)
    except UptimeError as exc:
        logger.error("Uptime computation failed: %s", exc)
        print(ERROR_LINE)
        return 1
    except OSError as exc:
        logger.error("Could not write HTML report: %s", exc)
        print(ERROR_LINE)
        return 1

    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
