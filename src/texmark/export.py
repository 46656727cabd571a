"""PDF export through a headless Chrome/Chromium.

The HTML page is written next to the requested PDF, printed with
``--print-to-pdf`` and removed again. Page size, orientation and margins
come from the page's own ``@page`` rule (see texmark.document).

The virtual time budget gives KaTeX auto-render time to finish before the
page is printed.

"""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

from texmark.errors import ExportError
from texmark.utils.logger import get_logger

logger = get_logger(__name__)

BROWSER_ENV_VAR = "CHROME_PATH"

BROWSER_NAMES = (
    "google-chrome",
    "google-chrome-stable",
    "chromium",
    "chromium-browser",
    "chrome",
    "msedge",
)

DEFAULT_TIMEOUT = 120.0
VIRTUAL_TIME_BUDGET_MS = 10_000


def find_browser() -> Path | None:
    """Locate a Chrome-compatible browser.

    ``CHROME_PATH`` wins when it points at an existing file; otherwise the
    first of BROWSER_NAMES found on PATH.
    """
    from_env = os.environ.get(BROWSER_ENV_VAR)
    if from_env and Path(from_env).is_file():
        return Path(from_env)
    for name in BROWSER_NAMES:
        found = shutil.which(name)
        if found:
            return Path(found)
    return None


def browser_command(browser: Path, html_path: Path, output_path: Path) -> list[str]:
    return [
        str(browser),
        "--headless",
        "--no-sandbox",
        "--disable-gpu",
        "--disable-dev-shm-usage",
        "--disable-extensions",
        "--no-pdf-header-footer",
        f"--virtual-time-budget={VIRTUAL_TIME_BUDGET_MS}",
        f"--print-to-pdf={output_path}",
        html_path.resolve().as_uri(),
    ]


def print_pdf(
    html: str,
    output_path: str | os.PathLike[str],
    *,
    browser: str | os.PathLike[str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Path:
    """Print an HTML document to PDF.

    Args:
        html: Complete HTML document
        output_path: Where to write the PDF
        browser: Browser executable (searched for if None)
        timeout: Seconds to wait for the browser

    Returns:
        Path of the written PDF

    Raises:
        ExportError: No browser, browser failure, timeout, or no output
    """
    output = Path(output_path).resolve()
    executable = Path(browser) if browser is not None else find_browser()
    if executable is None:
        raise ExportError(f"no Chrome/Chromium found; set {BROWSER_ENV_VAR} or pass a browser path")

    html_path = output.with_suffix(".html")
    html_path.write_text(html, encoding="utf-8")
    command = browser_command(executable, html_path, output)
    logger.info("Printing %s with %s", html_path.name, executable)
    try:
        result = subprocess.run(command, capture_output=True, text=True, timeout=timeout, check=False)
    except subprocess.TimeoutExpired as e:
        raise ExportError(f"browser timed out after {timeout:g}s") from e
    except OSError as e:
        raise ExportError(f"could not start browser {executable}: {e}") from e
    finally:
        html_path.unlink(missing_ok=True)

    if result.returncode != 0:
        logger.debug("Browser stderr: %s", result.stderr)
        raise ExportError("browser failed to print PDF", returncode=result.returncode)
    if not output.is_file():
        raise ExportError(f"browser reported success but {output} was not written")
    return output
