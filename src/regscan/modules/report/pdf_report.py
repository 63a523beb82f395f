"""PDF export through a headless browser."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from regscan.modules.browser import DriverConfig, SessionDriver

logger = logging.getLogger(__name__)

PDF_OPTIONS = {
    "format": "A4",
    "print_background": True,
    "margin": {"top": "0px", "right": "0px", "bottom": "0px", "left": "0px"},
}


async def export_pdf(
    html: str,
    output_path: Path,
    driver_factory: Callable[[DriverConfig], SessionDriver] = SessionDriver,
) -> Path:
    """Render ``html`` to an A4 PDF at ``output_path``; the browser is always closed."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    async with driver_factory(DriverConfig(headless=True)) as driver:
        await driver.page.set_content(html, wait_until="domcontentloaded", timeout=60_000)
        await driver.page.pdf(path=str(output_path), **PDF_OPTIONS)
    logger.debug("Wrote PDF report to %s", output_path)
    return output_path
