"""Exception taxonomy for the scanning pipeline.

Fatal failures are exceptions. Non-fatal conditions (a structural check that
could not run, a violation without a database match) are recorded on the
scan result instead; see ``Degradation`` and ``EnrichedReport.resolution``.
"""

from __future__ import annotations


class RegscanError(Exception):
    """Base class for all regscan errors."""


class LaunchError(RegscanError):
    """The browser process could not be started."""


class NavigationError(RegscanError):
    """Every navigation attempt failed."""

    def __init__(self, url: str, attempts: int, message: str):
        super().__init__(f"Navigation to {url} failed after {attempts} attempt(s): {message}")
        self.url = url
        self.attempts = attempts


class RuleEngineError(RegscanError):
    """The accessibility rule engine could not evaluate the page."""


class ScanError(RegscanError):
    """A scan was aborted; ``cause`` holds the most specific failure."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause
