"""Error hierarchy for the strategist package.

The expansion logic itself never lets these escape a tick: an unknown site
only removes that candidate from consideration.
"""

from __future__ import annotations


class StrategistError(Exception):
    """Base error for strategist operations."""


class UnknownSiteError(StrategistError):
    """A collaborator has no record of the requested site.

    Attributes:
        site_id: The offending site identifier
    """

    def __init__(self, site_id: str) -> None:
        self.site_id = site_id
        super().__init__(f"Unknown site {site_id!r}")


class SnapshotError(StrategistError):
    """World snapshot payload is missing required data."""
