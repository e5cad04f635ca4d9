#!/usr/bin/env python3
from __future__ import annotations

import re
from typing import Tuple

from strategist.errors import UnknownSiteError

# Site names encode grid coordinates: "W5N3", "E0S12".
# East/south count up from 0; west/north count down from -1.
_SITE_NAME = re.compile(r"^([WE])(\d+)([NS])(\d+)$")


def parse_site_name(site_id: str) -> Tuple[int, int]:
    match = _SITE_NAME.match(site_id.strip().upper()) if isinstance(site_id, str) else None
    if match is None:
        raise UnknownSiteError(site_id)
    horizontal, x_raw, vertical, y_raw = match.groups()
    x = int(x_raw) if horizontal == "E" else -int(x_raw) - 1
    y = int(y_raw) if vertical == "S" else -int(y_raw) - 1
    return x, y


def format_site_name(x: int, y: int) -> str:
    horizontal = f"E{x}" if x >= 0 else f"W{-x - 1}"
    vertical = f"S{y}" if y >= 0 else f"N{-y - 1}"
    return horizontal + vertical


def canonical_site_name(site_id: str) -> str:
    """Canonical spelling of a site name, e.g. "w05n5" -> "W5N5"."""
    return format_site_name(*parse_site_name(site_id))


def normalize_site_name(site_id: str) -> str:
    """Canonical spelling when site_id is a site name, otherwise unchanged."""
    try:
        return canonical_site_name(site_id)
    except UnknownSiteError:
        return site_id


def site_distance(a: str, b: str) -> int:
    """Linear (Chebyshev) distance in sites between two site names."""
    ax, ay = parse_site_name(a)
    bx, by = parse_site_name(b)
    return max(abs(ax - bx), abs(ay - by))


class Cartographer:
    """Site graph over the coordinate-encoded site grid."""

    def find_sites_in_range(self, site_id: str, distance: int) -> set[str]:
        if distance < 0:
            raise ValueError("distance must be non-negative")
        cx, cy = parse_site_name(site_id)
        return {
            format_site_name(cx + dx, cy + dy)
            for dx in range(-distance, distance + 1)
            for dy in range(-distance, distance + 1)
        }
