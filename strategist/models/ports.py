"""Collaborator ports consumed by the expansion logic.

Concrete adapters live in strategist.helper.cartographer, strategist.state_utils,
strategist.directives and strategist.notify. Tests supply in-memory doubles.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from strategist.models.world_config import (
    Autonomy,
    Colony,
    NotifyLevel,
    Position,
    SiteMetadata,
)


class SiteGraphService(Protocol):
    def find_sites_in_range(self, site_id: str, distance: int) -> set[str]:
        """Sites within `distance` hops of site_id, site_id included."""
        ...


class WorldState(Protocol):
    def is_site_available(self, site_id: str) -> bool: ...

    def site_metadata(self, site_id: str) -> SiteMetadata: ...

    def owned_site_count(self) -> int: ...

    def expansion_capacity_limit(self) -> int: ...

    def platform_id(self) -> str: ...

    def autonomy_level(self) -> Autonomy: ...


class ColonyRegistry(Protocol):
    def all_colonies(self) -> Sequence[Colony]: ...


class AnchorPlanner(Protocol):
    def resolve_anchor_position(self, site_id: str) -> Position: ...


class OperationRegistry(Protocol):
    def create_if_absent(self, position: Position, kind: str) -> bool:
        """Register an operation unless an equivalent one exists. True if created."""
        ...


class Notifier(Protocol):
    def notify(self, level: NotifyLevel, message: str) -> None: ...
