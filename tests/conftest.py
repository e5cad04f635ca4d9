"""Shared test doubles for the strategist tests.

Sites use real coordinate-encoded names so distances come from the
Cartographer. Around the home site W5N5:
- W7N5 is 2 sites away (inside the exclusion zone)
- W8N5 is 3 sites away (too-close penalty ring)
- W9N5 and beyond are clear
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

import pytest

from strategist.directives import DirectiveRegistry
from strategist.errors import UnknownSiteError
from strategist.helper.cartographer import Cartographer
from strategist.models import (
    Autonomy,
    Colony,
    NotifyLevel,
    Position,
    ResourceType,
    SiteMetadata,
)
from strategist.strategist import Strategist


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: List[tuple[NotifyLevel, str]] = []

    def notify(self, level: NotifyLevel, message: str) -> None:
        self.messages.append((level, message))


class SpyGraph(Cartographer):
    def __init__(self) -> None:
        self.queries: List[tuple[str, int]] = []

    def find_sites_in_range(self, site_id: str, distance: int) -> set[str]:
        self.queries.append((site_id, distance))
        return super().find_sites_in_range(site_id, distance)

    @property
    def queried_sites(self) -> set[str]:
        return {site_id for site_id, _ in self.queries}


class FakeWorld:
    """In-memory world state, colony registry and anchor planner."""

    def __init__(
        self,
        colonies: Sequence[Colony] = (),
        resources: Optional[Dict[str, ResourceType]] = None,
        hostile: Iterable[str] = (),
        unavailable: Iterable[str] = (),
        unknown: Iterable[str] = (),
        owned_count: Optional[int] = None,
        capacity_limit: int = 10,
        platform: str = "shard0",
        autonomy: Autonomy = Autonomy.AUTOMATIC,
    ) -> None:
        self.colonies = list(colonies)
        self.resources = dict(resources or {})
        self.hostile = set(hostile)
        self.unavailable = set(unavailable)
        self.unknown = set(unknown)
        self.owned_count = len(self.colonies) if owned_count is None else owned_count
        self.capacity_limit = capacity_limit
        self.platform = platform
        self.autonomy = autonomy
        self.colony_calls = 0
        self.anchor_calls: List[str] = []

    def _check(self, site_id: str) -> None:
        if site_id in self.unknown:
            raise UnknownSiteError(site_id)

    def is_site_available(self, site_id: str) -> bool:
        self._check(site_id)
        return site_id not in self.unavailable

    def site_metadata(self, site_id: str) -> SiteMetadata:
        self._check(site_id)
        return SiteMetadata(
            resource_type=self.resources.get(site_id),
            hostile=site_id in self.hostile,
        )

    def owned_site_count(self) -> int:
        return self.owned_count

    def expansion_capacity_limit(self) -> int:
        return self.capacity_limit

    def platform_id(self) -> str:
        return self.platform

    def autonomy_level(self) -> Autonomy:
        return self.autonomy

    def all_colonies(self) -> Sequence[Colony]:
        self.colony_calls += 1
        return self.colonies

    def resolve_anchor_position(self, site_id: str) -> Position:
        self.anchor_calls.append(site_id)
        self._check(site_id)
        return Position(site_id=site_id, x=20, y=30)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def graph() -> SpyGraph:
    return SpyGraph()


@pytest.fixture
def make_strategist(graph: SpyGraph, notifier: RecordingNotifier):
    def _make(world: FakeWorld, registry: Optional[DirectiveRegistry] = None):
        registry = registry if registry is not None else DirectiveRegistry()
        strategist = Strategist(
            graph=graph,
            world=world,
            colonies=world,
            planner=world,
            operations=registry,
            notifier=notifier,
        )
        return strategist, registry

    return _make
