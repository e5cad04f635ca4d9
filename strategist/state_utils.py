#!/usr/bin/env python3
"""
Helpers for turning a published world snapshot into the read-only views the
strategist consumes, and for building payloads published back to Redis.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from strategist.errors import SnapshotError
from strategist.helper.cartographer import canonical_site_name, normalize_site_name
from strategist.models import STRATEGY_CONFIG
from strategist.models import (
    Autonomy,
    Colony,
    Directive,
    ExpansionDecision,
    Position,
    ResourceType,
    Site,
    SiteMetadata,
)
from strategist.notify import Notification

ANCHOR_X: int = STRATEGY_CONFIG.anchor_defaults.x
ANCHOR_Y: int = STRATEGY_CONFIG.anchor_defaults.y


def _field(obj: Any, key: str, default: Any = None) -> Any:
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)


def _resource(raw: Any) -> Optional[ResourceType]:
    if raw in (None, ""):
        return None
    try:
        return ResourceType(raw)
    except ValueError:
        return None


class SnapshotWorld:
    """
    World state, colony registry and anchor planner backed by one snapshot.
    Site ids are kept in canonical spelling. Sites missing from the snapshot
    are treated as unscouted: no resource, not hostile, not available.
    """

    def __init__(
        self,
        sites: Dict[str, Site],
        colonies: List[Colony],
        anchors: Dict[str, tuple[int, int]],
        capacity_limit: int,
        platform: str,
        autonomy: Autonomy,
        owned_count: Optional[int] = None,
        tick: int = 0,
        operations: Sequence[Directive] = (),
    ) -> None:
        self.sites = sites
        self.colonies = colonies
        self.anchors = anchors
        self.capacity_limit = capacity_limit
        self.platform = platform
        self.autonomy = autonomy
        self.owned_count = len(colonies) if owned_count is None else owned_count
        self.tick = tick
        self.operations = list(operations)

    # --- WorldState ---
    def is_site_available(self, site_id: str) -> bool:
        site = self.sites.get(canonical_site_name(site_id))
        return bool(site and site.available)

    def site_metadata(self, site_id: str) -> SiteMetadata:
        site = self.sites.get(canonical_site_name(site_id))
        if site is None:
            return SiteMetadata()
        return site.metadata

    def owned_site_count(self) -> int:
        return self.owned_count

    def expansion_capacity_limit(self) -> int:
        return self.capacity_limit

    def platform_id(self) -> str:
        return self.platform

    def autonomy_level(self) -> Autonomy:
        return self.autonomy

    # --- ColonyRegistry ---
    def all_colonies(self) -> Sequence[Colony]:
        return self.colonies

    # --- AnchorPlanner ---
    def resolve_anchor_position(self, site_id: str) -> Position:
        site_id = canonical_site_name(site_id)
        x, y = self.anchors.get(site_id, (ANCHOR_X, ANCHOR_Y))
        return Position(site_id=site_id, x=x, y=y)


def world_from_snapshot(snapshot: dict) -> SnapshotWorld:
    if "expansion_capacity_limit" not in snapshot:
        raise SnapshotError("snapshot has no expansion_capacity_limit")

    sites: Dict[str, Site] = {}
    anchors: Dict[str, tuple[int, int]] = {}
    for raw in snapshot.get("sites", []) or []:
        site_id = _field(raw, "id")
        if not site_id:
            continue
        site_id = normalize_site_name(site_id)
        sites[site_id] = Site(
            site_id=site_id,
            resource_type=_resource(_field(raw, "resource_type")),
            hostile=bool(_field(raw, "hostile", False)),
            available=bool(_field(raw, "available", True)),
        )
        anchor = _field(raw, "anchor")
        if anchor and len(anchor) == 2:
            anchors[site_id] = (int(anchor[0]), int(anchor[1]))

    operations: List[Directive] = []
    for raw in snapshot.get("operations", []) or []:
        site_id = _field(raw, "site_id")
        if not site_id:
            continue
        site_id = normalize_site_name(site_id)
        operations.append(
            Directive(
                kind=_field(raw, "kind", STRATEGY_CONFIG.operation_kind),
                position=Position(
                    site_id=site_id,
                    x=int(_field(raw, "x", ANCHOR_X)),
                    y=int(_field(raw, "y", ANCHOR_Y)),
                ),
                created_tick=_field(raw, "created_tick"),
            )
        )

    colonies: List[Colony] = []
    for raw in snapshot.get("colonies", []) or []:
        home = _field(raw, "home_site_id")
        if not home:
            continue
        colonies.append(
            Colony(
                home_site_id=normalize_site_name(home),
                tier=int(_field(raw, "tier", 0)),
                expansion_cache=dict(_field(raw, "expansion_cache", {}) or {}),
                active_expansion_operations=list(
                    _field(raw, "active_expansion_operations", []) or []
                ),
            )
        )

    autonomy_raw = snapshot.get("autonomy")
    autonomy = Autonomy(autonomy_raw) if autonomy_raw else STRATEGY_CONFIG.default_autonomy

    return SnapshotWorld(
        sites=sites,
        colonies=colonies,
        anchors=anchors,
        capacity_limit=int(snapshot["expansion_capacity_limit"]),
        platform=str(snapshot.get("platform_id", "")),
        autonomy=autonomy,
        owned_count=(
            int(snapshot["owned_site_count"])
            if snapshot.get("owned_site_count") is not None
            else None
        ),
        tick=int(snapshot.get("tick", 0)),
        operations=operations,
    )


# ---------- Payloads ----------


def decision_payload(decision: ExpansionDecision, tick: int) -> dict:
    return {
        "kind": "expansion_decision",
        "tick": tick,
        "site_id": decision.site_id,
        "score": decision.score,
        "colony_id": decision.colony_id,
    }


def directive_payload(directive: Directive) -> dict:
    return {
        "kind": directive.kind,
        "site_id": directive.position.site_id,
        "x": directive.position.x,
        "y": directive.position.y,
        "created_tick": directive.created_tick,
    }


def notification_payload(note: Notification) -> dict:
    return {
        "level": note.level.value,
        "message": note.message,
        "tick": note.tick,
    }
