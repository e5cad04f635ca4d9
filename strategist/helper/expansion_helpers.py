from __future__ import annotations

import math
from typing import Iterator, Mapping, Optional, Sequence, Tuple

# strategy config import
from strategist.models import STRATEGY_CONFIG
from strategist.models import Colony, CacheEntry, Pending, Rejected, ResourceType, Scored
from strategist.models.ports import WorldState
from strategist.errors import UnknownSiteError
from strategist.helper.cartographer import normalize_site_name

# strategy config variable mapping
EXPANSION_CFG = STRATEGY_CONFIG.expansion_modifiers
MIN_EXPANSION_DISTANCE: int = EXPANSION_CFG.minimum_expansion_distance
UNOWNED_MINERAL_BONUS: float = EXPANSION_CFG.unowned_mineral_bonus
CATALYST_BONUS: float = EXPANSION_CFG.catalyst_bonus
# upper bound on what bonuses can add to a raw score
MAX_POSSIBLE_BONUS: float = UNOWNED_MINERAL_BONUS + CATALYST_BONUS
TOO_CLOSE_PENALTY: float = EXPANSION_CFG.too_close_penalty
CATALYST_RESOURCE: ResourceType = EXPANSION_CFG.catalyst_resource
REQUIRED_TIER: int = EXPANSION_CFG.required_tier


def parse_cache_entry(raw: object) -> Optional[CacheEntry]:
    """
    Map a persisted suitability value onto a cache entry.
    Numbers are scores, True means not yet surveyed, False means rejected.
    Anything else (strings, NaN, None) is malformed and returns None.
    """
    if isinstance(raw, (Scored, Pending, Rejected)):
        return raw
    if isinstance(raw, bool):
        return Pending() if raw else Rejected()
    if isinstance(raw, (int, float)):
        if not math.isfinite(raw):
            return None
        return Scored(float(raw))
    return None


def scored_entries(cache: Mapping[str, object]) -> Iterator[Tuple[str, float]]:
    """
    Yield (site_id, raw_score) for scored entries, ordered by canonical site id.
    """
    named = sorted(
        ((normalize_site_name(key), value) for key, value in cache.items()),
        key=lambda item: item[0],
    )
    for site_id, raw in named:
        entry = parse_cache_entry(raw)
        if isinstance(entry, Scored):
            yield site_id, entry.score


def home_sites(colonies: Sequence[Colony]) -> set[str]:
    return {normalize_site_name(col.home_site_id) for col in colonies}


def owned_resource_types(
    colonies: Sequence[Colony], world: WorldState
) -> set[ResourceType]:
    owned: set[ResourceType] = set()
    for col in colonies:
        try:
            resource = world.site_metadata(col.home_site_id).resource_type
        except UnknownSiteError:
            continue
        if resource is not None:
            owned.add(resource)
    return owned


def resource_bonus(
    resource: Optional[ResourceType], owned: set[ResourceType]
) -> float:
    """Unowned and catalyst bonuses are independent; both may apply."""
    if resource is None:
        return 0.0
    bonus = 0.0
    if resource not in owned:
        bonus += UNOWNED_MINERAL_BONUS
    if resource == CATALYST_RESOURCE:
        bonus += CATALYST_BONUS
    return bonus
