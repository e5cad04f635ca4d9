from .strategy_config import STRATEGY_CONFIG
from .redis_config import REDIS_SETTINGS
from .world_config import (
    Autonomy,
    CacheEntry,
    Colony,
    Directive,
    ExpansionCandidate,
    ExpansionDecision,
    NotifyLevel,
    Pending,
    Position,
    Rejected,
    ResourceType,
    Scored,
    Site,
    SiteMetadata,
)

__all__ = [
    "STRATEGY_CONFIG",
    "REDIS_SETTINGS",
    "Autonomy",
    "CacheEntry",
    "Colony",
    "Directive",
    "ExpansionCandidate",
    "ExpansionDecision",
    "NotifyLevel",
    "Pending",
    "Position",
    "Rejected",
    "ResourceType",
    "Scored",
    "Site",
    "SiteMetadata",
]
