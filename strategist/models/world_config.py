from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Mapping, Sequence, Union


class ResourceType(str, Enum):
    HYDROGEN = "H"
    OXYGEN = "O"
    UTRIUM = "U"
    LEMERGIUM = "L"
    KEANIUM = "K"
    ZYNTHIUM = "Z"
    CATALYST = "X"


class Autonomy(str, Enum):
    MANUAL = "manual"
    SEMI_AUTOMATIC = "semiautomatic"
    AUTOMATIC = "automatic"


class NotifyLevel(str, Enum):
    INFO = "info"
    ALERT = "alert"


# ---------- Suitability cache entries ----------


@dataclass(frozen=True)
class Scored:
    score: float


@dataclass(frozen=True)
class Pending:
    """Surveying has not evaluated this site yet."""


@dataclass(frozen=True)
class Rejected:
    """Surveying looked at this site and ruled it out."""


CacheEntry = Union[Scored, Pending, Rejected]


@dataclass(frozen=True)
class SiteMetadata:
    resource_type: Optional[ResourceType] = None
    hostile: bool = False


@dataclass
class Site:
    site_id: str  # coordinate-encoded room name, e.g. "W5N3"
    resource_type: Optional[ResourceType] = None
    hostile: bool = False  # maintained by scouting, avoid neighbourhood
    available: bool = True  # platform allows claiming right now

    @property
    def metadata(self) -> SiteMetadata:
        return SiteMetadata(resource_type=self.resource_type, hostile=self.hostile)


@dataclass
class Colony:
    home_site_id: str
    tier: int  # controller level gating expansion sponsorship
    # raw persisted values (number | bool) or parsed CacheEntry variants
    expansion_cache: Mapping[str, object] = field(default_factory=dict)
    active_expansion_operations: Sequence[str] = field(default_factory=list)


@dataclass(frozen=True)
class Position:
    site_id: str
    x: int = 25
    y: int = 25

    def __str__(self) -> str:
        return f"{self.site_id}:{self.x},{self.y}"


@dataclass(frozen=True)
class ExpansionCandidate:
    """Best viable candidate for one sponsoring colony."""

    site_id: str
    adjusted_score: float
    colony_id: Optional[str] = None  # home site of the sponsor


@dataclass(frozen=True)
class ExpansionDecision:
    """Single best candidate across all colonies for this pass."""

    site_id: str
    score: float
    colony_id: Optional[str] = None


@dataclass
class Directive:
    """An expansion operation registered at a concrete position."""

    kind: str  # "colonize"
    position: Position
    created_tick: Optional[int] = None
