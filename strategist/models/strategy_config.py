import json
from pathlib import Path
from pydantic import BaseModel, NonNegativeInt, PositiveInt
from pydantic import Field  # type: ignore
from typing import Annotated

from .world_config import Autonomy, ResourceType

# # NOTE: Each service imports this module in its own process. The loaded config
# # lives in-process only; it is not shared across services or persisted.


class ExpansionModifiers(BaseModel):
    minimum_expansion_distance: PositiveInt
    unowned_mineral_bonus: float
    catalyst_bonus: float
    too_close_penalty: float
    catalyst_resource: ResourceType
    required_tier: PositiveInt


class CadenceModifiers(BaseModel):
    check_expansion_frequency: PositiveInt
    trigger_phase: NonNegativeInt


class PlatformLimits(BaseModel):
    restricted_platform_id: Annotated[str, Field(min_length=1)]
    restricted_platform_max_sites: PositiveInt


class AnchorDefaults(BaseModel):
    x: Annotated[int, Field(ge=0, le=49)]
    y: Annotated[int, Field(ge=0, le=49)]


class StrategySettings(BaseModel):
    expansion_modifiers: ExpansionModifiers
    cadence_modifiers: CadenceModifiers
    platform_limits: PlatformLimits
    anchor_defaults: AnchorDefaults
    default_autonomy: Autonomy
    operation_kind: Annotated[str, Field(min_length=1)]
    debug: bool = False

    @classmethod
    def load_json(cls, path: str | Path) -> "StrategySettings":
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.model_validate(data)


_BASE_DIR = Path(__file__).resolve().parents[1]
_CONFIG_PATH = _BASE_DIR / "config" / "strategy_config.json"

STRATEGY_CONFIG = StrategySettings.model_validate_json(
    _CONFIG_PATH.read_text(encoding="utf-8")
)
