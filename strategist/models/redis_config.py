from pydantic import RedisDsn
from pydantic_settings import BaseSettings, SettingsConfigDict


class RedisSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="")

    redis_url: RedisDsn = "redis://localhost:6379/0"  # type: ignore[assignment]
    tick_stream: str = "world:ticks"
    directive_stream: str = "strategist:directives"
    notify_stream: str = "strategist:notifications"
    snapshot_key: str = "strategist:snapshot"


REDIS_SETTINGS = RedisSettings()
