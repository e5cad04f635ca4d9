#!/usr/bin/env python3
"""
Lightweight Redis Streams helper for the strategist worker.

Provides a thin wrapper around redis.asyncio for:
- reading tick notifications from the world event stream
- loading the latest world snapshot from a hash
- appending directives and notifications to their output streams
"""
from __future__ import annotations

import json
from typing import Any, Optional

from redis import asyncio as aioredis

from strategist.models import REDIS_SETTINGS


class RedisStreams:
    def __init__(
        self,
        url: str | None = None,
        tick_stream: str | None = None,
        directive_stream: str | None = None,
        notify_stream: str | None = None,
        snapshot_key: str | None = None,
    ) -> None:
        self.url = url or str(REDIS_SETTINGS.redis_url)
        self.tick_stream = tick_stream or REDIS_SETTINGS.tick_stream
        self.directive_stream = directive_stream or REDIS_SETTINGS.directive_stream
        self.notify_stream = notify_stream or REDIS_SETTINGS.notify_stream
        self.snapshot_key = snapshot_key or REDIS_SETTINGS.snapshot_key
        # decode_responses=True so we deal with str, not bytes
        self._redis = aioredis.from_url(self.url, decode_responses=True)

    @property
    def client(self):
        return self._redis

    async def close(self) -> None:
        await self._redis.close()

    # --- Tick helpers ---
    async def read_ticks(
        self,
        last_id: str = "$",
        count: int = 50,
        block_ms: int | None = None,
    ) -> list[tuple[str, dict]]:
        """
        Read tick notifications after last_id.
        Use last_id="$" to block for new entries only.
        """
        entries = await self._redis.xread(
            streams={self.tick_stream: last_id},
            count=count,
            block=block_ms,
        )
        if not entries:
            return []
        out: list[tuple[str, dict]] = []
        for _, messages in entries:
            for message_id, fields in messages:
                payload_raw = fields.get("data")
                payload = json.loads(payload_raw) if payload_raw else {}
                out.append((message_id, payload))
        return out

    # --- Output helpers ---
    async def _append(self, stream: str, payload: dict, maxlen: Optional[int]) -> str:
        args: dict[str, Any] = {"data": json.dumps(payload)}
        return await self._redis.xadd(
            name=stream,
            fields=args,
            maxlen=maxlen,
            approximate=True,
        )

    async def append_directive(self, payload: dict, maxlen: Optional[int] = None) -> str:
        """
        Append a directive to the directive stream. Uses field name 'data' to store JSON.
        """
        return await self._append(self.directive_stream, payload, maxlen)

    async def append_notification(
        self, payload: dict, maxlen: Optional[int] = None
    ) -> str:
        return await self._append(self.notify_stream, payload, maxlen)

    # --- Snapshot helpers ---
    async def load_snapshot(self) -> Optional[dict]:
        data = await self._redis.hget(self.snapshot_key, "data")
        if not data:
            return None
        return json.loads(data)
