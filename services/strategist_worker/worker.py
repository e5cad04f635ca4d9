#!/usr/bin/env python3
"""
Strategist worker: the cadence driver for expansion decisions.

Waits for tick notifications on the world event stream, loads the latest
snapshot, runs one Strategist pass per new tick and publishes any new
expansion directives and notifications back to Redis.
"""
from __future__ import annotations

import asyncio
import signal
from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from strategist.directives import DirectiveRegistry
from strategist.errors import SnapshotError
from strategist.helper.cartographer import Cartographer
from strategist.infra.redis_streams import RedisStreams
from strategist.models import Directive, ExpansionDecision
from strategist.notify import BufferedNotifier, Notification
from strategist.state_utils import (
    decision_payload,
    directive_payload,
    notification_payload,
    world_from_snapshot,
)
from strategist.strategist import Strategist


class WorkerConfig(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=False)

    tick_block_ms: int = Field(default=1000, alias="TICK_BLOCK_MS")
    tick_batch: int = Field(default=50, alias="TICK_BATCH")
    stream_maxlen: int = Field(default=5000, alias="STREAM_MAXLEN")
    idle_delay: float = Field(default=0.5, alias="WORKER_IDLE_DELAY")
    # published directives the snapshot has not picked up expire after this many ticks
    directive_ttl_ticks: int = Field(default=2000, alias="DIRECTIVE_TTL_TICKS")


_CONFIG = WorkerConfig()


@dataclass
class PassResult:
    tick: int
    decision: Optional[ExpansionDecision] = None
    directives: List[Directive] = field(default_factory=list)
    notifications: List[Notification] = field(default_factory=list)
    # published directives the world has not confirmed yet, new ones included
    outstanding: List[Directive] = field(default_factory=list)


def outstanding_directives(
    published: List[Directive],
    operations: List[Directive],
    tick: int,
    ttl_ticks: Optional[int] = None,
) -> List[Directive]:
    """
    Published directives still waiting for the world to list them.
    Confirmed ones are dropped (the snapshot now carries them) and so are
    those older than ttl_ticks.
    """
    ttl = _CONFIG.directive_ttl_ticks if ttl_ticks is None else ttl_ticks
    confirmed = DirectiveRegistry(existing=operations)
    out: List[Directive] = []
    for directive in published:
        if (directive.kind, directive.position) in confirmed:
            continue
        if directive.created_tick is not None and tick - directive.created_tick >= ttl:
            continue
        out.append(directive)
    return out


def run_pass(
    snapshot: dict, published: List[Directive], tick: Optional[int] = None
) -> PassResult:
    """
    One strategist pass over a snapshot. Directives listed in the snapshot or
    still outstanding from earlier passes are never created again.
    tick overrides the snapshot's own tick (the tick event that woke the worker).
    """
    world = world_from_snapshot(snapshot)
    if tick is not None:
        world.tick = tick
    pending = outstanding_directives(published, world.operations, world.tick)
    registry = DirectiveRegistry(existing=[*world.operations, *pending])
    registry.current_tick = world.tick
    notifier = BufferedNotifier()
    notifier.current_tick = world.tick

    strategist = Strategist(
        graph=Cartographer(),
        world=world,
        colonies=world,
        planner=world,
        operations=registry,
        notifier=notifier,
    )
    decision = strategist.run(world.tick)
    directives = registry.drain_new()
    return PassResult(
        tick=world.tick,
        decision=decision,
        directives=directives,
        notifications=notifier.drain(),
        outstanding=[*pending, *directives],
    )


class StrategistWorker:
    def __init__(self, streams: Optional[RedisStreams] = None) -> None:
        self.streams = streams or RedisStreams()
        self._stop = asyncio.Event()
        self._last_tick = -1
        self._last_tick_id = "$"
        self._published: List[Directive] = []

    async def _publish(self, result: PassResult) -> None:
        maxlen = _CONFIG.stream_maxlen
        for directive in result.directives:
            payload = directive_payload(directive)
            if result.decision is not None:
                payload["decision"] = decision_payload(result.decision, result.tick)
            await self.streams.append_directive(payload, maxlen=maxlen)
        for note in result.notifications:
            await self.streams.append_notification(
                notification_payload(note), maxlen=maxlen
            )

    async def pass_once(self, event: Optional[dict] = None) -> Optional[PassResult]:
        """
        Run one pass for a tick event. The event's tick wins over the
        snapshot's, so a world that has already moved on does not skip it.
        """
        snapshot = await self.streams.load_snapshot()
        if not snapshot:
            return None
        raw_tick = (event or {}).get("tick")
        tick = int(raw_tick) if raw_tick is not None else int(snapshot.get("tick", 0))
        if tick < self._last_tick:
            # world restarted; previous directives belong to the old universe
            print(f"[strategist-worker] tick went back to {tick}; resetting state")
            self._published = []
        elif tick == self._last_tick:
            return None
        self._last_tick = tick
        try:
            result = run_pass(snapshot, self._published, tick=tick)
        except SnapshotError as exc:
            print(f"[strategist-worker] skipping tick {tick}: {exc}")
            return None
        await self._publish(result)
        self._published = result.outstanding
        return result

    async def run(self) -> None:
        print(f"[strategist-worker] watching {self.streams.tick_stream}")
        try:
            while not self._stop.is_set():
                try:
                    entries = await self.streams.read_ticks(
                        last_id=self._last_tick_id,
                        count=_CONFIG.tick_batch,
                        block_ms=_CONFIG.tick_block_ms,
                    )
                    if not entries:
                        await asyncio.sleep(_CONFIG.idle_delay)
                        continue
                    # every tick event gets its own pass, in stream order
                    for message_id, event in entries:
                        self._last_tick_id = message_id
                        await self.pass_once(event)
                except Exception as exc:  # pragma: no cover - background safety
                    print(f"[strategist-worker] error during pass: {exc}")
                    await asyncio.sleep(_CONFIG.idle_delay)
        finally:
            try:
                await self.streams.close()
                await self.streams.client.connection_pool.disconnect()  # type: ignore[attr-defined]
            except Exception:
                pass
            print("[strategist-worker] stopping loop")

    def stop(self) -> None:
        self._stop.set()


async def main() -> None:
    worker = StrategistWorker()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, worker.stop)

    await worker.run()


if __name__ == "__main__":
    asyncio.run(main())
