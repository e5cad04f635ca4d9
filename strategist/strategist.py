#!/usr/bin/env python3
"""
High-level expansion decisions: when the network may grow and where to.
The worker in services/strategist_worker drives run() once per observed tick.
"""
from __future__ import annotations

from typing import Optional

from strategist.errors import UnknownSiteError
from strategist.expansion import ExpansionScorer, ExpansionSelector
from strategist.models import STRATEGY_CONFIG
from strategist.models import Autonomy, ExpansionDecision, NotifyLevel
from strategist.models.ports import (
    AnchorPlanner,
    ColonyRegistry,
    Notifier,
    OperationRegistry,
    SiteGraphService,
    WorldState,
)

CHECK_EXPANSION_FREQUENCY: int = STRATEGY_CONFIG.cadence_modifiers.check_expansion_frequency
# offset keeps this off tick 0 where other periodic work lands
TRIGGER_PHASE: int = STRATEGY_CONFIG.cadence_modifiers.trigger_phase
RESTRICTED_PLATFORM_ID: str = STRATEGY_CONFIG.platform_limits.restricted_platform_id
RESTRICTED_PLATFORM_MAX_SITES: int = (
    STRATEGY_CONFIG.platform_limits.restricted_platform_max_sites
)
OPERATION_KIND: str = STRATEGY_CONFIG.operation_kind


def is_expansion_tick(tick: int) -> bool:
    return tick % CHECK_EXPANSION_FREQUENCY == TRIGGER_PHASE


class Strategist:
    def __init__(
        self,
        graph: SiteGraphService,
        world: WorldState,
        colonies: ColonyRegistry,
        planner: AnchorPlanner,
        operations: OperationRegistry,
        notifier: Notifier,
    ) -> None:
        self.world = world
        self.planner = planner
        self.operations = operations
        self.notifier = notifier
        self.scorer = ExpansionScorer(graph, world, colonies)
        self.selector = ExpansionSelector(colonies, self.scorer, notifier)

    def at_capacity(self) -> bool:
        owned = self.world.owned_site_count()
        # strict equality: a network over its limit is still evaluated
        if owned == self.world.expansion_capacity_limit():
            return True
        if self.world.platform_id() == RESTRICTED_PLATFORM_ID:
            if owned >= RESTRICTED_PLATFORM_MAX_SITES:
                return True
        return False

    def handle_expansion(self) -> Optional[ExpansionDecision]:
        if self.at_capacity():
            return None

        decision = self.selector.choose_next_decision()
        if decision is None:
            return None
        try:
            pos = self.planner.resolve_anchor_position(decision.site_id)
        except UnknownSiteError:
            self.notifier.notify(
                NotifyLevel.ALERT,
                f"No anchor position for {decision.site_id}; skipping expansion.",
            )
            return None
        self.operations.create_if_absent(pos, OPERATION_KIND)
        self.notifier.notify(
            NotifyLevel.ALERT,
            f"Site {decision.site_id} selected as next colony! "
            f"Creating {OPERATION_KIND} directive at {pos}.",
        )
        return decision

    def run(self, tick: int) -> Optional[ExpansionDecision]:
        """One scheduling tick. Returns the decision when an expansion was ordered."""
        if not is_expansion_tick(tick):
            return None
        if self.world.autonomy_level() != Autonomy.AUTOMATIC:
            return None
        return self.handle_expansion()

    on_tick = run
