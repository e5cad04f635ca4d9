#!/usr/bin/env python3
from __future__ import annotations

from typing import List, Optional, Sequence

from strategist.errors import UnknownSiteError
from strategist.helper.expansion_helpers import (
    MIN_EXPANSION_DISTANCE,
    MAX_POSSIBLE_BONUS,
    TOO_CLOSE_PENALTY,
    REQUIRED_TIER,
    scored_entries,
    home_sites,
    owned_resource_types,
    resource_bonus,
)
from strategist.models import STRATEGY_CONFIG
from strategist.models import Colony, ExpansionCandidate, ExpansionDecision, NotifyLevel, ResourceType
from strategist.models.ports import ColonyRegistry, Notifier, SiteGraphService, WorldState


class ExpansionScorer:
    """Ranks one colony's surveyed sites and returns the best viable one."""

    def __init__(
        self,
        graph: SiteGraphService,
        world: WorldState,
        colonies: ColonyRegistry,
    ) -> None:
        self.graph = graph
        self.world = world
        self.colonies = colonies

    def _adjusted_score(
        self,
        site_id: str,
        raw_score: float,
        colony_sites: set[str],
        owned: set[ResourceType],
    ) -> Optional[float]:
        """Score after penalties and bonuses, or None if the site is excluded."""
        score = raw_score
        # Is the site too close to an existing colony?
        nearby = self.graph.find_sites_in_range(site_id, MIN_EXPANSION_DISTANCE)
        if any(sid in colony_sites for sid in nearby):
            return None
        ring = self.graph.find_sites_in_range(site_id, MIN_EXPANSION_DISTANCE + 1)
        if any(sid in colony_sites for sid in ring):
            score -= TOO_CLOSE_PENALTY
        # Hostile neighbourhood rules the site out
        adjacent = self.graph.find_sites_in_range(site_id, 1)
        if any(self.world.site_metadata(sid).hostile for sid in adjacent):
            return None
        # Reward new minerals and catalyst sites
        score += resource_bonus(self.world.site_metadata(site_id).resource_type, owned)
        return score

    def best_candidate_for(
        self,
        colony: Colony,
        colony_sites: Optional[set[str]] = None,
        owned: Optional[set[ResourceType]] = None,
    ) -> Optional[ExpansionCandidate]:
        """
        Walk the colony's suitability cache in site-id order and keep the
        highest adjusted score. Ties keep the first site seen.
        Home sites and owned resources default to the whole network.
        """
        if colony_sites is None or owned is None:
            colonies = [colony, *self.colonies.all_colonies()]
            colony_sites = home_sites(colonies) if colony_sites is None else colony_sites
            owned = owned_resource_types(colonies, self.world) if owned is None else owned

        best_site: Optional[str] = None
        best_score = float("-inf")
        for site_id, raw_score in scored_entries(colony.expansion_cache):
            # cheap upper bound before any graph queries
            if raw_score + MAX_POSSIBLE_BONUS <= best_score:
                continue
            try:
                score = self._adjusted_score(site_id, raw_score, colony_sites, owned)
                if score is None:
                    continue
                if score > best_score and self.world.is_site_available(site_id):
                    best_score = score
                    best_site = site_id
            except UnknownSiteError:
                continue

        if best_site is None:
            return None
        return ExpansionCandidate(
            site_id=best_site, adjusted_score=best_score, colony_id=colony.home_site_id
        )


def format_score(score: float) -> str:
    return str(int(score)) if float(score).is_integer() else str(score)


def is_expansion_sponsor(colony: Colony) -> bool:
    """High enough tier and not already expanding."""
    return colony.tier >= REQUIRED_TIER and not colony.active_expansion_operations


class ExpansionSelector:
    """Picks the best expansion site across every eligible colony."""

    def __init__(
        self,
        colonies: ColonyRegistry,
        scorer: ExpansionScorer,
        notifier: Notifier,
    ) -> None:
        self.colonies = colonies
        self.scorer = scorer
        self.notifier = notifier

    def candidates(self) -> List[ExpansionCandidate]:
        all_colonies: Sequence[Colony] = list(self.colonies.all_colonies())
        colony_sites = home_sites(all_colonies)
        owned = owned_resource_types(all_colonies, self.scorer.world)
        found: List[ExpansionCandidate] = []
        for colony in all_colonies:
            if not is_expansion_sponsor(colony):
                continue
            best = self.scorer.best_candidate_for(colony, colony_sites, owned)
            if best is not None:
                found.append(best)
        return found

    def choose_next_decision(self) -> Optional[ExpansionDecision]:
        found = self.candidates()
        if STRATEGY_CONFIG.debug:
            print(f"[strategist] expansion candidates: {found}")

        best: Optional[ExpansionCandidate] = None
        for cand in found:
            if best is None or cand.adjusted_score > best.adjusted_score:
                best = cand

        if best is None:
            self.notifier.notify(NotifyLevel.INFO, "No viable expansion sites found!")
            return None
        score = format_score(best.adjusted_score)
        self.notifier.notify(
            NotifyLevel.INFO, f"Next expansion chosen: {best.site_id} with score {score}"
        )
        return ExpansionDecision(
            site_id=best.site_id, score=best.adjusted_score, colony_id=best.colony_id
        )

    def choose_next_site(self) -> Optional[str]:
        decision = self.choose_next_decision()
        return decision.site_id if decision else None
