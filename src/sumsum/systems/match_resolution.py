from __future__ import annotations

import logging
from typing import List

from esper import World

from sumsum.components.combo_state import ComboState
from sumsum.components.scoreboard import Scoreboard
from sumsum.components.target_queue import TargetQueue
from sumsum.config import GameConfig
from sumsum.events.bus import (
    EVENT_COMBO,
    EVENT_LEVEL_UP,
    EVENT_SCORE_CHANGED,
    EVENT_SELECTION_CHANGED,
    EVENT_TARGET_MATCHED,
    EVENT_TARGETS_CHANGED,
    EventBus,
)
from sumsum.systems.board_ops import columns_fully_covered, get_cube, mark_removing, selected_entities
from sumsum.systems.content_generator import ContentGenerator
from sumsum.utils.game_state import get_singleton, is_playing
from sumsum.utils.level_policy import MAX_LEVEL
from sumsum.utils.scoring import match_points

logger = logging.getLogger(__name__)


class MatchResolutionSystem:
    """Compares the selection with the current target and resolves matches."""

    def __init__(self, world: World, event_bus: EventBus, generator: ContentGenerator):
        self.world = world
        self.event_bus = event_bus
        self.generator = generator
        self.config: GameConfig = getattr(world, "config", None) or GameConfig()
        self.event_bus.subscribe(EVENT_SELECTION_CHANGED, self.on_selection_changed)

    def on_selection_changed(self, sender, **kwargs):
        if not is_playing(self.world):
            return
        self.check_target()

    def check_target(self) -> bool:
        queue = get_singleton(self.world, TargetQueue)
        target = queue.current
        if target is None:
            return False
        entities = selected_entities(self.world)
        if len(entities) < self.config.min_cubes_for_sum:
            return False
        if sum(get_cube(self.world, ent).value for ent in entities) != target:
            return False
        self._resolve_match(target, entities)
        return True

    def _advance_combo(self) -> int:
        combo = get_singleton(self.world, ComboState)
        if combo.has_matched and combo.since_last_match_ms < self.config.combo_timeout_ms:
            combo.count += 1
        else:
            combo.count = 1
        combo.has_matched = True
        combo.since_last_match_ms = 0.0
        return combo.count

    def _resolve_match(self, target: int, entities: List[int]) -> None:
        scoreboard = get_singleton(self.world, Scoreboard)
        combo_count = self._advance_combo()
        # Counted before the cubes are flagged, while they are still in play.
        cleared_columns = columns_fully_covered(self.world, entities)
        points = match_points(target, len(entities), combo_count, cleared_columns)
        scoreboard.score += points

        positions = []
        fade_seconds = self.config.remove_duration_ms / 1000.0
        for entity in entities:
            cube = get_cube(self.world, entity)
            positions.append((cube.column, cube.row))
            mark_removing(self.world, entity, fade_seconds)

        queue = get_singleton(self.world, TargetQueue)
        queue.targets.pop(0)
        while len(queue.targets) < queue.depth:
            queue.targets.append(self.generator.generate_target())
        scoreboard.targets_cleared += 1
        logger.debug("matched %d with %d cubes for %d points", target, len(entities), points)

        self.event_bus.emit(
            EVENT_TARGET_MATCHED,
            target=target,
            points=points,
            combo_count=combo_count,
            cubes=positions,
            cleared_columns=cleared_columns,
        )
        if combo_count >= 2:
            self.event_bus.emit(EVENT_COMBO, combo_count=combo_count)
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=scoreboard.score, delta=points)
        self.event_bus.emit(EVENT_TARGETS_CHANGED, targets=list(queue.targets))
        self._check_level_up(scoreboard)

    def _check_level_up(self, scoreboard: Scoreboard) -> None:
        needed = self.config.points_per_level * scoreboard.level
        if scoreboard.score >= needed and scoreboard.level < MAX_LEVEL:
            previous = scoreboard.level
            scoreboard.level += 1
            logger.info("level up: %d -> %d", previous, scoreboard.level)
            self.event_bus.emit(EVENT_LEVEL_UP, level=scoreboard.level, previous_level=previous)
