from esper import World

from sumsum.components.milestone_tracker import MilestoneTracker
from sumsum.constants import BIG_SUM_THRESHOLD, COMBO_MILESTONES, LEVEL_MILESTONES, SCORE_MILESTONES
from sumsum.events.bus import (
    EVENT_GAME_OVER,
    EVENT_GAME_RESET,
    EVENT_LEVEL_UP,
    EVENT_MILESTONE_REACHED,
    EVENT_TARGET_MATCHED,
    EventBus,
)
from sumsum.utils.game_state import get_singleton


class MilestoneSystem:
    """Reports unlockable milestones to persistence adapters, once per session each."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TARGET_MATCHED, self._on_target_matched)
        self.event_bus.subscribe(EVENT_LEVEL_UP, self._on_level_up)
        self.event_bus.subscribe(EVENT_GAME_OVER, self._on_game_over)
        self.event_bus.subscribe(EVENT_GAME_RESET, self._on_game_reset)

    def _tracker(self) -> MilestoneTracker:
        return get_singleton(self.world, MilestoneTracker)

    def _reach(self, key: str) -> None:
        tracker = self._tracker()
        if key in tracker.reached:
            return
        tracker.reached.add(key)
        self.event_bus.emit(EVENT_MILESTONE_REACHED, key=key)

    def _on_target_matched(self, sender, **payload) -> None:
        self._reach("first_win")
        combo_count = payload.get("combo_count", 0)
        for threshold in COMBO_MILESTONES:
            if combo_count >= threshold:
                self._reach(f"combo{threshold}")
        if payload.get("target", 0) >= BIG_SUM_THRESHOLD:
            self._reach("big_sum")

    def _on_level_up(self, sender, **payload) -> None:
        level = payload.get("level", 0)
        for threshold in LEVEL_MILESTONES:
            if level >= threshold:
                self._reach(f"level{threshold}")

    def _on_game_over(self, sender, **payload) -> None:
        score = payload.get("score", 0)
        for threshold in SCORE_MILESTONES:
            if score >= threshold:
                self._reach(f"score{threshold}")

    def _on_game_reset(self, sender, **payload) -> None:
        self._tracker().reached.clear()
