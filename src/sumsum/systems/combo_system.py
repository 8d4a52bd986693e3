from esper import World

from sumsum.components.combo_state import ComboState
from sumsum.config import GameConfig
from sumsum.events.bus import EVENT_COMBO_EXPIRED, EVENT_TICK, EventBus
from sumsum.utils.game_state import get_singleton, is_playing


class ComboSystem:
    """Tracks time since the last match and drops the combo once the window passes."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.config: GameConfig = getattr(world, "config", None) or GameConfig()
        event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        if not is_playing(self.world):
            return
        dt = kwargs.get('dt', 1/60)
        combo = get_singleton(self.world, ComboState)
        combo.since_last_match_ms += dt * 1000.0
        if combo.count > 0 and combo.since_last_match_ms > self.config.combo_timeout_ms:
            previous = combo.count
            combo.count = 0
            self.event_bus.emit(EVENT_COMBO_EXPIRED, previous_count=previous)
