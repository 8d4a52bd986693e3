from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references keep bound methods of systems nobody else holds alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float (seconds)


# ============================================================================
# INPUT & SELECTION
# ============================================================================
EVENT_CUBE_CLICK = "cube_click"                    # payload: column, row
EVENT_CUBE_SELECTED = "cube_selected"              # payload: column, row, value, selected_sum
EVENT_CUBE_DESELECTED = "cube_deselected"          # payload: column, row, value, selected_sum
EVENT_SELECTION_CHANGED = "selection_changed"      # payload: selected_sum, count


# ============================================================================
# CUBES & COLUMNS
# ============================================================================
EVENT_CUBE_SPAWNED = "cube_spawned"                # payload: column, row, value, animated=bool
EVENT_CUBE_LANDED = "cube_landed"                  # payload: column, row, value
EVENT_CUBE_REMOVED = "cube_removed"                # payload: column, row, value
EVENT_COLUMN_SETTLED = "column_settled"            # payload: column, moves=[(from_row, to_row), ...]
EVENT_SPAWN_WARNING = "spawn_warning"              # payload: column
EVENT_COLUMN_WARNING = "column_warning"            # payload: column, height
EVENT_BOARD_FULL = "board_full"                    # payload: column (the column a spawn was attempted in)


# ============================================================================
# TARGETS & SCORING
# ============================================================================
EVENT_TARGET_MATCHED = "target_matched"            # payload: target, points, combo_count, cubes=[(col,row)], cleared_columns
EVENT_TARGETS_CHANGED = "targets_changed"          # payload: targets=list[int]
EVENT_SCORE_CHANGED = "score_changed"              # payload: score, delta
EVENT_COMBO = "combo"                              # payload: combo_count
EVENT_COMBO_EXPIRED = "combo_expired"              # payload: previous_count
EVENT_LEVEL_UP = "level_up"                        # payload: level, previous_level
EVENT_MILESTONE_REACHED = "milestone_reached"      # payload: key=str


# ============================================================================
# GAME FLOW
# ============================================================================
EVENT_GAME_STARTED = "game_started"                # payload: (none)
EVENT_GAME_PAUSED = "game_paused"                  # payload: (none)
EVENT_GAME_RESUMED = "game_resumed"                # payload: (none)
EVENT_GAME_RESET = "game_reset"                    # payload: (none)
EVENT_GAME_OVER = "game_over"                      # payload: score, level, combo_count, targets_cleared
EVENT_GAME_MODE_CHANGED = "game_mode_changed"      # payload: previous_mode, new_mode
