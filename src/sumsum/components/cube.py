from dataclasses import dataclass


@dataclass(slots=True)
class Cube:
    """A numbered cube. ``row`` always equals its index in ``Board.columns[column]``.

    Falling and removing states are carried by ``FallAnimation`` and
    ``FadeAnimation`` components on the same entity.
    """
    value: int
    column: int
    row: int
    selected: bool = False
