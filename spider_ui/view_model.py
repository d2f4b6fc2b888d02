from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CardView:
    id: int
    suit: int
    num: int
    face_up: bool


@dataclass(frozen=True)
class StackView:
    cards: tuple[CardView, ...]
    highlighted: bool = False


@dataclass(frozen=True)
class GameViewModel:
    stock_count: int
    deals_remaining: int
    foundation_count: int
    game_complete: bool
    stacks: tuple[StackView, ...]
    selection: Optional[tuple[int, int]]
    undo_enabled: bool
    can_undo: bool


@dataclass(frozen=True)
class AnimationEvent:
    type: str
    payload: dict
