from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CardView:
    id: int
    suit: str
    rank: int
    hidden: bool
    label: str


@dataclass(frozen=True)
class StackView:
    cards: tuple[CardView, ...]


@dataclass(frozen=True)
class GameViewModel:
    stock_count: int
    waste_count: int
    waste_fan: tuple[CardView, ...]
    foundation_tops: tuple[Optional[CardView], ...]
    foundation_counts: tuple[int, ...]
    tableau: tuple[StackView, ...]
    draw_count: int
    won: bool
