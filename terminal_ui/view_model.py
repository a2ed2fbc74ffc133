from dataclasses import dataclass


@dataclass(frozen=True)
class CardView:
    kind: str  # "card", "marker" or "empty"
    rank: int | None
    suit: int | None
    face_up: bool
    label: str
    pointed: bool = False
    selected: bool = False


@dataclass(frozen=True)
class BoardViewModel:
    stock_count: int
    stock_top: CardView | None
    waste: tuple[CardView, ...]
    foundations: tuple[CardView, ...]
    tableau: tuple[tuple[CardView, ...], ...]
    pointer: tuple[int, int]
    pointed: CardView | None
    selected: tuple[CardView, ...]
    moves_count: int
    difficulty: str
