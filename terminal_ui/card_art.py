from pathlib import Path

from klondike.Card import Rank, Suit
from terminal_ui.ui_config import CARD_HEIGHT, CARD_WIDTH
from terminal_ui.view_model import CardView

ART_PATH = Path(__file__).with_name("assets").joinpath("cards.txt")

# back, empty slot, four suit markers, then 52 faces
SPECIAL_CARDS = 2 + len(Suit)
CARD_COUNT = SPECIAL_CARDS + len(Suit) * len(Rank)

INNER = CARD_WIDTH - 2


def _frame(body, corners="┌┐└┘", edge="─", side="│"):
    top = corners[0] + edge * INNER + corners[1]
    bottom = corners[2] + edge * INNER + corners[3]
    rows = [side + line[:INNER].ljust(INNER) + side for line in body]
    return [top] + rows + [bottom]


def build_face(rank: Rank, suit: Suit):
    r = rank.symbol
    s = suit.symbol
    body = [""] * (CARD_HEIGHT - 2)
    body[0] = r
    body[1] = s
    body[len(body) // 2] = s.center(INNER)
    body[-2] = s.rjust(INNER)
    body[-1] = r.rjust(INNER)
    return _frame(body)


def build_back():
    return _frame(["░" * INNER] * (CARD_HEIGHT - 2))


def build_empty():
    return _frame([""] * (CARD_HEIGHT - 2), corners="┌┐└┘", edge="╌", side="╎")


def build_marker(suit: Suit):
    body = [""] * (CARD_HEIGHT - 2)
    body[len(body) // 2] = suit.symbol.center(INNER)
    return _frame(body, corners="╔╗╚╝", edge="═", side="║")


def _parse_art_file(path: Path):
    lines = path.read_text(encoding="utf-8").splitlines()
    if len(lines) < CARD_COUNT * CARD_HEIGHT:
        return None
    cards = []
    for i in range(CARD_COUNT):
        block = lines[i * CARD_HEIGHT:(i + 1) * CARD_HEIGHT]
        cards.append([line[:CARD_WIDTH].ljust(CARD_WIDTH) for line in block])
    return cards


class CardArt:
    """ASCII pictures for every card; assets/cards.txt wins over the built-in frames."""

    def __init__(self, path: Path = ART_PATH):
        cards = None
        if path is not None and path.exists():
            try:
                cards = _parse_art_file(path)
            except Exception:
                cards = None
        self.from_file = cards is not None
        if cards is None:
            cards = [build_back(), build_empty()]
            cards.extend(build_marker(suit) for suit in Suit)
            cards.extend(build_face(rank, suit) for suit in Suit for rank in Rank)
        self._cards = cards

    def back(self):
        return self._cards[0]

    def empty(self):
        return self._cards[1]

    def marker(self, suit: int):
        return self._cards[2 + Suit(suit).value]

    def face(self, rank: int, suit: int):
        return self._cards[SPECIAL_CARDS + Suit(suit).value * len(Rank) + int(rank) - 1]

    def for_view(self, view: CardView | None):
        if view is None or view.kind == "empty":
            return self.empty()
        if view.kind == "marker":
            return self.marker(view.suit)
        if not view.face_up:
            return self.back()
        return self.face(view.rank, view.suit)
