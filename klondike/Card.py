from enum import Enum, IntEnum


class NoSuitOrRank(Exception):
    """Raised when a marker slot is asked for a rank or suit it does not carry."""
    pass


class Suit(Enum):
    SPADES = 0
    CLUBS = 1
    HEARTS = 2
    DIAMONDS = 3

    @property
    def symbol(self):
        return "♠♣♥♦"[self.value]

    def isRed(self):
        return self is Suit.HEARTS or self is Suit.DIAMONDS


class Rank(IntEnum):
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    @property
    def symbol(self):
        return ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")[self.value - 1]


class PileSlot:
    """
    Anything that can occupy a position in a pile.
    Only Card is playable; the markers are sentinels used for empty positions.
    """
    isMarker = True

    @property
    def rank(self) -> Rank:
        raise NoSuitOrRank(f"{type(self).__name__} has no rank")

    @property
    def suit(self) -> Suit:
        raise NoSuitOrRank(f"{type(self).__name__} has no suit")

    @property
    def faceUp(self):
        return True


class Card(PileSlot):
    isMarker = False

    def __init__(self, rank: Rank, suit: Suit, faceUp=True):
        self._rank = Rank(rank)
        self._suit = Suit(suit)
        self._faceUp = bool(faceUp)

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def faceUp(self):
        return self._faceUp

    @faceUp.setter
    def faceUp(self, value):
        self._faceUp = bool(value)

    def flip(self):
        self._faceUp = not self._faceUp

    def isRed(self):
        return self._suit.isRed()

    def __eq__(self, other):
        if not isinstance(other, Card):
            return NotImplemented
        return self._rank == other._rank and self._suit == other._suit

    def __hash__(self):
        return hash((self._rank, self._suit))

    def __str__(self):
        return self._rank.symbol + self._suit.symbol

    def __repr__(self):
        if self._faceUp:
            return str(self)
        return str(self) + "H"


class FoundationMarker(PileSlot):
    """First entry of every foundation pile; carries the pile's suit."""

    def __init__(self, suit: Suit):
        self._suit = Suit(suit)

    @property
    def suit(self) -> Suit:
        return self._suit

    def __eq__(self, other):
        if not isinstance(other, FoundationMarker):
            return NotImplemented
        return self._suit == other._suit

    def __hash__(self):
        return hash(("foundation", self._suit))

    def __str__(self):
        return "[" + self._suit.symbol + "]"

    __repr__ = __str__


class EmptySlotMarker(PileSlot):

    def __eq__(self, other):
        return isinstance(other, EmptySlotMarker)

    def __hash__(self):
        return hash("empty")

    def __str__(self):
        return "[  ]"

    __repr__ = __str__


EMPTY_SLOT = EmptySlotMarker()
