"""
Klondike legality checks. Nothing here mutates a pile.
"""
from klondike.Card import Card, FoundationMarker, Rank, Suit

MAX_COLUMN_LENGTH = 10
FOUNDATION_SUITS = (Suit.CLUBS, Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS)
# the marker plus Ace..King
FOUNDATION_SIZE = 1 + len(Rank)


def oppositeColors(a: Card, b: Card):
    return a.isRed() != b.isRed()


def suitableAsTableauBaseFor(base: Card, held: Card):
    return base.rank == held.rank + 1 and oppositeColors(base, held)


def canPlaceOnTableau(held: Card, column: list) -> bool:
    """King onto an empty column, otherwise one rank below the top card in the other colour."""
    if len(column) == 0:
        return held.rank == Rank.KING
    top = column[-1]
    if not top.faceUp:
        return False
    return suitableAsTableauBaseFor(top, held)


def fitsInColumn(column: list, runLength: int) -> bool:
    return len(column) + runLength <= MAX_COLUMN_LENGTH


def canPlaceOnFoundation(held: Card, runLength: int, foundation: list) -> bool:
    """
    :param runLength: number of cards that would travel with held; only single cards go up
    :param foundation: marker first, then the cards already built
    """
    if runLength != 1:
        return False
    if held.suit != foundationSuit(foundation):
        return False
    if len(foundation) == 1:
        return held.rank == Rank.ACE
    return foundation[-1].rank + 1 == held.rank


def foundationSuit(foundation: list) -> Suit:
    return foundation[0].suit


def isFoundationComplete(foundation: list) -> bool:
    return len(foundation) == FOUNDATION_SIZE and isinstance(foundation[0], FoundationMarker)


def isWellFormedFoundation(foundation: list, suit: Suit) -> bool:
    if len(foundation) == 0 or foundation[0] != FoundationMarker(suit):
        return False
    expected = Rank.ACE
    for card in foundation[1:]:
        if not isinstance(card, Card) or card.suit != suit or card.rank != expected:
            return False
        if expected == Rank.KING:
            expected = None
        else:
            expected = Rank(expected + 1)
    return len(foundation) <= FOUNDATION_SIZE
