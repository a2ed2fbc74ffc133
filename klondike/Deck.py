import random
from enum import Enum

from klondike.Card import Card, Rank, Suit

TABLEAU_COLUMNS = 7
DECK_SIZE = 52


class Difficulty(Enum):
    EASY = "Easy"
    HARD = "Hard"

    @property
    def drawCount(self):
        """Cards turned from stock to waste per draw."""
        return 1 if self is Difficulty.EASY else 3


EASY_RANKS = (Rank.ACE, Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE)
MEDIUM_RANKS = (Rank.SIX, Rank.SEVEN, Rank.EIGHT, Rank.NINE)
HARD_RANKS = (Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING)


def standardDeck(faceUp=True):
    """52 cards, suit-major then rank-minor, in enum order."""
    return [Card(rank, suit, faceUp) for suit in Suit for rank in Rank]


def shuffle(deck: list, rng=None):
    """
    Fisher-Yates in place: position i is swapped with an index drawn uniformly from [0, i].
    :param rng: any object with randrange(n), defaults to the random module
    """
    rng = rng if rng is not None else random
    for i in range(len(deck) - 1, 0, -1):
        j = rng.randrange(i + 1)
        deck[i], deck[j] = deck[j], deck[i]
    return deck


def dealHard(deck: list):
    """
    Classic Klondike deal: column i receives i cards straight off the shuffled deck,
    only the last one face up. The rest become the stock, face down, in deck order.
    """
    tableau = []
    idx = 0
    for col in range(TABLEAU_COLUMNS):
        column = []
        for row in range(col + 1):
            card = deck[idx]
            idx += 1
            card.faceUp = row == col
            column.append(card)
        tableau.append(column)
    stock = list(deck[idx:])
    for card in stock:
        card.faceUp = False
    return tableau, stock


def _take(*tiers):
    # first tier with cards left wins
    for tier in tiers:
        if len(tier) > 0:
            return tier.pop()
    raise ValueError("all tiers are exhausted")


def dealEasy(rng=None):
    """
    Biased deal: cards are split into rank tiers, each tier shuffled on its own,
    and columns filled so that low ranks end up on the exposed end.

    Exposed slot prefers easy, the one above it medium, everything deeper hard;
    each falls through to the next tier when its preferred tier is empty.
    The leftovers of all three tiers are shuffled again to form the stock.
    """
    rng = rng if rng is not None else random
    easy, medium, hard = [], [], []
    for card in standardDeck(faceUp=False):
        if card.rank in EASY_RANKS:
            easy.append(card)
        elif card.rank in MEDIUM_RANKS:
            medium.append(card)
        else:
            hard.append(card)
    shuffle(easy, rng)
    shuffle(medium, rng)
    shuffle(hard, rng)
    # pop() takes from the end, reversing keeps the post-shuffle order of consumption
    easy.reverse()
    medium.reverse()
    hard.reverse()

    tableau = []
    for col in range(TABLEAU_COLUMNS):
        height = col + 1
        column = []
        for row in range(height):
            if row == height - 1:
                card = _take(easy, medium, hard)
                card.faceUp = True
            elif row == height - 2:
                card = _take(medium, easy, hard)
                card.faceUp = False
            else:
                card = _take(hard, medium, easy)
                card.faceUp = False
            column.append(card)
        tableau.append(column)

    stock = list(reversed(easy)) + list(reversed(medium)) + list(reversed(hard))
    for card in stock:
        card.faceUp = False
    shuffle(stock, rng)
    return tableau, stock


def generateBoard(difficulty, rng=None):
    """Tableau and stock for a new game; Hard deals a shuffled deck, Easy uses the tiered deal."""
    rng = rng if rng is not None else random
    deck = shuffle(standardDeck(), rng)
    if Difficulty(difficulty) is Difficulty.HARD:
        return dealHard(deck)
    return dealEasy(rng)
