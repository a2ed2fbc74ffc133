import random
from enum import Enum

from klondike.Card import Card, FoundationMarker
from klondike.Deck import TABLEAU_COLUMNS, Difficulty, shuffle
from klondike.Rules import (FOUNDATION_SUITS, MAX_COLUMN_LENGTH, canPlaceOnFoundation, canPlaceOnTableau,
                            fitsInColumn, isFoundationComplete, isWellFormedFoundation)

MAX_ROW = 10
MAX_COL = 10

STOCK_COL = 0
WASTE_COL = 1
FIRST_FOUNDATION_COL = 2
LAST_TOP_ROW_COL = FIRST_FOUNDATION_COL + len(FOUNDATION_SUITS) - 1
LAST_TABLEAU_COL = TABLEAU_COLUMNS - 1


class InvalidPilesError(ValueError):
    pass


def clamp(value, low, high):
    return max(low, min(high, value))


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class Pointer:
    """
    Row 0 is the top row (stock, waste, foundations); row N > 0 is the card at index N - 1
    of tableau column `col`. Both coordinates are clamped on assignment.
    """

    def __init__(self, row=0, col=0):
        self._row = 0
        self._col = 0
        self.row = row
        self.col = col

    @property
    def row(self):
        return self._row

    @row.setter
    def row(self, value):
        self._row = clamp(int(value), 0, MAX_ROW)

    @property
    def col(self):
        return self._col

    @col.setter
    def col(self, value):
        self._col = clamp(int(value), 0, MAX_COL)

    def isTopRow(self):
        return self._row == 0

    def asTuple(self):
        return self._row, self._col

    def __eq__(self, other):
        if not isinstance(other, Pointer):
            return NotImplemented
        return self.asTuple() == other.asTuple()

    def __repr__(self):
        return f"Pointer(row={self._row}, col={self._col})"


class BoardEvent:
    pass


class PointerMove(BoardEvent):
    def __init__(self, direction: Direction, row: int, col: int):
        self.direction = direction
        self.row = row
        self.col = col


class CardSelect(BoardEvent):
    def __init__(self, card: Card, runLength: int):
        self.card = card
        self.runLength = runLength


class SelectionReset(BoardEvent):
    pass


class StockDraw(BoardEvent):
    def __init__(self, count: int):
        self.count = count


class StockRecycle(BoardEvent):
    def __init__(self, count: int):
        self.count = count


class TableauMove(BoardEvent):
    def __init__(self, cards: list, src, dest: int, revealed: bool):
        """
        :param src: index of the source column, or None when the card came from the waste
        """
        self.cards = cards
        self.src = src
        self.dest = dest
        self.revealed = revealed


class FoundationMove(BoardEvent):
    def __init__(self, card: Card, src, foundation: int, revealed: bool):
        self.card = card
        self.src = src
        self.foundation = foundation
        self.revealed = revealed


class MoveRejected(BoardEvent):
    def __init__(self, card: Card, reason: str):
        self.card = card
        self.reason = reason


class Board:
    """
    Piles, cursor and selection of one Klondike game.

    movePointer / pointerAction / resetSelection : called by the driver
    _*** : actual pile work, no validation of their own.
    """

    def __init__(self, tableau, stock, difficulty=Difficulty.EASY, rng=None):
        tableau = [list(column) for column in tableau]
        stock = list(stock)
        if len(tableau) != TABLEAU_COLUMNS:
            raise InvalidPilesError(f"expected {TABLEAU_COLUMNS} tableau columns, got {len(tableau)}")
        for i, column in enumerate(tableau):
            if len(column) != i + 1:
                raise InvalidPilesError(f"tableau column {i + 1} holds {len(column)} cards")
        if len(stock) == 0:
            raise InvalidPilesError("stock pile is empty")
        foundations = [[FoundationMarker(suit)] for suit in FOUNDATION_SUITS]
        self._setUp(tableau, foundations, stock, [], difficulty, rng)

    @classmethod
    def fromPiles(cls, tableau, foundations=None, stock=(), waste=(), difficulty=Difficulty.EASY, rng=None):
        """
        Rebuilds a board in the middle of a game.
        :param foundations: four lists of built cards in Clubs, Spades, Hearts, Diamonds order, markers optional
        """
        tableau = [list(column) for column in tableau]
        if len(tableau) != TABLEAU_COLUMNS:
            raise InvalidPilesError(f"expected {TABLEAU_COLUMNS} tableau columns, got {len(tableau)}")
        for i, column in enumerate(tableau):
            if len(column) > MAX_COLUMN_LENGTH:
                raise InvalidPilesError(f"tableau column {i + 1} holds {len(column)} cards")
        if foundations is None:
            foundations = [[] for _ in FOUNDATION_SUITS]
        if len(foundations) != len(FOUNDATION_SUITS):
            raise InvalidPilesError(f"expected {len(FOUNDATION_SUITS)} foundations, got {len(foundations)}")
        built = []
        for suit, pile in zip(FOUNDATION_SUITS, foundations):
            pile = list(pile)
            if len(pile) == 0 or not isinstance(pile[0], FoundationMarker):
                pile.insert(0, FoundationMarker(suit))
            if not isWellFormedFoundation(pile, suit):
                raise InvalidPilesError(f"foundation {suit.name} is out of order")
            built.append(pile)
        board = cls.__new__(cls)
        board._setUp(tableau, built, list(stock), list(waste), difficulty, rng)
        return board

    def _setUp(self, tableau, foundations, stock, waste, difficulty, rng):
        self._tableau = tableau
        self._foundations = foundations
        self._stock = stock
        self._waste = waste
        self._difficulty = Difficulty(difficulty)
        self._rng = rng if rng is not None else random.Random()
        self._pointer = Pointer()
        self._selectedCard = None
        self._movesCount = 0
        self.interface = None

    def registerInterface(self, interface):
        self.interface = interface
        interface.board = self

    @property
    def tableau(self):
        return self._tableau

    @property
    def foundations(self):
        return self._foundations

    @property
    def stock(self):
        return self._stock

    @property
    def waste(self):
        return self._waste

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def pointer(self) -> Pointer:
        return self._pointer

    @property
    def selectedCard(self):
        return self._selectedCard

    @property
    def movesCount(self):
        return self._movesCount

    @property
    def pointedCard(self):
        """Card (or foundation marker) under the cursor, None over an empty slot."""
        row, col = self._pointer.asTuple()
        if row == 0:
            if col == STOCK_COL:
                return self._stock[0] if len(self._stock) > 0 else None
            if col == WASTE_COL:
                return self._waste[-1] if len(self._waste) > 0 else None
            return self._foundations[min(col, LAST_TOP_ROW_COL) - FIRST_FOUNDATION_COL][-1]
        column = self._tableau[min(col, LAST_TABLEAU_COL)]
        if len(column) == 0:
            return None
        return column[min(row, len(column)) - 1]

    @property
    def selectedRun(self):
        """The selected card and every card travelling with it."""
        if self._selectedCard is None:
            return []
        source, idx, _ = self._locate(self._selectedCard)
        if source is None:
            return []
        return source[idx:]

    def checkVictory(self):
        return all(isFoundationComplete(pile) for pile in self._foundations)

    def resetSelection(self):
        self._selectedCard = None
        self._notify(SelectionReset())

    def movePointer(self, direction):
        direction = Direction(direction)
        pointer = self._pointer

        # left from the first column jumps to the stock
        if direction is Direction.LEFT and pointer.col == 0 and pointer.row > 0:
            pointer.row = 0
            pointer.col = STOCK_COL

        if direction is Direction.UP:
            pointer.row -= 1
        elif direction is Direction.DOWN:
            pointer.row += 1
        elif direction is Direction.LEFT:
            pointer.col -= 1
        else:
            pointer.col += 1

        if pointer.row == 0:
            pointer.col = clamp(pointer.col, 0, LAST_TOP_ROW_COL)
        else:
            pointer.col = clamp(pointer.col, 0, LAST_TABLEAU_COL)
            minRow, maxRow = self._rowBounds(pointer.col)
            # stepping up from the first face-up card leaves the column
            if direction is Direction.UP and pointer.row + 1 == minRow:
                pointer.row = 0
                pointer.col = clamp(pointer.col, 0, LAST_TOP_ROW_COL)
            else:
                pointer.row = clamp(pointer.row, minRow, maxRow)

        if len(self._waste) == 0 and pointer.row == 0 and pointer.col == WASTE_COL:
            if direction is Direction.LEFT or direction is Direction.UP:
                pointer.col = STOCK_COL
            elif direction is Direction.RIGHT:
                pointer.col = FIRST_FOUNDATION_COL

        self._notify(PointerMove(direction, pointer.row, pointer.col))

    def pointerAction(self):
        pointer = self._pointer
        if pointer.row > 0:
            self._tableauAction()
        elif pointer.col == STOCK_COL:
            self._stockAction()
        elif pointer.col == WASTE_COL:
            self._wasteAction()
        else:
            self._foundationAction()
        self._syncPointer()

    def _rowBounds(self, col):
        column = self._tableau[col]
        hidden = 0
        for card in column:
            if card.faceUp:
                break
            hidden += 1
        maxRow = max(len(column), 1)
        minRow = min(hidden + 1, maxRow)
        if self._selectedCard is not None:
            # a held card can only go to the bottom of a column
            minRow = maxRow
        return minRow, maxRow

    def _syncPointer(self):
        pointer = self._pointer
        if pointer.row > 0:
            column = self._tableau[min(pointer.col, LAST_TABLEAU_COL)]
            pointer.row = min(pointer.row, max(len(column), 1))

    def _tableauAction(self):
        if self._selectedCard is None:
            card = self.pointedCard
            if card is not None and card.faceUp:
                self._select(card)
            return

        held = self._selectedCard
        dest = min(self._pointer.col, LAST_TABLEAU_COL)
        target = self._tableau[dest]
        source, idx, srcCol = self._locate(held)
        if source is None or source is target or not canPlaceOnTableau(held, target):
            self._reject(held, "tableau")
            return

        run = source[idx:]
        if fitsInColumn(target, len(run)):
            del source[idx:]
            target.extend(run)
            revealed = srcCol is not None and self._revealTop(source)
            self._selectedCard = None
            self._notify(TableauMove(run, srcCol, dest, revealed))
        else:
            self._selectedCard = None
            self._notify(MoveRejected(held, "column full"))
        # an attempted move that passed the rank rule counts even when the column is full
        self._movesCount += 1

    def _stockAction(self):
        if self._selectedCard is not None:
            self.resetSelection()
            return

        if len(self._stock) > 0:
            count = min(self._difficulty.drawCount, len(self._stock))
            drawn = self._stock[:count]
            del self._stock[:count]
            for card in drawn:
                card.faceUp = True
            self._waste.extend(drawn)
            self._movesCount += 1
            self._notify(StockDraw(count))
        elif len(self._waste) > 0:
            for card in self._waste:
                card.faceUp = False
            self._stock.extend(self._waste)
            self._waste.clear()
            shuffle(self._stock, self._rng)
            self._movesCount += 1
            self._notify(StockRecycle(len(self._stock)))
        else:
            # nothing to draw or recycle, the press still counts
            self._movesCount += 1
            self._notify(StockDraw(0))

    def _wasteAction(self):
        if self._selectedCard is None:
            card = self.pointedCard
            if card is not None:
                self._select(card)
            return
        # the waste is never a destination; dropping the card here counts as a move
        self._selectedCard = None
        self._movesCount += 1
        self._notify(SelectionReset())

    def _foundationAction(self):
        if self._selectedCard is None:
            return

        held = self._selectedCard
        index = min(self._pointer.col, LAST_TOP_ROW_COL) - FIRST_FOUNDATION_COL
        foundation = self._foundations[index]
        source, idx, srcCol = self._locate(held)
        if source is None or not canPlaceOnFoundation(held, len(source) - idx, foundation):
            self._reject(held, "foundation")
            return

        source.pop(idx)
        foundation.append(held)
        revealed = srcCol is not None and self._revealTop(source)
        self._selectedCard = None
        self._movesCount += 1
        self._notify(FoundationMove(held, srcCol, index, revealed))

    def _select(self, card):
        self._selectedCard = card
        self._notify(CardSelect(card, len(self.selectedRun)))

    def _reject(self, card, reason):
        self._selectedCard = None
        self._notify(MoveRejected(card, reason))

    def _locate(self, card):
        """
        :return: (pile, index of card in pile, tableau column or None for the waste)
        """
        if len(self._waste) > 0 and self._waste[-1] == card:
            return self._waste, len(self._waste) - 1, None
        for col, column in enumerate(self._tableau):
            for idx, other in enumerate(column):
                if other == card:
                    return column, idx, col
        return None, -1, None

    @staticmethod
    def _revealTop(column):
        if len(column) > 0 and not column[-1].faceUp:
            column[-1].faceUp = True
            return True
        return False

    def _notify(self, event):
        if self.interface is not None:
            self.interface.onEvent(event)
