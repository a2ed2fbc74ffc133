from klondike.Board import (Board, CardSelect, FoundationMove, MoveRejected, PointerMove, SelectionReset,
                            StockDraw, StockRecycle, TableauMove)
from klondike.Card import EMPTY_SLOT, Card, FoundationMarker
from terminal_ui.view_model import BoardViewModel, CardView


class BoardAdapter:
    """Bridges the board state/events to a renderer-friendly model."""

    @staticmethod
    def card_view(slot, pointed=None, selected=()):
        if slot is None:
            slot = EMPTY_SLOT
        is_pointed = pointed is not None and slot is pointed
        is_selected = any(slot is s for s in selected)
        if isinstance(slot, Card):
            return CardView(kind="card", rank=int(slot.rank), suit=slot.suit.value, face_up=slot.faceUp,
                            label=str(slot), pointed=is_pointed, selected=is_selected)
        if isinstance(slot, FoundationMarker):
            return CardView(kind="marker", rank=None, suit=slot.suit.value, face_up=True,
                            label=slot.suit.symbol, pointed=is_pointed)
        return CardView(kind="empty", rank=None, suit=None, face_up=True, label="", pointed=is_pointed)

    @staticmethod
    def snapshot(board: Board) -> BoardViewModel:
        pointed = board.pointedCard
        selected = tuple(board.selectedRun)

        def view(slot):
            return BoardAdapter.card_view(slot, pointed, selected)

        stock_top = view(board.stock[0]) if len(board.stock) > 0 else None
        return BoardViewModel(
            stock_count=len(board.stock),
            stock_top=stock_top,
            waste=tuple(view(card) for card in board.waste[-3:]),
            foundations=tuple(view(pile[-1]) for pile in board.foundations),
            tableau=tuple(tuple(view(card) for card in column) for column in board.tableau),
            pointer=board.pointer.asTuple(),
            pointed=view(pointed) if pointed is not None else None,
            selected=tuple(view(card) for card in selected),
            moves_count=board.movesCount,
            difficulty=board.difficulty.value,
        )

    @staticmethod
    def event_to_sound(event):
        if isinstance(event, (PointerMove, SelectionReset, CardSelect, MoveRejected)):
            return "operation"
        if isinstance(event, StockDraw) and event.count == 0:
            return None
        if isinstance(event, (TableauMove, StockDraw)):
            return "move"
        if isinstance(event, StockRecycle):
            return "shuffle"
        if isinstance(event, FoundationMove):
            return "foundation"
        return None
