import argparse

from klondike.Board import Board, InvalidPilesError, MoveRejected
from klondike.Card import EMPTY_SLOT
from klondike.Deck import Difficulty
from klondike.Game import GameSession
from klondike.Interface import Interface

KEYS = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "e": "action",
    "": "action",
    "x": "cancel",
}


def slotStr(slot, pointed=False, selected=False):
    if not slot.faceUp:
        text = "----"
    else:
        text = str(slot).ljust(4)
    left = ">" if pointed else " "
    right = "*" if selected else " "
    return left + text + right


def boardLines(board: Board):
    pointer = board.pointer
    selected = set(id(c) for c in board.selectedRun)

    def cell(slot, isPointed):
        return slotStr(slot, isPointed, id(slot) in selected)

    top = cell(board.stock[0] if board.stock else EMPTY_SLOT, pointer.asTuple() == (0, 0))
    waste = board.waste[-3:]
    shown = ""
    for i, card in enumerate(waste):
        isTop = i == len(waste) - 1
        shown += cell(card, isTop and pointer.asTuple() == (0, 1))
    if len(waste) == 0:
        shown = cell(EMPTY_SLOT, pointer.asTuple() == (0, 1))
    top += shown.ljust(18)
    for i, pile in enumerate(board.foundations):
        top += cell(pile[-1], pointer.asTuple() == (0, i + 2))

    lines = [f"Moves: {board.movesCount}        Stock: {len(board.stock)}", top,
             "-----0------1------2------3------4------5------6---"]
    height = max(max(len(c) for c in board.tableau), 1)
    for row in range(height):
        line = ""
        for col, column in enumerate(board.tableau):
            isPointed = pointer.row == row + 1 and pointer.col == col
            if row < len(column):
                line += cell(column[row], isPointed) + " "
            elif row == 0 or (isPointed and row == len(column)):
                line += cell(EMPTY_SLOT, isPointed) + " "
            else:
                line += "       "
        lines.append(line.rstrip())
    return lines


class CommandLineInterface(Interface):

    def printAll(self):
        print("\n".join(boardLines(self.board)))
        print()

    def onStart(self):
        print("Game started!")
        self.printAll()

    def onEvent(self, event):
        if isinstance(event, MoveRejected):
            print("Cannot move!")
        super().onEvent(event)

    def notifyRedraw(self):
        pass

    def onWin(self):
        print("You win!")


def parseArgs(argv=None):
    parser = argparse.ArgumentParser(description="Klondike solitaire, line mode.")
    parser.add_argument("--difficulty", choices=[d.value for d in Difficulty], default=Difficulty.EASY.value)
    parser.add_argument("--seed", type=int, default=None)
    return parser.parse_args(argv)


def main(argv=None):
    args = parseArgs(argv)
    interface = CommandLineInterface()
    try:
        session = GameSession(Difficulty(args.difficulty), seed=args.seed, interface=interface)
    except InvalidPilesError as e:
        print(f"Cannot deal a new game: {e}")
        return 1
    session.start()
    while not session.won:
        try:
            command = input().strip().lower()
        except EOFError:
            break
        if command in ("q", "quit"):
            break
        command = KEYS.get(command, command)
        try:
            session.dispatch(command)
        except ValueError:
            print("Invalid command!")
            continue
        interface.printAll()
    if session.won:
        print(f"Moves: {session.board.movesCount}  Time: {int(session.elapsedSeconds())}s  Score: {session.score()}")
    return 0


if __name__ == '__main__':
    main()
