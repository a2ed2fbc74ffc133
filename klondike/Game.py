import random
import time

from klondike.Board import Board, Direction
from klondike.Deck import Difficulty, generateBoard

BASE_SCORE = 1000
SCORE_DIVIDER = {Difficulty.EASY: 1, Difficulty.HARD: 2}

COMMANDS = ("up", "down", "left", "right", "action", "cancel")


def computeScore(difficulty, elapsedSeconds, moves):
    """Final score shown after a win; slower games and more moves cost points."""
    divider = SCORE_DIVIDER[Difficulty(difficulty)]
    score = BASE_SCORE - (int(elapsedSeconds) + int(moves)) // divider
    return max(0, score)


class Stopwatch:
    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._startedAt = None
        self._accumulated = 0.0

    @property
    def running(self):
        return self._startedAt is not None

    def start(self):
        if self._startedAt is None:
            self._startedAt = self._clock()

    def stop(self):
        if self._startedAt is not None:
            self._accumulated += self._clock() - self._startedAt
            self._startedAt = None

    def elapsed(self):
        if self._startedAt is None:
            return self._accumulated
        return self._accumulated + self._clock() - self._startedAt


class GameSession:
    """
    One game: the board, its difficulty and the clock.
    Drivers feed it commands and poll `won`.
    """

    def __init__(self, difficulty=Difficulty.EASY, seed=None, interface=None, clock=time.monotonic):
        self.difficulty = Difficulty(difficulty)
        self.seed = seed
        self.rng = random.Random(seed)
        tableau, stock = generateBoard(self.difficulty, self.rng)
        self.board = Board(tableau, stock, self.difficulty, self.rng)
        self.stopwatch = Stopwatch(clock)
        self.won = False
        self.interface = interface
        if interface is not None:
            self.board.registerInterface(interface)

    def start(self):
        self.stopwatch.start()
        if self.interface is not None:
            self.interface.onStart()

    def pause(self):
        self.stopwatch.stop()

    def resume(self):
        if not self.won:
            self.stopwatch.start()

    def dispatch(self, command: str) -> bool:
        """
        :param command: one of COMMANDS
        :return: True once the game is won
        """
        if self.won:
            return True
        if command == "action":
            self.board.pointerAction()
        elif command == "cancel":
            self.board.resetSelection()
        elif command in ("up", "down", "left", "right"):
            self.board.movePointer(Direction(command))
        else:
            raise ValueError(f"unknown command: {command}")

        if self.board.checkVictory():
            self.won = True
            self.stopwatch.stop()
            if self.interface is not None:
                self.interface.onWin()
        return self.won

    def elapsedSeconds(self):
        return self.stopwatch.elapsed()

    def score(self):
        return computeScore(self.difficulty, self.elapsedSeconds(), self.board.movesCount)
