import random
import unittest
from collections import Counter

from klondike.Board import Board
from klondike.Deck import (EASY_RANKS, HARD_RANKS, MEDIUM_RANKS, Difficulty, dealEasy, dealHard, generateBoard,
                           shuffle, standardDeck)


class RecordingRng:
    def __init__(self):
        self.calls = []

    def randrange(self, n):
        self.calls.append(n)
        return 0


class DeckTestCase(unittest.TestCase):
    def assertWellFormedDeal(self, tableau, stock):
        self.assertEqual(7, len(tableau))
        for i, column in enumerate(tableau):
            self.assertEqual(i + 1, len(column))
            self.assertTrue(column[-1].faceUp)
            for card in column[:-1]:
                self.assertFalse(card.faceUp)
        self.assertEqual(24, len(stock))
        for card in stock:
            self.assertFalse(card.faceUp)
        everything = [c for column in tableau for c in column] + list(stock)
        self.assertEqual(52, len(everything))
        self.assertEqual(set(standardDeck()), set(everything))

    def test_standard_deck_order_and_faces(self):
        deck = standardDeck()
        self.assertEqual(52, len(deck))
        self.assertEqual(52, len(set(deck)))
        self.assertEqual("A♠", str(deck[0]))
        self.assertEqual("K♠", str(deck[12]))
        self.assertEqual("A♣", str(deck[13]))
        self.assertEqual("K♦", str(deck[51]))
        self.assertTrue(all(c.faceUp for c in deck))

    def test_shuffle_swaps_each_position_with_prefix_index(self):
        rng = RecordingRng()
        items = [0, 1, 2, 3, 4]
        shuffle(items, rng)
        self.assertEqual([5, 4, 3, 2], rng.calls)
        self.assertEqual([1, 2, 3, 4, 0], items)

    def test_shuffle_is_roughly_uniform(self):
        rng = random.Random(1234)
        counts = Counter()
        trials = 6000
        for _ in range(trials):
            counts[tuple(shuffle([0, 1, 2], rng))] += 1
        self.assertEqual(6, len(counts))
        for n in counts.values():
            self.assertAlmostEqual(trials / 6, n, delta=150)

    def test_deal_hard_follows_deck_order(self):
        deck = shuffle(standardDeck(), random.Random(7))
        expected = list(deck)
        tableau, stock = dealHard(deck)
        self.assertWellFormedDeal(tableau, stock)
        self.assertEqual(expected[:1], tableau[0])
        self.assertEqual(expected[1:3], tableau[1])
        self.assertEqual(expected[21:28], tableau[6])
        self.assertEqual(expected[28:], stock)

    def test_deal_easy_is_well_formed(self):
        for seed in range(20):
            tableau, stock = dealEasy(random.Random(seed))
            self.assertWellFormedDeal(tableau, stock)

    def test_deal_easy_prefers_low_ranks_on_exposed_end(self):
        tableau, _ = dealEasy(random.Random(99))
        for column in tableau:
            self.assertIn(column[-1].rank, EASY_RANKS)
            if len(column) > 1:
                self.assertIn(column[-2].rank, MEDIUM_RANKS)
            for card in column[:-2]:
                self.assertIn(card.rank, HARD_RANKS)

    def test_deal_easy_stock_takes_the_leftover_tiers(self):
        _, stock = dealEasy(random.Random(5))
        ranks = Counter(
            "easy" if c.rank in EASY_RANKS else "medium" if c.rank in MEDIUM_RANKS else "hard" for c in stock
        )
        self.assertEqual({"easy": 13, "medium": 10, "hard": 1}, dict(ranks))

    def test_deal_easy_is_deterministic_for_a_seed(self):
        a = dealEasy(random.Random(3))
        b = dealEasy(random.Random(3))
        self.assertEqual([list(map(str, col)) for col in a[0]], [list(map(str, col)) for col in b[0]])
        self.assertEqual(list(map(str, a[1])), list(map(str, b[1])))

    def test_generate_board_for_both_difficulties(self):
        for difficulty in Difficulty:
            tableau, stock = generateBoard(difficulty, random.Random(11))
            self.assertWellFormedDeal(tableau, stock)
            board = Board(tableau, stock, difficulty)
            self.assertEqual(difficulty, board.difficulty)

    def test_draw_count_by_difficulty(self):
        self.assertEqual(1, Difficulty.EASY.drawCount)
        self.assertEqual(3, Difficulty.HARD.drawCount)
        self.assertEqual(Difficulty.HARD, Difficulty("Hard"))


if __name__ == "__main__":
    unittest.main()
