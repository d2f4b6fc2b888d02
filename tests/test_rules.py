import unittest
from itertools import count

from spider import Rules
from spider.Table import Card, Table


class CardFactory:
    def __init__(self):
        self.ids = count(1)

    def up(self, suit, num):
        return Card(next(self.ids), suit, num), True

    def down(self, suit, num):
        return Card(next(self.ids), suit, num), False

    def run(self, suit, high=12, low=0):
        return [self.up(suit, num) for num in range(high, low - 1, -1)]


class MovableStackTestCase(unittest.TestCase):
    def setUp(self):
        self.f = CardFactory()

    def test_same_suit_descending_suffix_is_movable(self):
        f = self.f
        table = Table.fromLayout([[f.down(1, 2), f.up(0, 9), f.up(0, 8), f.up(0, 7)]])
        self.assertTrue(Rules.isMovableStack(table, 0, 1))
        self.assertTrue(Rules.isMovableStack(table, 0, 2))
        self.assertTrue(Rules.isMovableStack(table, 0, 3))

    def test_face_down_card_is_not_movable(self):
        f = self.f
        table = Table.fromLayout([[f.down(0, 10), f.up(0, 9)]])
        self.assertFalse(Rules.isMovableStack(table, 0, 0))

    def test_suit_break_is_not_movable(self):
        f = self.f
        table = Table.fromLayout([[f.up(0, 9), f.up(1, 8), f.up(1, 7)]])
        self.assertFalse(Rules.isMovableStack(table, 0, 0))
        self.assertTrue(Rules.isMovableStack(table, 0, 1))

    def test_rank_gap_is_not_movable(self):
        f = self.f
        table = Table.fromLayout([[f.up(0, 9), f.up(0, 7)]])
        self.assertFalse(Rules.isMovableStack(table, 0, 0))

    def test_ascending_pair_is_not_movable(self):
        f = self.f
        table = Table.fromLayout([[f.up(0, 7), f.up(0, 8)]])
        self.assertFalse(Rules.isMovableStack(table, 0, 0))

    def test_out_of_range_is_not_movable(self):
        f = self.f
        table = Table.fromLayout([[f.up(0, 7)], []])
        self.assertFalse(Rules.isMovableStack(table, 0, 1))
        self.assertFalse(Rules.isMovableStack(table, 0, -1))
        self.assertFalse(Rules.isMovableStack(table, 1, 0))
        self.assertFalse(Rules.isMovableStack(table, 5, 0))

    def test_movable_start_finds_longest_run(self):
        f = self.f
        table = Table.fromLayout([
            [f.down(0, 1), f.up(1, 10), f.up(0, 9), f.up(0, 8)],
            [f.down(0, 3)],
            [],
            [f.up(0, 4)],
        ])
        self.assertEqual(2, Rules.movableStart(table, 0))
        self.assertIsNone(Rules.movableStart(table, 1))
        self.assertIsNone(Rules.movableStart(table, 2))
        self.assertEqual(0, Rules.movableStart(table, 3))


class DestinationTestCase(unittest.TestCase):
    def setUp(self):
        self.f = CardFactory()

    def test_empty_column_accepts_anything(self):
        f = self.f
        moving = f.up(1, 4)
        table = Table.fromLayout([[moving], []])
        self.assertTrue(Rules.isValidDestination(table, moving[0].id, 1))

    def test_one_higher_accepts_regardless_of_suit(self):
        f = self.f
        moving = f.up(1, 4)
        table = Table.fromLayout([[moving], [f.up(0, 5)], [f.up(1, 5)]])
        self.assertTrue(Rules.isValidDestination(table, moving[0].id, 1))
        self.assertTrue(Rules.isValidDestination(table, moving[0].id, 2))

    def test_wrong_rank_is_rejected(self):
        f = self.f
        moving = f.up(1, 4)
        table = Table.fromLayout([[moving], [f.up(1, 6)], [f.up(1, 3)], [f.up(1, 4)]])
        for dest in (1, 2, 3):
            self.assertFalse(Rules.isValidDestination(table, moving[0].id, dest))

    def test_face_down_top_is_rejected(self):
        f = self.f
        moving = f.up(1, 4)
        table = Table.fromLayout([[moving], [f.down(1, 5)]])
        self.assertFalse(Rules.isValidDestination(table, moving[0].id, 1))

    def test_valid_targets_excludes_source(self):
        f = self.f
        table = Table.fromLayout([[f.up(0, 4)], [f.up(1, 5)], [], [f.up(0, 9)]])
        self.assertEqual((1, 2), Rules.validTargets(table, 0, 0))
        self.assertEqual((), Rules.validTargets(table, 3, 5))


class ExistValidMoveTestCase(unittest.TestCase):
    def setUp(self):
        self.f = CardFactory()

    def test_hidden_top_counts_as_move(self):
        f = self.f
        table = Table.fromLayout([[f.down(0, 4)], [f.up(0, 9)]])
        self.assertTrue(Rules.existValidMove(table))

    def test_stuck_position(self):
        f = self.f
        table = Table.fromLayout([[f.up(0, 4)], [f.up(0, 9)]])
        self.assertFalse(Rules.existValidMove(table))

    def test_whole_column_to_empty_column_does_not_count(self):
        f = self.f
        table = Table.fromLayout([[f.up(0, 4)], []])
        self.assertFalse(Rules.existValidMove(table))

    def test_partial_column_to_empty_column_counts(self):
        f = self.f
        table = Table.fromLayout([[f.up(1, 9), f.up(0, 4)], []])
        self.assertTrue(Rules.existValidMove(table))


class RunCompletionTestCase(unittest.TestCase):
    def setUp(self):
        self.f = CardFactory()

    def test_complete_run_is_cleared_and_next_card_revealed(self):
        f = self.f
        hidden = f.down(1, 3)
        table = Table.fromLayout([[hidden] + f.run(0), []])
        cleared = Rules.tryCompleteRun(table, 0)
        self.assertIsNotNone(cleared)
        self.assertEqual(0, cleared.column)
        self.assertEqual(13, len(cleared.cards))
        self.assertEqual([hidden[0].id], table.column(0))
        self.assertTrue(table.isFaceUp(hidden[0].id))
        self.assertEqual(hidden[0].id, cleared.flip.card)
        self.assertEqual([cleared.cards], table.foundations)
        table.checkIntegrity()

    def test_run_on_face_up_card_reports_no_flip(self):
        f = self.f
        table = Table.fromLayout([[f.up(1, 3)] + f.run(1)])
        cleared = Rules.tryCompleteRun(table, 0)
        self.assertIsNone(cleared.flip)
        self.assertEqual(1, len(table.column(0)))

    def test_run_filling_whole_column_leaves_it_empty(self):
        f = self.f
        table = Table.fromLayout([f.run(0)])
        cleared = Rules.tryCompleteRun(table, 0)
        self.assertIsNone(cleared.flip)
        self.assertEqual([], table.column(0))

    def test_mixed_suit_run_is_not_cleared(self):
        f = self.f
        cards = f.run(0, 12, 7) + f.run(1, 6, 0)
        table = Table.fromLayout([cards])
        self.assertIsNone(Rules.tryCompleteRun(table, 0))
        self.assertEqual(13, len(table.column(0)))
        self.assertEqual([], table.foundations)

    def test_run_not_ending_in_ace_is_not_cleared(self):
        f = self.f
        table = Table.fromLayout([[f.up(0, 12)] + f.run(0, 12, 1)])
        self.assertIsNone(Rules.tryCompleteRun(table, 0))

    def test_short_column_is_not_cleared(self):
        f = self.f
        table = Table.fromLayout([f.run(0, 11, 0)])
        self.assertIsNone(Rules.tryCompleteRun(table, 0))

    def test_only_one_run_cleared_per_call(self):
        f = self.f
        table = Table.fromLayout([f.run(0) + f.run(1)])
        self.assertIsNotNone(Rules.tryCompleteRun(table, 0))
        self.assertEqual(13, len(table.column(0)))
        self.assertEqual(1, len(table.foundations))


if __name__ == "__main__":
    unittest.main()
