import unittest

import chess

from blindchess.recorder import RESTRICTED_START_FEN, MoveListRecorder


class MoveListRecorderTests(unittest.TestCase):
    def test_starts_from_restricted_position(self):
        rec = MoveListRecorder("white")
        self.assertEqual(rec.fen, RESTRICTED_START_FEN[chess.WHITE])
        self.assertEqual(rec.moves, [])
        self.assertEqual(rec.default_filename(), "white.txt")

    def test_blind_capture_is_recorded_and_side_stays(self):
        rec = MoveListRecorder(chess.WHITE)
        self.assertEqual(rec.commit("e2", "e4"), "e4")
        self.assertIn("d5", rec.propose("e4"))
        self.assertEqual(rec.commit("e4", "d5"), "exd5")
        self.assertEqual(rec.moves, ["e4", "exd5"])
        self.assertEqual(rec.ref.turn, chess.WHITE)
        self.assertEqual(chess.Board(rec.fen).turn, chess.WHITE)

    def test_destination_outside_proposals_is_ignored(self):
        rec = MoveListRecorder("white")
        before = rec.fen
        self.assertIsNone(rec.commit("e2", "e5"))
        self.assertIsNone(rec.commit("e3", "e4"))
        self.assertEqual(rec.moves, [])
        self.assertEqual(rec.fen, before)

    def test_bad_square_name_raises(self):
        rec = MoveListRecorder("white")
        with self.assertRaises(ValueError):
            rec.propose("z9")

    def test_undo_matches_replay_of_remaining_moves(self):
        rec = MoveListRecorder("white")
        rec.commit("e2", "e4")
        rec.commit("e4", "d5")
        rec.commit("g1", "f3")
        self.assertEqual(rec.undo(), "Nf3")

        fresh = MoveListRecorder("white")
        fresh.commit("e2", "e4")
        fresh.commit("e4", "d5")
        self.assertEqual(rec.moves, ["e4", "exd5"])
        self.assertEqual(rec.fen, fresh.fen)

    def test_undo_rebuilds_phantom_capture(self):
        rec = MoveListRecorder("white")
        rec.commit("e2", "e4")
        rec.commit("e4", "d5")
        rec.commit("d5", "c6")
        rec.undo()
        self.assertEqual(rec.moves, ["e4", "exd5"])
        self.assertEqual(rec.ref.piece_at(chess.D5), chess.Piece(chess.PAWN, chess.WHITE))
        self.assertIsNone(rec.ref.piece_at(chess.E4))
        self.assertEqual(rec.ref.turn, chess.WHITE)

    def test_undo_to_start_and_on_empty(self):
        rec = MoveListRecorder("black")
        self.assertIsNone(rec.undo())
        self.assertEqual(rec.commit("e7", "e5"), "e5")
        self.assertEqual(rec.ref.turn, chess.BLACK)
        rec.undo()
        self.assertEqual(rec.fen, RESTRICTED_START_FEN[chess.BLACK])

    def test_castling_survives_undo(self):
        rec = MoveListRecorder("white")
        for src, dst in (("g1", "f3"), ("g2", "g3"), ("f1", "g2")):
            self.assertIsNotNone(rec.commit(src, dst))
        self.assertIn("g1", rec.propose("e1"))
        self.assertEqual(rec.commit("e1", "g1"), "O-O")
        rec.undo()
        self.assertEqual(rec.commit("e1", "g1"), "O-O")
        self.assertEqual(rec.moves, ["Nf3", "g3", "Bg2", "O-O"])

    def test_reset_can_switch_color(self):
        rec = MoveListRecorder("white")
        rec.commit("d2", "d4")
        rec.reset("black")
        self.assertEqual(rec.color, chess.BLACK)
        self.assertEqual(rec.moves, [])
        self.assertEqual(rec.fen, RESTRICTED_START_FEN[chess.BLACK])
        self.assertEqual(rec.default_filename(), "black.txt")

    def test_authoring_keeps_fullmove_number(self):
        rec = MoveListRecorder("white")
        for _ in range(30):
            self.assertEqual(rec.commit("g1", "f3"), "Nf3")
            self.assertEqual(rec.commit("f3", "g1"), "Ng1")
        self.assertEqual(rec.fen, "7k/8/8/8/8/8/PPPPPPPP/RNBQKBNR w KQ - 60 1")
        rec.undo()
        self.assertEqual(rec.fen, "7k/8/8/8/8/5N2/PPPPPPPP/RNBQKB1R w KQ - 59 1")

    def test_export_is_frozen_text(self):
        rec = MoveListRecorder("white")
        rec.commit("e2", "e4")
        rec.commit("e4", "f5")
        exported = rec.export()
        self.assertEqual(exported, ("e4", "exf5"))
        rec.undo()
        self.assertEqual(exported, ("e4", "exf5"))
        self.assertEqual(rec.to_text(), "e4")


if __name__ == "__main__":
    unittest.main()
