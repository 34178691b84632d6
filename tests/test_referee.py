import unittest

import chess

from blindchess.referee import Referee


class RefereeTests(unittest.TestCase):
    def test_probe_does_not_change_position(self):
        ref = Referee()
        mv = ref.probe_san("e4")
        self.assertEqual(mv, chess.Move.from_uci("e2e4"))
        self.assertEqual(ref.fen(), chess.STARTING_FEN)

    def test_malformed_and_annotated_notation_is_not_legal(self):
        ref = Referee()
        ref.apply_san("e4")
        ref.apply_san("e5")
        for text in ("Ke2??", "", "   ", "xyz", "--", "Zz9"):
            self.assertIsNone(ref.probe_san(text), text)
        self.assertIsNotNone(ref.probe_san("Ke2"))

    def test_castling_with_zeros_and_uci(self):
        ref = Referee("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        self.assertEqual(ref.apply_san("0-0"), "O-O")
        self.assertEqual(ref.apply_san("e8c8"), "O-O-O")

    def test_force_turn_flips_and_clears_en_passant(self):
        ref = Referee()
        ref.apply_san("e4")
        self.assertEqual(ref.board.ep_square, chess.E3)
        ref.force_turn(chess.BLACK)
        self.assertEqual(ref.turn, chess.BLACK)
        self.assertIsNone(ref.board.ep_square)
        ref.force_turn(chess.WHITE)
        self.assertEqual(ref.turn, chess.WHITE)
        self.assertIsNone(ref.board.ep_square)

    def test_force_turn_keeps_clocks_and_restarts_repetition_history(self):
        ref = Referee()
        ref.apply_san("e4")
        ref.force_turn(chess.WHITE)
        self.assertEqual(ref.fen(), "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 0 1")

        ref = Referee()
        for _ in range(3):
            ref.apply_san("Nf3")
            ref.force_turn(chess.WHITE)
            ref.apply_san("Ng1")
            ref.force_turn(chess.WHITE)
        self.assertEqual(ref.board.move_stack, [])
        self.assertFalse(ref.is_game_over())
        self.assertEqual(ref.fen(), "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 6 1")

    def test_threefold_repetition_ends_only_once_on_the_board(self):
        ref = Referee()
        for san in ("Nf3", "Nf6", "Ng1", "Ng8", "Nf3", "Nf6", "Ng1"):
            ref.apply_san(san)
            self.assertFalse(ref.is_game_over(), san)
        ref.apply_san("Ng8")
        self.assertTrue(ref.is_game_over())
        self.assertEqual(ref.status(), "1/2-1/2")

    def test_fifty_move_rule(self):
        ref = Referee("7k/8/8/8/8/8/8/R6K w - - 99 80")
        self.assertFalse(ref.is_game_over())
        ref.apply_san("Ra2")
        self.assertTrue(ref.is_game_over())
        self.assertEqual(ref.status(), "1/2-1/2")

    def test_stalemate_and_insufficient_material(self):
        stalemate = Referee("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")
        self.assertTrue(stalemate.is_game_over())
        self.assertFalse(stalemate.is_checkmate())
        self.assertEqual(stalemate.status(), "1/2-1/2")
        self.assertTrue(Referee("7k/8/8/8/8/8/8/7K w - - 0 1").is_game_over())

    def test_try_move_promotes_to_queen(self):
        ref = Referee("8/4P3/8/8/8/8/8/k6K w - - 0 1")
        self.assertEqual(ref.try_move(chess.E7, chess.E8), "e8=Q")
        self.assertEqual(ref.piece_at(chess.E8), chess.Piece(chess.QUEEN, chess.WHITE))

    def test_try_move_rejects_illegal(self):
        ref = Referee()
        self.assertIsNone(ref.try_move(chess.E2, chess.E5))
        self.assertIsNone(ref.try_move(chess.E4, chess.E5))
        self.assertEqual(ref.fen(), chess.STARTING_FEN)

    def test_king_capture_is_never_legal(self):
        ref = Referee("k7/8/8/8/8/8/8/R6K w - - 0 1")
        self.assertIsNone(ref.probe_san("Rxa8"))
        self.assertNotIn(chess.A8, ref.legal_destinations(chess.A1))
        self.assertIn(chess.A7, ref.legal_destinations(chess.A1))

    def test_undo(self):
        ref = Referee()
        self.assertIsNone(ref.undo())
        ref.apply_san("d4")
        ref.undo()
        self.assertEqual(ref.fen(), chess.STARTING_FEN)

    def test_pgn_shows_forfeited_turn_as_null_move(self):
        ref = Referee()
        ref.set_headers(white="W", black="B", Policy="strict")
        ref.apply_san("e4")
        ref.force_turn(chess.WHITE)
        ref.apply_san("d4")
        pgn = ref.pgn()
        self.assertIn("1. e4 --", pgn)
        self.assertIn('[White "W"]', pgn)
        self.assertIn('[Policy "strict"]', pgn)
        self.assertEqual(ref.status(), "*")


if __name__ == "__main__":
    unittest.main()
