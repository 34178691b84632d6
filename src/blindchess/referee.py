"""
Referee: the rule engine adapter every other module talks to.

- Owns a python-chess Board and applies moves given as notation or as source/target squares.
- Probes notation for legality without side effects (malformed text is simply not legal).
- Exposes the narrow square mutation used for phantom pieces and force_turn() for the
  "same side stays to move" transform used by authoring and by forfeited turns.
- force_turn() reloads the position with the new side to move: clocks are kept, the
  repetition history starts over.
- Emits PGN for whatever was applied so far; forfeited turns show up as null moves.

Used by the blind proposer/recorder (restricted boards) and by the reconciliation simulator.

"""
from __future__ import annotations
import chess, chess.pgn, datetime

from .notation import parse_notation

FIFTY_MOVE_PLIES = 100


class Referee:
    """Chess referee around a python-chess Board."""
    def __init__(self, starting_fen: str | None = None):
        self.board = chess.Board(fen=starting_fen) if starting_fen else chess.Board()
        self._root = self.board.copy(stack=False)
        # applied moves plus a null move per forfeited turn, replayed for PGN export
        self._played: list[chess.Move] = []
        self._headers: dict[str, str] = {}

    # ---------------- Header Management -----------------
    def set_headers(self, white: str = "?", black: str = "?", **tags: str) -> None:
        """Player labels plus any extra PGN tags (e.g. Event="...", Policy="strict")."""
        self._headers.update({
            "Event": "Blind Chess",
            "Date": datetime.date.today().strftime("%Y.%m.%d"),
            "White": white,
            "Black": black,
        })
        self._headers.update(tags)

    # ---------------- State Inspection -----------------
    def fen(self) -> str:
        return self.board.fen()

    @property
    def turn(self) -> chess.Color:
        return self.board.turn

    def is_check(self) -> bool:
        return self.board.is_check()

    def is_checkmate(self) -> bool:
        return self.board.is_checkmate()

    def is_game_over(self) -> bool:
        """Mate, stalemate, insufficient material, threefold repetition on the board, or fifty moves."""
        b = self.board
        return (
            b.is_checkmate()
            or b.is_stalemate()
            or b.is_insufficient_material()
            or b.is_repetition(3)
            or b.halfmove_clock >= FIFTY_MOVE_PLIES
        )

    def piece_at(self, square: chess.Square) -> chess.Piece | None:
        return self.board.piece_at(square)

    def put_piece(self, square: chess.Square, piece: chess.Piece) -> None:
        self.board.set_piece_at(square, piece)

    def remove_piece(self, square: chess.Square) -> chess.Piece | None:
        return self.board.remove_piece_at(square)

    # ---------------- Legality -----------------
    def is_legal(self, mv: chess.Move) -> bool:
        """Legal per python-chess, and never a king capture (possible after forced turns)."""
        if not self.board.is_legal(mv):
            return False
        target = self.board.piece_at(mv.to_square)
        return not (target and target.piece_type == chess.KING)

    def legal_destinations(self, square: chess.Square) -> list[chess.Square]:
        moves = self.board.generate_legal_moves(from_mask=chess.BB_SQUARES[square])
        return sorted({mv.to_square for mv in moves if self.is_legal(mv)})

    def probe_san(self, text: str) -> chess.Move | None:
        """Return the legal move the notation describes, without applying it."""
        mv = parse_notation(self.board, text)
        if mv is None or not self.is_legal(mv):
            return None
        return mv

    # ---------------- Move Application -----------------
    def apply_move(self, mv: chess.Move) -> str:
        san = self.board.san(mv)
        self.board.push(mv)
        self._played.append(mv)
        return san

    def apply_san(self, text: str) -> str | None:
        mv = self.probe_san(text)
        if mv is None:
            return None
        return self.apply_move(mv)

    def try_move(self, from_square: chess.Square, to_square: chess.Square,
                 promotion: chess.PieceType = chess.QUEEN) -> str | None:
        """Apply from/to if legal; the promotion piece is only used for pawns reaching the last rank."""
        piece = self.board.piece_at(from_square)
        if piece is None:
            return None
        last_rank = 7 if piece.color == chess.WHITE else 0
        promo = None
        if piece.piece_type == chess.PAWN and chess.square_rank(to_square) == last_rank:
            promo = promotion
        mv = chess.Move(from_square, to_square, promotion=promo)
        if not self.is_legal(mv):
            return None
        return self.apply_move(mv)

    def undo(self) -> chess.Move | None:
        """Take back the last move played since the most recent force_turn()."""
        if not self.board.move_stack:
            return None
        self._played.pop()
        return self.board.pop()

    def force_turn(self, color: chess.Color) -> None:
        """Make `color` the side to move and clear en passant.

        Both clocks are kept as they are. The board is reloaded from the edited
        position, so earlier positions no longer count towards repetition.
        """
        if self.board.turn != color:
            self._played.append(chess.Move.null())
        board = self.board.copy(stack=False)
        board.turn = color
        board.ep_square = None
        self.board = board

    # ---------------- PGN / Status -----------------
    def pgn(self) -> str:
        replay = self._root.copy()
        for mv in self._played:
            replay.push(mv)
        game = chess.pgn.Game.from_board(replay)
        for k, v in self._headers.items():
            game.headers[k] = v
        game.headers["Result"] = self.status()
        exporter = chess.pgn.StringExporter(headers=True, variations=False, comments=False)
        return game.accept(exporter)

    def status(self) -> str:
        if not self.is_game_over():
            return "*"
        if self.board.is_checkmate():
            return "0-1" if self.board.turn == chess.WHITE else "1-0"
        return "1/2-1/2"
