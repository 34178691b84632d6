"""
Blind Chess package.

Components:
- referee: python-chess adapter (legality, probing, forced turns, PGN)
- blind/recorder: blind move authoring with phantom pawn captures and replay-based undo
- simulator/scoring: reconciliation of two move-lists under STRICT or SEEK_NEXT
- movelist/history: move-list text artifacts and trace JSON export
"""
# Package exports are intentionally minimal; import modules directly as needed.
