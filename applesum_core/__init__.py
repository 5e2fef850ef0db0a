"""
Apple Sum 9 core Python package.

This package contains the data structures and pure-logic helpers behind the
sum-to-9 tile puzzle, kept apart from the Flask app so they are easy to test.
Modules:
- board.py: Tile, Board
- deal.py: tile generation and replacement
- state.py: GameSession
- rules.py: pure selection / resolution transitions
- controller.py: MatchController (owns the session, scheduler and store)
- scheduler.py, db.py, config.py, cli.py: ambient helpers
"""
