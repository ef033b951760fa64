"""Memory game domain services: board, engine, ledger and timers.

The engine is pure; the controller wires it to Flask-SocketIO background
tasks and the best-score table, keeping transport concerns out of the rules.
"""
from .board import CARD_TOKENS, Card, Difficulty, generate_card_pairs, pair_count
from .engine import GameState, MemoryGame, format_elapsed
from .ledger import BestScoreLedger, best_score_key
