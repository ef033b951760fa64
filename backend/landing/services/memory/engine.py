"""Memory game state machine.

Pure transitions over a single `GameState`. Nothing here knows about Flask,
sockets or wall-clock time: the controller decides when `resolve` and `tick`
run, which keeps every transition testable with a seeded RNG.

States: idle -> active <-> resolving, and active/resolving -> won.
"""
import random
from dataclasses import dataclass, field
from typing import List, Optional, Set

from .board import Card, Difficulty, build_cards, grid_shape, pair_count

STATUS_IDLE = 'idle'
STATUS_ACTIVE = 'active'
STATUS_RESOLVING = 'resolving'
STATUS_WON = 'won'


def format_elapsed(seconds: int) -> str:
    """Render seconds as M:SS (minutes unpadded)."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes}:{secs:02d}"


@dataclass
class FlipResult:
    accepted: bool
    pair_opened: bool = False


@dataclass
class ResolveResult:
    matched: bool
    won: bool
    card_ids: List[int]


@dataclass
class GameState:
    difficulty: Difficulty = Difficulty.EASY
    status: str = STATUS_IDLE
    moves: int = 0
    matched_pair_count: int = 0
    open_card_ids: List[int] = field(default_factory=list)
    matched_card_ids: Set[int] = field(default_factory=set)
    is_checking: bool = False
    cards: List[Card] = field(default_factory=list)
    elapsed_seconds: int = 0
    # Bumped on every start so a delayed resolve from a previous game is ignored
    generation: int = 0

    @property
    def active(self) -> bool:
        return self.status in (STATUS_ACTIVE, STATUS_RESOLVING)

    @property
    def target_pairs(self) -> int:
        return pair_count(self.difficulty)


class MemoryGame:

    def __init__(self, difficulty=Difficulty.EASY, rng: Optional[random.Random] = None):
        self.rng = rng
        self.state = GameState(difficulty=Difficulty.parse(difficulty))

    def start(self, difficulty=None) -> GameState:
        """Begin a fresh game, from any state."""
        s = self.state
        if difficulty is not None:
            s.difficulty = Difficulty.parse(difficulty)
        s.status = STATUS_ACTIVE
        s.moves = 0
        s.matched_pair_count = 0
        s.open_card_ids = []
        s.matched_card_ids = set()
        s.is_checking = False
        s.cards = build_cards(s.difficulty, rng=self.rng)
        s.elapsed_seconds = 0
        s.generation += 1
        return s

    def reset(self) -> GameState:
        return self.start()

    def change_difficulty(self, level) -> GameState:
        return self.start(Difficulty.parse(level))

    def flip(self, card_id: int) -> FlipResult:
        """Turn a card face-up if the rules allow it.

        Disallowed flips are silent no-ops. Opening the second card of a pair
        counts one move and blocks input until `resolve` runs.
        """
        s = self.state
        if s.status != STATUS_ACTIVE:
            return FlipResult(accepted=False)
        if s.is_checking or len(s.open_card_ids) >= 2:
            return FlipResult(accepted=False)
        card = self._card(card_id)
        if card.id in s.matched_card_ids or card.is_flipped:
            return FlipResult(accepted=False)

        card.is_flipped = True
        s.open_card_ids.append(card.id)

        if len(s.open_card_ids) == 2:
            s.is_checking = True
            s.moves += 1
            s.status = STATUS_RESOLVING
            return FlipResult(accepted=True, pair_opened=True)
        return FlipResult(accepted=True)

    def resolve(self, generation: Optional[int] = None) -> Optional[ResolveResult]:
        """Compare the two open cards. Returns None for a stale or empty check."""
        s = self.state
        if generation is not None and generation != s.generation:
            return None
        if s.status != STATUS_RESOLVING or len(s.open_card_ids) != 2:
            return None

        first_id, second_id = s.open_card_ids
        first, second = s.cards[first_id], s.cards[second_id]
        matched = first.token == second.token
        won = False
        if matched:
            first.is_matched = second.is_matched = True
            s.matched_card_ids.update((first_id, second_id))
            s.matched_pair_count += 1
            won = s.matched_pair_count == s.target_pairs
        else:
            first.is_flipped = second.is_flipped = False

        s.open_card_ids = []
        s.is_checking = False
        s.status = STATUS_WON if won else STATUS_ACTIVE
        return ResolveResult(matched=matched, won=won, card_ids=[first_id, second_id])

    def tick(self, generation: Optional[int] = None) -> bool:
        """Advance the clock by one second while a game is running.

        A tick scheduled for an earlier game (generation mismatch) is dropped.
        """
        if generation is not None and generation != self.state.generation:
            return False
        if not self.state.active:
            return False
        self.state.elapsed_seconds += 1
        return True

    def final_stats(self):
        s = self.state
        elapsed = format_elapsed(s.elapsed_seconds)
        return {
            'pairs': s.target_pairs,
            'moves': s.moves,
            'elapsed_seconds': s.elapsed_seconds,
            'elapsed': elapsed,
            'message': f"Jūs surašėte {s.target_pairs} porų per {s.moves} ėjimų per {elapsed}!",
        }

    def to_dict(self, reveal: bool = False):
        s = self.state
        columns, rows = grid_shape(s.difficulty)
        return {
            'difficulty': s.difficulty.value,
            'status': s.status,
            'active': s.active,
            'moves': s.moves,
            'matched_pairs': s.matched_pair_count,
            'total_pairs': s.target_pairs,
            'open_card_ids': list(s.open_card_ids),
            'matched_card_ids': sorted(s.matched_card_ids),
            'is_checking': s.is_checking,
            'elapsed_seconds': s.elapsed_seconds,
            'elapsed': format_elapsed(s.elapsed_seconds),
            'grid': {'columns': columns, 'rows': rows},
            'cards': [c.to_dict(reveal=reveal) for c in s.cards],
        }

    def _card(self, card_id) -> Card:
        if isinstance(card_id, bool) or not isinstance(card_id, int):
            raise ValueError(f"card_id must be an integer, got {card_id!r}")
        if not 0 <= card_id < len(self.state.cards):
            raise ValueError(f"card_id {card_id} is outside the board")
        return self.state.cards[card_id]
