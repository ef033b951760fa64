import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

# Fixed catalog: Easy uses the first 6 tokens, Hard uses all 12.
CARD_TOKENS: Tuple[str, ...] = (
    '🎨', '🎭', '🎪', '🎬', '🎤', '🎧', '🎮', '🎯', '🎲', '🎳', '🎸', '🎺',
)


class Difficulty(str, Enum):
    EASY = 'easy'
    HARD = 'hard'

    @classmethod
    def parse(cls, value) -> 'Difficulty':
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ValueError(f"Unknown difficulty: {value!r}")


_PAIR_COUNTS = {Difficulty.EASY: 6, Difficulty.HARD: 12}
# (columns, rows) used by the page's grid layout
_GRID_SHAPES = {Difficulty.EASY: (4, 3), Difficulty.HARD: (6, 4)}


@dataclass
class Card:
    id: int
    token: str
    is_flipped: bool = False
    is_matched: bool = False

    def to_dict(self, reveal: bool = False):
        shown = reveal or self.is_flipped or self.is_matched
        return {
            'id': self.id,
            'token': self.token if shown else None,
            'is_flipped': self.is_flipped,
            'is_matched': self.is_matched,
        }


def pair_count(difficulty) -> int:
    return _PAIR_COUNTS[Difficulty.parse(difficulty)]


def grid_shape(difficulty) -> Tuple[int, int]:
    return _GRID_SHAPES[Difficulty.parse(difficulty)]


def shuffle(items: Sequence, rng: Optional[random.Random] = None) -> list:
    """Fisher-Yates shuffle returning a new list; `items` is left untouched."""
    randint = (rng or random).randint
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def generate_card_pairs(difficulty, rng: Optional[random.Random] = None,
                        catalog: Sequence[str] = CARD_TOKENS) -> List[str]:
    """Return the shuffled token layout for a new board.

    Each of the first `pair_count(difficulty)` catalog tokens appears exactly
    twice. A catalog shorter than the pair count is a configuration error.
    """
    needed = pair_count(difficulty)
    if needed > len(catalog):
        raise ValueError(
            f"Difficulty {Difficulty.parse(difficulty).value} needs {needed} tokens, catalog has {len(catalog)}"
        )
    tokens = list(catalog[:needed])
    return shuffle(tokens + tokens, rng=rng)


def build_cards(difficulty, rng: Optional[random.Random] = None) -> List[Card]:
    return [Card(id=index, token=token) for index, token in enumerate(generate_card_pairs(difficulty, rng=rng))]
