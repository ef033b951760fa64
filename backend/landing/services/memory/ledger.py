import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from landing import db
from landing.models import BestScore
from .board import Difficulty

logger = logging.getLogger(__name__)

KEY_PREFIX = 'memoryGame_best_'


def best_score_key(difficulty) -> str:
    return f"{KEY_PREFIX}{Difficulty.parse(difficulty).value}"


class BestScoreLedger:
    """Lowest move count per difficulty, stored one row per key.

    Storage errors are logged and treated as "no score" / "not updated" so a
    broken database never interrupts a game.
    """

    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def get(self, difficulty) -> Optional[int]:
        key = best_score_key(difficulty)
        try:
            row = self.session.query(BestScore).filter_by(key=key).first()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.warning(f"[ledger-error] read key={key} failed: {exc}")
            return None
        return row.moves if row else None

    def record_if_better(self, difficulty, moves: int) -> bool:
        key = best_score_key(difficulty)
        moves = int(moves)
        try:
            row = self.session.query(BestScore).filter_by(key=key).first()
            if row is not None and moves >= row.moves:
                return False
            if row is None:
                row = BestScore(key=key, moves=moves)
            else:
                row.moves = moves
            self.session.add(row)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.warning(f"[ledger-error] write key={key} moves={moves} failed: {exc}")
            return False
        logger.info(f"[ledger-best] key={key} moves={moves}")
        return True

    def all(self):
        return {d.value: self.get(d) for d in Difficulty}

    def clear(self) -> None:
        try:
            self.session.query(BestScore).delete()
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
