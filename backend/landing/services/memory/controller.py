import threading
from contextlib import nullcontext
from typing import Callable, Optional

from flask import has_app_context

from .board import Difficulty
from .engine import MemoryGame, format_elapsed
from .ledger import BestScoreLedger
from .scheduler import DelayedCall, GameTimer, ScheduledTask, run_inline

NAMESPACE = '/ws'
ROOM = 'memory'


class MemoryGameController:
    """Owns the process-wide game, its timer and the best-score ledger.

    - Opening a pair schedules `resolve` after MATCH_CHECK_DELAY_SEC
    - The timer ticks every TIMER_TICK_SEC while a game runs
    - In TESTING the delayed check runs inline and the timer is never started,
      unless a spawner is injected
    - Every accepted transition is pushed to room `memory` on /ws
    """

    def __init__(self, app, socketio, game: Optional[MemoryGame] = None, ledger: Optional[BestScoreLedger] = None,
                 spawn: Optional[Callable] = None, sleep: Optional[Callable] = None):
        self.app = app
        self.socketio = socketio
        self.game = game or MemoryGame(app.config.get('DEFAULT_DIFFICULTY', 'easy'))
        self.ledger = ledger or BestScoreLedger()
        self._lock = threading.RLock()
        if spawn is None:
            spawn = run_inline if app.config.get('TESTING') else socketio.start_background_task
        self._spawn = spawn
        # An inline spawner would block forever on the repeating timer
        self._timer_enabled = spawn is not run_inline
        self._sleep = sleep or socketio.sleep
        self.timer = GameTimer(
            spawn,
            self._on_tick,
            interval=float(app.config.get('TIMER_TICK_SEC', 1.0)),
            sleep=self._sleep,
        )
        self._pending_check: Optional[ScheduledTask] = None

    # ---- transitions ----

    def start(self, difficulty=None):
        if difficulty is not None:
            difficulty = Difficulty.parse(difficulty)
        with self._lock:
            self._cancel_pending_check()
            self.timer.stop()
            state = self.game.start(difficulty)
            self.app.logger.info(
                f"[memory-start] difficulty={state.difficulty.value} pairs={state.target_pairs} generation={state.generation}"
            )
            if self._timer_enabled:
                self.timer.start(state.generation)
            snapshot = self.snapshot()
        self._emit('state_update', snapshot)
        return snapshot

    def reset(self):
        with self._lock:
            difficulty = self.game.state.difficulty
        self.app.logger.info(f"[memory-reset] difficulty={difficulty.value}")
        return self.start(difficulty)

    def change_difficulty(self, level):
        difficulty = Difficulty.parse(level)
        self.app.logger.info(f"[memory-difficulty] difficulty={difficulty.value}")
        return self.start(difficulty)

    def flip(self, card_id: int):
        with self._lock:
            result = self.game.flip(card_id)
            generation = self.game.state.generation
            snapshot = self.snapshot()
        if result.accepted:
            self._emit('state_update', snapshot)
        if result.pair_opened:
            self.app.logger.info(f"[memory-pair] open={snapshot['open_card_ids']} moves={snapshot['moves']}")
            self._schedule_check(generation)
            with self._lock:
                snapshot = self.snapshot()
        return result.accepted, snapshot

    def resolve(self, generation: int):
        with self._lock:
            outcome = self.game.resolve(generation)
            if outcome is None:
                self.app.logger.info(f"[memory-resolve-skip] generation={generation} current={self.game.state.generation}")
                return None
            self.app.logger.info(
                f"[memory-resolve] cards={outcome.card_ids} match={outcome.matched} moves={self.game.state.moves}"
            )
            stats = None
            if outcome.won:
                self.timer.stop()
                stats = self.game.final_stats()
                difficulty = self.game.state.difficulty
                with self._app_context():
                    stats['new_best'] = self.ledger.record_if_better(difficulty, self.game.state.moves)
                    stats['best_moves'] = self.ledger.get(difficulty)
                self.app.logger.info(
                    f"[memory-won] difficulty={difficulty.value} moves={stats['moves']} elapsed={stats['elapsed']} new_best={stats['new_best']}"
                )
            snapshot = self.snapshot()
        self._emit('state_update', snapshot)
        if stats is not None:
            self._emit('game_won', stats)
        return outcome

    # ---- views ----

    def snapshot(self):
        with self._lock:
            payload = self.game.to_dict()
            with self._app_context():
                payload['best_moves'] = self.ledger.get(self.game.state.difficulty)
            if self.game.state.status == 'won':
                payload['final_stats'] = self.game.final_stats()
            return payload

    def best_scores(self):
        with self._app_context():
            return self.ledger.all()

    # ---- timers ----

    def _schedule_check(self, generation: int):
        delay = float(self.app.config.get('MATCH_CHECK_DELAY_SEC', 1.0))
        task = DelayedCall(self._spawn, delay, lambda: self.resolve(generation), sleep=self._sleep)
        with self._lock:
            self._pending_check = task
        task.start()

    def _cancel_pending_check(self):
        if self._pending_check is not None:
            self._pending_check.cancel()
            self._pending_check = None

    def _on_tick(self, generation: Optional[int] = None):
        with self._lock:
            if generation is not None and generation != self.game.state.generation:
                self.app.logger.info(f"[timer-skip] generation={generation} current={self.game.state.generation}")
                return
            if not self.game.tick(generation):
                self.timer.stop()
                return
            elapsed = self.game.state.elapsed_seconds
        try:
            hb = int(self.app.config.get('TIMER_HEARTBEAT_SEC', 0))
        except (TypeError, ValueError):
            hb = 0
        if hb > 0 and elapsed % hb == 0:
            self.app.logger.info(f"[timer-heartbeat] elapsed={elapsed}s")
        self._emit('timer_tick', {'elapsed_seconds': elapsed, 'display': format_elapsed(elapsed)})

    def _emit(self, event: str, payload) -> None:
        self.socketio.emit(event, payload, to=ROOM, namespace=NAMESPACE)

    def _app_context(self):
        if has_app_context():
            return nullcontext()
        return self.app.app_context()
