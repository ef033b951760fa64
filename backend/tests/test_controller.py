import random

import pytest

from landing import socketio
from landing.services.memory.controller import MemoryGameController
from landing.services.memory.engine import MemoryGame
from landing.services.memory.scheduler import DelayedCall, RepeatingCall, ScheduledTask


class ManualSpawn:
    """Queues background workers; the test runs them by task type."""

    def __init__(self):
        self.workers = []

    def __call__(self, target, *args):
        self.workers.append((target, args))

    def run(self, kind):
        ready = [w for w in self.workers if isinstance(w[0].__self__, kind)]
        self.workers = [w for w in self.workers if w not in ready]
        for target, args in ready:
            target(*args)


class CountingSleep:
    """Returns immediately; calls `on_limit` once `limit` sleeps have happened."""

    def __init__(self):
        self.calls = 0
        self.limit = None
        self.on_limit = None

    def __call__(self, seconds):
        self.calls += 1
        if self.limit is not None and self.calls >= self.limit:
            self.on_limit()


@pytest.fixture()
def timed(flask_app):
    spawn = ManualSpawn()
    sleep = CountingSleep()
    ctl = MemoryGameController(
        flask_app,
        socketio,
        game=MemoryGame('easy', rng=random.Random(9)),
        spawn=spawn,
        sleep=sleep,
    )
    return ctl, spawn, sleep


def mismatched_ids(cards):
    first = cards[0]
    other = next(c for c in cards if c.token != first.token)
    return first.id, other.id


def pairs_by_token(cards):
    grouped = {}
    for card in cards:
        grouped.setdefault(card.token, []).append(card.id)
    return list(grouped.values())


def test_start_runs_timer_until_stopped(timed):
    ctl, spawn, sleep = timed
    ctl.start()
    assert ctl.timer.running is True
    # three ticks, then the fourth wake-up finds the timer stopped
    sleep.limit = 4
    sleep.on_limit = ctl.timer.stop
    spawn.run(RepeatingCall)
    assert ctl.game.state.elapsed_seconds == 3
    assert ctl.timer.running is False


def test_restart_cancels_pending_check(timed):
    ctl, spawn, _ = timed
    ctl.start()
    a, b = mismatched_ids(ctl.game.state.cards)
    ctl.flip(a)
    ctl.flip(b)
    old_generation = ctl.game.state.generation
    assert ctl.game.state.is_checking is True
    assert isinstance(ctl._pending_check, ScheduledTask)

    ctl.start()
    spawn.run(DelayedCall)
    state = ctl.game.state
    assert state.status == 'active'
    assert state.moves == 0
    assert state.is_checking is False
    assert ctl.resolve(old_generation) is None


def test_win_stops_timer_and_records_best(timed):
    ctl, spawn, _ = timed
    ctl.start()
    for a, b in pairs_by_token(ctl.game.state.cards):
        ctl.flip(a)
        ctl.flip(b)
        spawn.run(DelayedCall)
    assert ctl.game.state.status == 'won'
    assert ctl.timer.running is False
    # the cancelled timer loop exits without another tick
    spawn.run(RepeatingCall)
    assert ctl.game.state.elapsed_seconds == 0
    assert ctl.best_scores()['easy'] == 6


def test_rejected_difficulty_leaves_running_game_intact(timed, client, flask_app):
    ctl, spawn, _ = timed
    flask_app.extensions['memory_game'] = ctl
    ctl.start()
    a, b = mismatched_ids(ctl.game.state.cards)
    ctl.flip(a)
    ctl.flip(b)
    generation = ctl.game.state.generation

    with pytest.raises(ValueError):
        ctl.start('medium')
    assert client.post('/api/memory/start', json={'difficulty': 'medium'}).status_code == 400

    assert ctl.game.state.generation == generation
    assert ctl.timer.running is True
    spawn.run(DelayedCall)
    state = ctl.game.state
    assert state.status == 'active'
    assert state.is_checking is False
    assert state.moves == 1
    accepted, _ = ctl.flip(a)
    assert accepted is True


def test_tick_from_previous_game_is_dropped(timed):
    ctl, spawn, sleep = timed
    ctl.start()
    old_task = spawn.workers[0][0].__self__
    old_generation = ctl.game.state.generation

    ctl.start()
    # an old loop that already passed its cancel check still fires once
    old_task._callback()
    ctl._on_tick(old_generation)
    assert ctl.game.state.elapsed_seconds == 0
    assert ctl.timer.running is True

    sleep.limit = 3
    sleep.on_limit = ctl.timer.stop
    spawn.run(RepeatingCall)
    assert ctl.game.state.elapsed_seconds == 2
