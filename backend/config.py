import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///landing.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Memory game pacing (seconds)
    MATCH_CHECK_DELAY_SEC = float(os.environ.get('MATCH_CHECK_DELAY_SEC', '1.0'))
    TIMER_TICK_SEC = float(os.environ.get('TIMER_TICK_SEC', '1.0'))
    # Difficulty used when a start request does not name one
    DEFAULT_DIFFICULTY = os.environ.get('DEFAULT_DIFFICULTY', 'easy')
    # Optional: log a timer heartbeat every N ticks. 0 disables.
    TIMER_HEARTBEAT_SEC = int(os.environ.get('TIMER_HEARTBEAT_SEC', '0'))
