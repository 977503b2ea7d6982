"""lockin: a focus timer that draws the mascot in as you lock in."""

__version__ = "0.1.0"
