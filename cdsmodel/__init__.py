"""Building blocks of a concurrency model checker: thread model, scheduler,
wait records, an ordered hash set, bug messages and a small printf engine."""

__version__ = "0.1.0"