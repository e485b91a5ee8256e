"""Records, statistics, PDF reports and a chat assistant for an insurance agency back office."""

__version__ = "0.1.0"