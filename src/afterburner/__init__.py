"""Afterburner: participant, medal and leaderboard site for a mentorship program."""

__version__ = "0.1.0"
