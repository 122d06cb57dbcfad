"""strikeview: rewindable time-window model for lightning strike data."""

__version__ = "0.1.0"
