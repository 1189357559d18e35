"""music_organizer: organize music libraries using their embedded metadata."""

__version__ = "0.1.0"
