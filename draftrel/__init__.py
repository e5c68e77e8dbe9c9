"""draft-release: channel-aware release drafting for the desktop app."""

__version__ = "0.1.0"
