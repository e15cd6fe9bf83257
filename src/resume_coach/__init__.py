"""AI-assisted resume suggestions with a debounced, rate-limited refresh loop."""

__version__ = "0.1.0"
