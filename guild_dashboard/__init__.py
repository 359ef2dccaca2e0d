"""Guild dashboard backend: per-guild bot command administration."""

__version__ = "1.0.0"
