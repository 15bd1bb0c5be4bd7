"""Legislative news service: filtered article listing behind a Redis read-through cache."""

__version__ = "0.1.0"
