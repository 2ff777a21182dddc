"""AgriBooks bookkeeping backend and reminder notification engine."""

__version__ = "0.1.0"
