"""Portfolio finance tracker: wallet ledger, money movements and offline sync."""

__version__ = "1.0.0"
