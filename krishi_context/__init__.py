"""Context aggregation and spreadsheet normalization for an agricultural advisor."""

__version__ = "0.1.0"
