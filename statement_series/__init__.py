"""Bank statement PDF extraction into a reconciled balance series."""

__version__ = "0.1.0"
