"""DataUI CLI — browse a JSON table from the terminal."""

__version__ = "0.1.0"
