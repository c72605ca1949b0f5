"""LetUsCook: personal recipe book with free-text ingredient and step editing."""

__version__ = "0.1.0"
