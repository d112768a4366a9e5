"""Parser combinators with committed-input error tracking."""

__version__ = "0.1.0"
__all__ = ["core", "sequence", "repeat", "separated", "until"]