"""Base infradrift exception class"""


class InfradriftException(Exception):
    """Base exception class for infradrift exceptions."""
