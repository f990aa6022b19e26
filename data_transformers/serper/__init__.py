from .transformer import SerperNewsTransformer, UNKNOWN_SOURCE

__all__ = ["SerperNewsTransformer", "UNKNOWN_SOURCE"]
