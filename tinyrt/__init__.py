"""C-style text helpers, a compact printf-style formatter and a threading demo."""

__version__ = "0.1.0"
__all__ = ["textfuncs", "numfmt", "formatting", "demo"]