__version__ = "0.4.2"  # pragma: no cover
