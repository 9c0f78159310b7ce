"""Table-driven binding-power expression parser."""

__version__ = "0.1.0"
