"""Annotate variants with literature evidence from the AVADA database."""

__version__ = "0.1.0"
