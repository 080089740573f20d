"""Pickem: prediction rules engine for tournament pick'em pools."""

__version__ = "0.1.0"
