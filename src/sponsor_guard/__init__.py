"""Sponsor Guard - detect sponsorship offers in rendered mail pages."""

__version__ = "0.1.0"
