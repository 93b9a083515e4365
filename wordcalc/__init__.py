"""wordcalc - answers arithmetic questions asked in plain English."""

__version__ = "0.1.0"
