"""
Property Watch API: property listings, event history and per-user watchlists.
"""

__version__ = "1.0.0"
