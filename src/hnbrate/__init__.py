# src/hnbrate/__init__.py
"""
hnbrate - HNB Exchange Rates JSON Service

Serves the Croatian National Bank exchange list as JSON, refreshed in the
background every hour and kept available from memory when the bank's
server cannot be reached.
"""

__version__ = "1.0.0"
