"""
Tablet Control project core.
Layout projects with resolution-independent placement and durable storage.
"""

__version__ = "1.0.0"
