"""
Source valuation: composite value scores and strategic quadrants for
content/citation sources.
"""

__version__ = "0.1.0"
