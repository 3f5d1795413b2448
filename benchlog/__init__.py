"""
benchlog

Parse, store and compare Go benchmark results.
"""

__version__ = "0.1.0"
