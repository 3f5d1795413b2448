"""
CLI Adapter
"""

from .main import main, build_parser

__all__ = ["main", "build_parser"]
