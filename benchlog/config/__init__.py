"""
Configuration Package

Dependency injection container and settings.
"""

from .container import Container
from .settings import Settings

__all__ = [
    "Container",
    "Settings",
]
