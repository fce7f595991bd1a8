"""
API Service - HTTP front of the CV analyzer.
"""

from .app import create_app

__all__ = ["create_app"]
