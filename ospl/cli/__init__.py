"""Command line interface for ospl."""

from .main import main

__all__ = ['main']
