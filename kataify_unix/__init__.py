"""
Kataify Unix - Command-line front end for the kataifier

Author: Kataify maintainers | 2026-10-18
"""

from .cli import main, build_parser

__all__ = ["main", "build_parser"]
