# -*- coding: utf-8 -*-
"""
Headless game session for the sliding-tile merge puzzle.

This module provides the `Game` class, which keeps a board and spawns tiles after each move.
"""

from .game import Game

__all__ = ["Game"]
