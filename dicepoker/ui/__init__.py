"""
UI module for Dice-Poker-over-SSH.
Provides terminal UI components for consistent presentation.
"""

from .colors import Colors, PHASE_COLORS, colorize
from .dice import dice_horizontal, die_lines, hidden_dice

__all__ = ['Colors', 'PHASE_COLORS', 'colorize', 'dice_horizontal', 'die_lines', 'hidden_dice']
