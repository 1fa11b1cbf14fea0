"""
Dice rendering utilities for Dice-Poker-over-SSH terminal UI.
Handles ASCII art dice and horizontal layout.
"""

from .colors import Colors

PIP = '●'

# Three inner rows per face, 7 characters wide
PIP_ROWS = {
    1: ("       ", f"   {PIP}   ", "       "),
    2: (f" {PIP}     ", "       ", f"     {PIP} "),
    3: (f" {PIP}     ", f"   {PIP}   ", f"     {PIP} "),
    4: (f" {PIP}   {PIP} ", "       ", f" {PIP}   {PIP} "),
    5: (f" {PIP}   {PIP} ", f"   {PIP}   ", f" {PIP}   {PIP} "),
    6: (f" {PIP}   {PIP} ", f" {PIP}   {PIP} ", f" {PIP}   {PIP} "),
}

HIDDEN_ROWS = ("       ", "   ?   ", "       ")

DIE_HEIGHT = 5


def die_lines(face, highlight: bool = False):
    """Format a single die as 5 lines. face=None renders a hidden die."""
    rows = PIP_ROWS.get(face, HIDDEN_ROWS)
    if face in PIP_ROWS:
        color = Colors.RED if highlight else Colors.BLACK
        style = f"{Colors.BOLD}{Colors.BG_WHITE}{color}"
    else:
        style = f"{Colors.DIM}"

    top = f"{style}╭───────╮{Colors.RESET}"
    mid = [f"{style}│{row}│{Colors.RESET}" for row in rows]
    bot = f"{style}╰───────╯{Colors.RESET}"
    return [top] + mid + [bot]


def dice_horizontal(faces, highlight: bool = False):
    """Render multiple dice side-by-side horizontally."""
    if not faces:
        return ""

    all_lines = [die_lines(face, highlight) for face in faces]
    result_lines = []
    for line_idx in range(DIE_HEIGHT):
        result_lines.append(" ".join(lines[line_idx] for lines in all_lines))
    return "\r\n".join(result_lines)


def hidden_dice(count: int = 2):
    """Render face-down dice for a seat whose dice are private."""
    return dice_horizontal([None] * count)
