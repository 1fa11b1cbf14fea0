"""
ANSI color codes for terminal output in Dice-Poker-over-SSH.
"""


class Colors:
    """ANSI color codes for terminal formatting."""
    RED = '\033[31m'
    BLACK = '\033[30m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    GREY = '\033[90m'
    RESET = '\033[0m'
    BG_WHITE = '\033[47m'
    CLEAR_SCREEN = '\033[2J\033[H'


# Color per table phase, used in the status line
PHASE_COLORS = {
    'IDLE': Colors.GREY,
    'PRE_FLOP': Colors.CYAN,
    'FLOP': Colors.BLUE,
    'TURN': Colors.MAGENTA,
    'RIVER': Colors.YELLOW,
    'SHOWDOWN': Colors.GREEN,
}


def colorize(text: str, *codes: str) -> str:
    """Wrap text in the given ANSI codes and reset afterwards."""
    if not codes:
        return text
    return f"{''.join(codes)}{text}{Colors.RESET}"
