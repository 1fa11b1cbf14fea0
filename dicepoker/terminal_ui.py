"""
Terminal renderer for Dice-Poker-over-SSH.

Turns a redacted room snapshot into a colorized string for an SSH client.
Presentation only: nothing here mutates game state.
"""

from .ui.colors import Colors, PHASE_COLORS, colorize
from .ui.dice import dice_horizontal, hidden_dice

NEWLINE = "\r\n"


class TerminalUI:
    def __init__(self, viewer_id: str):
        self.viewer_id = viewer_id

    def _seat_line(self, idx: int, player: dict, active_idx: int, phase: str = 'IDLE') -> str:
        if player.get('has_folded'):
            status_icon = colorize("❌", Colors.RED)
        elif player.get('is_winner'):
            status_icon = "🏆"
        else:
            status_icon = colorize("✅", Colors.GREEN)

        player_type = "👤" if player.get('is_human') else "🤖"
        host = " ⭐" if player.get('is_host') else ""
        you = colorize(" (you)", Colors.GREEN) if player.get('id') == self.viewer_id else ""
        marker = " 🎯" if idx == active_idx else ""
        bet = f" (bet: {player['bet']})" if player.get('bet') else ""
        line = f"  {status_icon} {player_type} {player.get('name')}{host}{you}: {player.get('chips')} chips{bet}{marker}"
        if phase not in ('IDLE', 'SHOWDOWN') and not player.get('has_folded') and not player.get('hole_dice'):
            line += colorize(" [? ?]", Colors.DIM)

        hand = player.get('hand_result')
        if hand:
            line += colorize(f"  · {hand['description']}", Colors.DIM)
        return line

    def render(self, view: dict) -> str:
        """Render a room view as a colorized string."""
        out = [Colors.CLEAR_SCREEN]
        phase = view.get('phase', 'IDLE')
        players = view.get('players', [])
        active_idx = view.get('active_player_idx', -1)

        out.append(colorize(f"🎲 DICE POKER  ·  Room {view.get('room_id')} 🎲", Colors.BOLD, Colors.YELLOW))
        out.append(colorize(f"Phase: {phase.replace('_', ' ').title()}", PHASE_COLORS.get(phase, Colors.DIM)))
        out.append("")

        current = players[active_idx] if 0 <= active_idx < len(players) else None
        if current is not None:
            if current.get('id') == self.viewer_id:
                out.append(colorize("🎯 YOUR TURN", Colors.BOLD, Colors.GREEN))
            elif not current.get('is_human'):
                out.append(colorize(f"🤖 {current.get('name')}'s turn (thinking...)", Colors.BOLD, Colors.CYAN))
            else:
                out.append(colorize(f"👤 {current.get('name')}'s turn", Colors.BOLD, Colors.CYAN))
            out.append("")

        out.append(colorize(f"💰 POT: {view.get('pot', 0)}", Colors.BOLD, Colors.GREEN))
        if view.get('current_bet'):
            out.append(colorize(f"Current bet: {view['current_bet']}", Colors.DIM))
        out.append("")

        community = view.get('community_dice', [])
        if community:
            out.append(colorize("🎲 Community Dice:", Colors.BOLD, Colors.CYAN))
            out.append(dice_horizontal(community))
            out.append("")

        if players:
            out.append(colorize("👥 Players:", Colors.BOLD, Colors.CYAN))
            for idx, player in enumerate(players):
                out.append(self._seat_line(idx, player, active_idx, phase))
                if player.get('id') != self.viewer_id and phase == 'SHOWDOWN' and player.get('hole_dice'):
                    out.append(dice_horizontal(player['hole_dice'], highlight=bool(player.get('is_winner'))))
            out.append("")

        me = next((p for p in players if p.get('id') == self.viewer_id), None)
        if me is not None and me.get('hole_dice'):
            out.append(colorize("🎴 Your Dice:", Colors.BOLD, Colors.YELLOW))
            out.append(dice_horizontal(me['hole_dice'], highlight=bool(me.get('is_winner'))))
            out.append("")
        elif me is not None and phase not in ('IDLE', 'SHOWDOWN'):
            out.append(colorize("🎴 Your Dice:", Colors.BOLD, Colors.YELLOW))
            out.append(hidden_dice())
            out.append("")

        log = view.get('log', [])
        if log:
            out.append(colorize("📜 Recent Actions:", Colors.BOLD, Colors.CYAN))
            for entry in log[-6:]:
                out.append(colorize(f"  {entry}", Colors.DIM))
            out.append("")

        out.append(self._prompt_hint(view, me, current))
        return NEWLINE.join(out)

    def _prompt_hint(self, view: dict, me, current) -> str:
        phase = view.get('phase')
        if current is not None and current.get('id') == self.viewer_id:
            return f"{Colors.BOLD}Available actions: {colorize('call', Colors.GREEN)}, {colorize('check', Colors.GREEN)}, {colorize('fold', Colors.GREEN)}"
        if me is not None and me.get('is_host'):
            if phase == 'IDLE':
                return colorize("💡 Type 'bot' to add a bot or 'start' to roll a new round", Colors.DIM)
            if phase == 'SHOWDOWN':
                return colorize("💡 Type 'start' to roll a new round", Colors.DIM)
        if current is not None:
            return colorize(f"Waiting for {current.get('name')}...", Colors.DIM)
        if phase in ('IDLE', 'SHOWDOWN'):
            return colorize("Waiting for the host to start the next round...", Colors.DIM)
        return colorize("Dealing the next street...", Colors.DIM)
