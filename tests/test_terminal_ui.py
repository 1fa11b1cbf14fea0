from dicepoker.terminal_ui import TerminalUI
from dicepoker.ui.dice import DIE_HEIGHT, dice_horizontal, die_lines, hidden_dice


def seat(pid, name, **extra):
    data = {
        'id': pid,
        'name': name,
        'is_human': True,
        'chips': 990,
        'bet': 10,
        'hole_dice': [],
        'has_folded': False,
        'is_host': False,
        'hand_result': None,
        'is_winner': False,
    }
    data.update(extra)
    return data


def view(**extra):
    data = {
        'room_id': 'ABC123',
        'phase': 'FLOP',
        'community_dice': [1, 2, 3],
        'pot': 20,
        'current_bet': 10,
        'active_player_idx': 0,
        'hand_no': 1,
        'log': ["--- Round 1 begins ---", "alice checks"],
        'players': [
            seat('a', 'alice', hole_dice=[6, 5], is_host=True),
            seat('b', 'Boxcars-7', is_human=False),
        ],
    }
    data.update(extra)
    return data


def test_die_rendering():
    assert len(die_lines(3)) == DIE_HEIGHT
    assert "?" in "".join(die_lines(None))
    assert dice_horizontal([]) == ""
    assert len(dice_horizontal([1, 2, 3]).split("\r\n")) == DIE_HEIGHT
    assert "?" in hidden_dice()


def test_render_your_turn():
    out = TerminalUI('a').render(view())
    assert "Room ABC123" in out
    assert "YOUR TURN" in out
    assert "POT: 20" in out
    assert "Community Dice" in out
    assert "Your Dice" in out
    assert "alice checks" in out
    assert "Available actions" in out
    assert "(you)" in out
    # the other seat shows face-down dice
    assert "[? ?]" in out


def test_render_bot_turn_for_other_viewer():
    out = TerminalUI('a').render(view(active_player_idx=1))
    assert "Boxcars-7's turn (thinking...)" in out
    assert "Waiting for Boxcars-7" in out


def test_render_between_streets_and_idle():
    out = TerminalUI('b').render(view(active_player_idx=-1))
    assert "Dealing the next street" in out

    idle = view(phase='IDLE', active_player_idx=-1, community_dice=[], pot=0, current_bet=0)
    assert "'start'" in TerminalUI('a').render(idle)
    assert "Waiting for the host" in TerminalUI('b').render(idle)


def test_render_showdown_shows_hands():
    players = [
        seat('a', 'alice', hole_dice=[6, 6], is_winner=True,
             hand_result={'description': 'Three of a Kind, 6s'}),
        seat('b', 'bob', hole_dice=[1, 2], hand_result={'description': 'Pair of 2s'}),
    ]
    out = TerminalUI('b').render(view(phase='SHOWDOWN', active_player_idx=-1, players=players))
    assert "Three of a Kind, 6s" in out
    assert "🏆" in out


def test_host_hint_offers_bots_only_before_first_round():
    ui = TerminalUI('a')
    idle = ui.render(view(phase='IDLE', active_player_idx=-1, community_dice=[]))
    assert "Type 'bot'" in idle

    showdown = ui.render(view(phase='SHOWDOWN', active_player_idx=-1))
    assert "Type 'start' to roll a new round" in showdown
    assert "Type 'bot'" not in showdown
