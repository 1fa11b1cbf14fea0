"""
Per-viewer redaction of room snapshots.

Hole dice are private: a viewer sees their own dice, and everyone's dice
once the room reaches SHOWDOWN. Views are rebuilt for every delivery.
"""

from typing import Any, Dict, Optional

from dicepoker.game_engine import Phase


def redact_state(state: Dict[str, Any], viewer_id: Optional[str]) -> Dict[str, Any]:
    """Return a copy of `state` with other seats' hole dice hidden."""
    view = dict(state)
    reveal_all = state.get('phase') == Phase.SHOWDOWN.value
    players = []
    for p in state.get('players', []):
        seat = dict(p)
        if reveal_all or seat.get('id') == viewer_id:
            seat['hole_dice'] = list(seat.get('hole_dice', []))
        else:
            seat['hole_dice'] = []
        players.append(seat)
    view['players'] = players
    view['log'] = list(state.get('log', []))
    view['community_dice'] = list(state.get('community_dice', []))
    return view
