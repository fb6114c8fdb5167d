"""Tests for the WebSocket play loop."""

import pytest
from fastapi.testclient import TestClient

import api.websocket
from api.main import app
from config import AppConfig, GameConfig


@pytest.fixture
def ws_client(use_deck):
    """A synchronous test client with a plain deal."""
    use_deck("KS", "QS", "6H", "5H", "10D")
    return TestClient(app)


def _receive_until(ws, message_type: str) -> list[dict]:
    """Collect messages up to and including the first of the given type."""
    messages = []
    while True:
        message = ws.receive_json()
        messages.append(message)
        if message["type"] == message_type:
            return messages


def test_play_to_completion(ws_client, balances):
    """Test a game started and stood over the socket is settled."""
    with ws_client.websocket_connect("/ws/blackjack/player-1") as ws:
        ws.send_json({"type": "start", "bet": 100})
        opening = _receive_until(ws, "state_update")

        events = [m["event_type"] for m in opening if m["type"] == "event"]
        assert events[0] == "GAME_STARTED"
        assert events.count("CARD_DEALT") == 4
        assert opening[-1]["state"]["stage"] == "IN_PROGRESS"

        ws.send_json({"type": "action", "action": "stand"})
        result = _receive_until(ws, "state_update")

        state = result[-1]["state"]
        assert state["stage"] == "DONE"
        assert state["outcome"] == "lose"
        assert state["dealer"]["values"] == [21]
        assert state["balance"] == 900

    assert app.state.manager.get_game("player-1") is None


def test_action_before_start(ws_client):
    """Test actions are refused until a game is started."""
    with ws_client.websocket_connect("/ws/blackjack/player-1") as ws:
        ws.send_json({"type": "action", "action": "hit"})
        assert ws.receive_json() == {"type": "error", "message": "start a game first"}


def test_invalid_bet(ws_client):
    """Test a rejected bet keeps the socket waiting for a valid start."""
    with ws_client.websocket_connect("/ws/blackjack/player-1") as ws:
        ws.send_json({"type": "start", "bet": 1})
        assert ws.receive_json() == {"type": "error", "message": "minimum bet is 10 coins."}

        ws.send_json({"type": "start", "bet": 10})
        opening = _receive_until(ws, "state_update")
        assert opening[-1]["state"]["bet"] == 10


def test_unknown_action(ws_client):
    """Test unknown actions are reported without ending the game."""
    with ws_client.websocket_connect("/ws/blackjack/player-1") as ws:
        ws.send_json({"type": "start", "bet": 10})
        _receive_until(ws, "state_update")

        ws.send_json({"type": "action", "action": "split"})
        assert ws.receive_json() == {"type": "error", "message": "Unknown action: split"}

        ws.send_json({"type": "action", "action": "quit"})
        result = _receive_until(ws, "state_update")
        assert result[-1]["state"]["surrendered"] is True


def test_timeout_quits(ws_client, balances, monkeypatch):
    """Test a player who does not act in time forfeits."""
    monkeypatch.setattr(
        api.websocket, "config", AppConfig(game=GameConfig(action_timeout=0.05))
    )

    with ws_client.websocket_connect("/ws/blackjack/player-1") as ws:
        ws.send_json({"type": "start", "bet": 100})
        _receive_until(ws, "state_update")

        timeout = ws.receive_json()
        assert timeout["type"] == "timeout"

        result = _receive_until(ws, "state_update")
        state = result[-1]["state"]
        assert state["stage"] == "DONE"
        assert state["surrendered"] is True
        assert state["amount_won"] == 0
        assert state["balance"] == 900


@pytest.mark.parametrize("bet", [10.5, "lots", [100]])
def test_malformed_bet(ws_client, bet):
    """Test a bet that is not a whole number never starts a game."""
    with ws_client.websocket_connect("/ws/blackjack/player-1") as ws:
        ws.send_json({"type": "start", "bet": bet})
        assert ws.receive_json() == {
            "type": "error",
            "message": "please enter a valid bet amount.",
        }
        assert app.state.manager.get_game("player-1") is None

        ws.send_json({"type": "start", "bet": 10})
        opening = _receive_until(ws, "state_update")
        assert opening[-1]["state"]["bet"] == 10


def test_start_message_channel(ws_client):
    """Test the channel sent with the start message is kept on the game."""
    with ws_client.websocket_connect("/ws/blackjack/player-1") as ws:
        ws.send_json({"type": "start", "bet": 10, "channel_id": "table-7"})
        opening = _receive_until(ws, "state_update")
        assert opening[-1]["state"]["channel_id"] == "table-7"


def test_disconnect_quits(ws_client, balances):
    """Test leaving mid-game forfeits the stake and frees the player."""
    with ws_client.websocket_connect("/ws/blackjack/player-1") as ws:
        ws.send_json({"type": "start", "bet": 100})
        opening = _receive_until(ws, "state_update")
        assert opening[-1]["state"]["stage"] == "IN_PROGRESS"
        ws.close()

    assert app.state.manager.get_game("player-1") is None
    assert balances.history("player-1")[-1].delta == -100


def test_disconnect_after_game_removed(ws_client, balances):
    """Test leaving after the game was dropped from the manager is harmless."""
    with ws_client.websocket_connect("/ws/blackjack/player-1") as ws:
        ws.send_json({"type": "start", "bet": 100})
        _receive_until(ws, "state_update")

        app.state.manager.end_game("player-1")
        ws.close()

    assert app.state.manager.get_game("player-1") is None
    assert balances.history("player-1") == []
