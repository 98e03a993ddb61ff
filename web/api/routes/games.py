"""Game API routes."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, Field, ValidationError

from eights_engine.cards import Suit
from web.api.session_manager import GameSession, StrategyFactory, session_manager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["games"])


# Request/Response models
class CreateGameRequest(BaseModel):
    """Request to create a new game."""

    seed: int | None = Field(None, description="Random seed for reproducibility")
    think_delay_ms: int | None = Field(
        None, ge=0, description="Computer think delay (server default if omitted)"
    )
    strategy: str | None = Field(None, description="Computer strategy name")
    strategy_params: dict[str, Any] = Field(
        default_factory=dict, description="Strategy parameters"
    )


class RestartRequest(BaseModel):
    """Request to deal a new game in an existing session."""

    seed: int | None = Field(None, description="Random seed for reproducibility")


class PlayCardRequest(BaseModel):
    """Request to play a card from the player's hand."""

    card_id: str = Field(..., description="Id of a card in the player's hand")


class SelectSuitRequest(BaseModel):
    """Request to name the suit after a wild."""

    suit: Suit


class StrategyInfo(BaseModel):
    """Information about an available strategy."""

    name: str
    description: str


def _get_session_or_404(game_id: str) -> GameSession:
    session = session_manager.get_session(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")
    return session


def _action_response(session: GameSession, accepted: bool) -> dict:
    return {
        "accepted": accepted,
        "state": session.to_client_state(),
    }


# REST Endpoints


@router.get("/strategies", response_model=list[StrategyInfo])
async def list_strategies():
    """List available AI strategies."""
    factory = StrategyFactory()
    strategies = factory.list_strategies()
    return [StrategyInfo(name=name, description=desc) for name, desc in strategies.items()]


@router.post("/games", response_model=dict)
async def create_game(request: CreateGameRequest):
    """Create a new game session, already dealt, with the player to move."""
    think_delay = None
    if request.think_delay_ms is not None:
        think_delay = request.think_delay_ms / 1000

    try:
        session = session_manager.create_session(
            seed=request.seed,
            think_delay=think_delay,
            strategy_name=request.strategy,
            strategy_params=request.strategy_params,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "game_id": session.id,
        "state": session.to_client_state(),
    }


@router.get("/games", response_model=list[dict])
async def list_games():
    """List all active game sessions."""
    return session_manager.list_sessions()


@router.get("/games/{game_id}")
async def get_game(game_id: str):
    """Get current state of a game."""
    session = _get_session_or_404(game_id)
    return {
        "state": session.to_client_state(),
        "move_history": session.move_history,
    }


@router.post("/games/{game_id}/restart")
async def restart_game(game_id: str, request: RestartRequest | None = None):
    """Deal a fresh game in an existing session."""
    session = _get_session_or_404(game_id)
    session.restart(seed=request.seed if request else None)
    return _action_response(session, True)


@router.post("/games/{game_id}/play")
async def play_card(game_id: str, request: PlayCardRequest):
    """Attempt to play a card. Illegal plays are reported, not raised."""
    session = _get_session_or_404(game_id)
    return _action_response(session, session.play_card(request.card_id))


@router.post("/games/{game_id}/draw")
async def draw_card(game_id: str):
    """Attempt to draw a card (skips the turn if the deck is empty)."""
    session = _get_session_or_404(game_id)
    return _action_response(session, session.draw_card())


@router.post("/games/{game_id}/suit")
async def select_suit(game_id: str, request: SelectSuitRequest):
    """Name the suit after playing a wild."""
    session = _get_session_or_404(game_id)
    return _action_response(session, session.select_suit(request.suit))


@router.delete("/games/{game_id}")
async def delete_game(game_id: str):
    """Delete a game session."""
    if session_manager.delete_session(game_id):
        return {"deleted": True}
    raise HTTPException(status_code=404, detail="Game not found")


# WebSocket endpoint for real-time game play


@router.websocket("/ws/game/{game_id}")
async def game_websocket(websocket: WebSocket, game_id: str):
    """WebSocket endpoint for real-time game updates.

    Protocol:
    Server -> Client messages:
        - game_state: Full game state, sent on connect and after every
          committed transition, including the computer's
        - action_result: {accepted: bool} reply to a player action
        - error: Error message

    Client -> Server messages:
        - play_card: {card_id: str}
        - draw_card
        - select_suit: {suit: str}
        - restart: {seed?: int}
        - get_state
    """
    session = session_manager.get_session(game_id)
    if not session:
        logger.warning("WebSocket: game not found: %s", game_id)
        await websocket.close(code=4004, reason="Game not found")
        return

    await websocket.accept()
    logger.info("WebSocket connected: game_id=%s", game_id)

    event_queue: asyncio.Queue = asyncio.Queue()
    session.add_listener(event_queue.put_nowait)

    async def forward_events():
        while True:
            event = await event_queue.get()
            await websocket.send_json(event)

    event_task = asyncio.create_task(forward_events())

    try:
        await websocket.send_json({"type": "game_state", "state": session.to_client_state()})

        while True:
            data = await websocket.receive_json()
            msg_type = data.get("type", "")

            if msg_type == "play_card":
                accepted = session.play_card(str(data.get("card_id", "")))
                await websocket.send_json({"type": "action_result", "accepted": accepted})

            elif msg_type == "draw_card":
                accepted = session.draw_card()
                await websocket.send_json({"type": "action_result", "accepted": accepted})

            elif msg_type == "select_suit":
                try:
                    request = SelectSuitRequest(suit=data.get("suit"))
                except ValidationError:
                    await websocket.send_json({
                        "type": "error",
                        "message": f"Unknown suit: {data.get('suit')}",
                    })
                    continue
                accepted = session.select_suit(request.suit)
                await websocket.send_json({"type": "action_result", "accepted": accepted})

            elif msg_type == "restart":
                session.restart(seed=data.get("seed"))

            elif msg_type == "get_state":
                await websocket.send_json({
                    "type": "game_state",
                    "state": session.to_client_state(),
                })

            else:
                await websocket.send_json({
                    "type": "error",
                    "message": f"Unknown message type: {msg_type}",
                })

    except WebSocketDisconnect:
        logger.info("WebSocket disconnected: game_id=%s", game_id)
    finally:
        session.remove_listener(event_queue.put_nowait)
        event_task.cancel()
        try:
            await event_task
        except asyncio.CancelledError:
            pass
