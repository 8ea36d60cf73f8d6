"""WebSocket endpoint that pushes session updates as they happen."""

import asyncio
import json

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from lovecalc.api.deps import get_engine
from lovecalc.core.exceptions import NameValidationError
from lovecalc.core.session_engine import SessionEngine
from lovecalc.schemas.session import SessionView

router = APIRouter()


async def _forward_views(websocket: WebSocket, queue: asyncio.Queue) -> None:
    while True:
        view: SessionView = await queue.get()
        await websocket.send_text(
            json.dumps(
                {"type": "view", "session": view.model_dump(mode="json")},
                ensure_ascii=False,
            )
        )


@router.websocket("/ws/session")
async def session_websocket(
    websocket: WebSocket, engine: SessionEngine = Depends(get_engine)
):
    """WebSocket endpoint for a live session screen.

    Protocol:
    - Server sends: {"type": "view", "session": {...}} on connect and after every change
    - Client sends: {"type": "calculate", "name1": "...", "name2": "..."}
    - Client sends: {"type": "reset"}
    Validation failures arrive as a view carrying "error".
    """
    await websocket.accept()

    queue: asyncio.Queue[SessionView] = asyncio.Queue()
    queue.put_nowait(engine.view())
    unsubscribe = engine.subscribe(queue.put_nowait)
    sender = asyncio.create_task(_forward_views(websocket, queue))

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                data = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(data, dict):
                continue

            kind = data.get("type")
            if kind == "calculate":
                name1, name2 = data.get("name1", ""), data.get("name2", "")
                if not isinstance(name1, str) or not isinstance(name2, str):
                    continue
                try:
                    engine.submit_names(name1, name2)
                except NameValidationError:
                    pass  # already pushed as view.error
            elif kind == "reset":
                engine.reset()
    except WebSocketDisconnect:
        pass
    finally:
        unsubscribe()
        sender.cancel()
