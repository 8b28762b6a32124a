"""WebSocket endpoint streaming pipeline status messages."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from edu_echo.dependencies import get_notifier
from edu_echo.infrastructure import ObserverRegistry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["notifications"])

NotifierDep = Annotated[ObserverRegistry, Depends(get_notifier)]


@router.websocket("/ws")
async def notifications(websocket: WebSocket, notifier: NotifierDep):
    """Keeps an observer subscribed until it disconnects. Inbound frames are ignored."""
    await notifier.subscribe(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect as e:
        logger.info("Observer closed connection", extra={"code": e.code})
    finally:
        notifier.unsubscribe(websocket)
