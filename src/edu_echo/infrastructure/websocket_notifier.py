"""WebSocket observer registry for live pipeline notifications."""

import logging

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from edu_echo.infrastructure.interfaces import Notifier

logger = logging.getLogger(__name__)


class ObserverRegistry(Notifier):
    """
    Process-wide set of connected WebSocket observers.

    Sockets are tracked from subscribe() to unsubscribe(). Broadcasts are not
    stored, so observers that connect later never see earlier messages.
    """

    def __init__(self):
        self._observers: set[WebSocket] = set()

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    async def subscribe(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._observers.add(websocket)
        logger.info("Observer connected", extra={"observers": len(self._observers)})

    def unsubscribe(self, websocket: WebSocket) -> None:
        self._observers.discard(websocket)
        logger.info("Observer disconnected", extra={"observers": len(self._observers)})

    async def broadcast(self, message: str) -> None:
        for websocket in list(self._observers):
            if not _is_open(websocket):
                continue
            try:
                await websocket.send_text(message)
            except Exception:
                logger.warning("Dropping observer after failed send", exc_info=True)
                self._observers.discard(websocket)


def _is_open(websocket: WebSocket) -> bool:
    return (
        websocket.client_state == WebSocketState.CONNECTED
        and websocket.application_state == WebSocketState.CONNECTED
    )
