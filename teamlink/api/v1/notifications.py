# teamlink/api/v1/notifications.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import Session

from teamlink.core.auth_deps import principal_from_token
from teamlink.core.exceptions import TeamLinkError
from teamlink.db.session import get_db
from teamlink.services.notifications_service import hub
from teamlink.services.users_service import UsersService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws/notifications")
async def notifications_socket(
    websocket: WebSocket,
    token: str = Query(default=""),
    db: Session = Depends(get_db),
):
    """
    Per-user push channel. The bearer token travels as ?token= since browsers
    cannot set headers on the upgrade request.
    """
    try:
        principal = principal_from_token(token)
        user = UsersService().get_or_create(db, principal)
    except TeamLinkError as exc:
        logger.info("notification socket refused: %s", exc.message)
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    user_id = str(user.id)
    # no db work past this point; release the connection for the socket's lifetime
    db.close()

    await hub.connect(websocket, user_id)
    try:
        while True:
            data = await websocket.receive_text()
            if data == "ping":
                await websocket.send_text("pong")
    except WebSocketDisconnect:
        hub.disconnect(websocket, user_id)
