# teamlink/services/notifications_service.py
from __future__ import annotations

import logging
from typing import Dict, List

from fastapi import WebSocket, WebSocketDisconnect

from teamlink.db.base import utcnow
from teamlink.models.application import Application
from teamlink.models.enums import NotificationType
from teamlink.models.project import Project
from teamlink.models.team import Team
from teamlink.schemas.notifications import NotificationEvent

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────
# EVENT BUILDERS
# ─────────────────────────────────────────────

def application_received(application: Application, project: Project, applicant_name: str) -> NotificationEvent:
    return NotificationEvent(
        id=f"app_received_{application.id}",
        type=NotificationType.application_received,
        title="🎯 New Application Received!",
        message=f'{applicant_name} has applied to your project "{project.title}"',
        data={
            "projectId": str(project.id),
            "projectTitle": project.title,
            "applicantName": applicant_name,
            "applicationId": str(application.id),
        },
        timestamp=utcnow(),
    )


def application_accepted(project: Project, team_row: Team) -> NotificationEvent:
    return NotificationEvent(
        id=f"app_accepted_{project.id}_{team_row.user_id}",
        type=NotificationType.application_accepted,
        title="🎉 Application Accepted!",
        message=(
            f'Congratulations! You\'ve been accepted to join "{project.title}" '
            f"as {team_row.role_title}"
        ),
        data={
            "projectId": str(project.id),
            "projectTitle": project.title,
            "roleTitle": team_row.role_title,
        },
        timestamp=utcnow(),
    )


def application_rejected(project: Project, application: Application) -> NotificationEvent:
    return NotificationEvent(
        id=f"app_rejected_{project.id}_{application.user_id}",
        type=NotificationType.application_rejected,
        title="📋 Application Update",
        message=f'Your application for "{project.title}" was not selected this time',
        data={"projectId": str(project.id), "projectTitle": project.title},
        timestamp=utcnow(),
    )


# ─────────────────────────────────────────────
# DELIVERY
# ─────────────────────────────────────────────

class NotificationHub:
    """Live WebSocket connections keyed by local user id."""

    def __init__(self):
        self.active_connections: Dict[str, List[WebSocket]] = {}

    async def connect(self, websocket: WebSocket, user_id: str) -> None:
        await websocket.accept()
        self.active_connections.setdefault(user_id, []).append(websocket)
        logger.info("notifications connected user=%s", user_id)

    def disconnect(self, websocket: WebSocket, user_id: str) -> None:
        remaining = [ws for ws in self.active_connections.get(user_id, []) if ws is not websocket]
        if remaining:
            self.active_connections[user_id] = remaining
        else:
            self.active_connections.pop(user_id, None)
        logger.info("notifications disconnected user=%s", user_id)

    def is_connected(self, user_id: str) -> bool:
        return bool(self.active_connections.get(user_id))

    async def send_to_user(self, user_id: str, event: NotificationEvent) -> bool:
        """
        Best-effort push to every socket of one user. Returns False when the
        user has no live connection; the event is not queued.
        """
        sockets = list(self.active_connections.get(user_id, []))
        if not sockets:
            logger.info("notification %s dropped, user %s not connected", event.id, user_id)
            return False

        payload = event.model_dump(mode="json")
        delivered = False
        for ws in sockets:
            try:
                await ws.send_json(payload)
                delivered = True
            except (WebSocketDisconnect, RuntimeError, ConnectionError) as exc:
                logger.warning("notification %s send failed user=%s: %s", event.id, user_id, exc)
                self.disconnect(ws, user_id)
        return delivered


hub = NotificationHub()
