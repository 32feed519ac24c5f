"""
Session identity and the application-wide identity context.

The context is created when the application starts and torn down when it
stops. It resolves the caller's identity from the bearer token (caching it on
the request for the rest of that request), gates identity-requiring views,
and publishes sign-in / sign-out events to subscribers.
"""

import inspect
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from fastapi import Request
from fastapi.responses import RedirectResponse

from wanderplan.core.jwt import ACCESS, decode_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionIdentity:
    """Read-only copy of the authenticated user's identity."""
    uid: str
    display_name: str
    email: str
    created_at: datetime

    def to_claims(self) -> Dict[str, Any]:
        return {
            "name": self.display_name,
            "email": self.email,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_claims(cls, payload: Dict[str, Any]) -> Optional["SessionIdentity"]:
        uid = payload.get("sub")
        email = payload.get("email")
        created_at = payload.get("created_at")
        if not uid or not email or not created_at:
            return None
        try:
            created = datetime.fromisoformat(created_at)
        except (TypeError, ValueError):
            return None
        return cls(
            uid=uid,
            display_name=payload.get("name") or "",
            email=email,
            created_at=created,
        )


class IdentityEventKind(str, Enum):
    SIGNED_IN = "signed_in"
    SIGNED_OUT = "signed_out"


@dataclass(frozen=True)
class IdentityEvent:
    kind: IdentityEventKind
    identity: SessionIdentity


IdentityListener = Callable[[IdentityEvent], Union[None, Awaitable[None]]]


def identity_from_token(token: Optional[str]) -> Optional[SessionIdentity]:
    if not token:
        return None
    payload = decode_token(token, ACCESS)
    if not payload:
        return None
    return SessionIdentity.from_claims(payload)


def bearer_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


class IdentityContext:
    """Provider of the current session identity with explicit subscriptions."""

    def __init__(self, landing_path: str = "/"):
        self.landing_path = landing_path
        self._listeners: List[IdentityListener] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        if self._closed:
            raise RuntimeError("IdentityContext is closed")
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            self.unsubscribe(listener)

        return _unsubscribe

    def unsubscribe(self, listener: IdentityListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    async def signed_in(self, identity: SessionIdentity) -> None:
        await self._publish(IdentityEvent(IdentityEventKind.SIGNED_IN, identity))

    async def signed_out(self, identity: SessionIdentity) -> None:
        await self._publish(IdentityEvent(IdentityEventKind.SIGNED_OUT, identity))

    async def _publish(self, event: IdentityEvent) -> None:
        logger.info(
            f"Identity event {event.kind.value} for user {event.identity.uid}",
            extra={"event": event.kind.value, "uid": event.identity.uid},
        )
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            try:
                result = listener(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Identity listener failed for {event.kind.value}: {e}", exc_info=True)

    def get_current_identity(self, request: Request) -> Optional[SessionIdentity]:
        """Identity of the caller, or None when signed out or the token is invalid."""
        if hasattr(request.state, "identity"):
            return request.state.identity
        identity = identity_from_token(bearer_token(request))
        request.state.identity = identity
        return identity

    def require_identity(
        self,
        request: Request,
        view: Callable[[SessionIdentity], Any],
        landing: Optional[Callable[[], Any]] = None,
    ) -> Any:
        """Render ``view`` for a signed-in caller, otherwise the landing view."""
        identity = self.get_current_identity(request)
        if identity is None:
            if landing is not None:
                return landing()
            return RedirectResponse(self.landing_path, status_code=303)
        return view(identity)

    async def close(self) -> None:
        self._listeners.clear()
        self._closed = True
        logger.info("Identity context closed")
