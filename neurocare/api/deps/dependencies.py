"""
Dependency injection container.

Factory functions for FastAPI dependencies. Long-lived objects (device
channel, repository, live session controllers) live in a process-wide
ServiceCache; request-scoped ones are built per call.

Dependencies: neurocare.configs, neurocare.application, neurocare.boundary
System role: DI container for service injection
"""

from fastapi import Depends, Header, HTTPException, status

from neurocare.configs import get_settings
from neurocare.application.services import (
    LiveSessionRegistry,
    SqlSessionRepository,
    TherapySessionService,
)
from neurocare.boundary.device import InMemoryDeviceChannel
from neurocare.core.context import AuthContext
from neurocare.core.exceptions import AuthenticationRequiredError
from neurocare.core.session_controller import SessionLifecycleController


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self) -> None:
        self._device_channel = None
        self._repository = None
        self._live_sessions = None

    @property
    def device_channel(self) -> InMemoryDeviceChannel:
        """Get cached device channel."""
        if self._device_channel is None:
            self._device_channel = InMemoryDeviceChannel(connected=False)
        return self._device_channel

    @property
    def repository(self) -> SqlSessionRepository:
        """Get cached session repository."""
        if self._repository is None:
            from neurocare.boundary.db import get_async_session_factory

            self._repository = SqlSessionRepository(get_async_session_factory())
        return self._repository

    @property
    def live_sessions(self) -> LiveSessionRegistry:
        """Get cached live session registry."""
        if self._live_sessions is None:
            self._live_sessions = LiveSessionRegistry(
                channel=self.device_channel,
                repository=self.repository,
                settings=get_settings().therapy,
            )
        return self._live_sessions

    async def aclose(self) -> None:
        """Close live sessions and drop all cached instances."""
        if self._live_sessions is not None:
            await self._live_sessions.close_all()
        self._device_channel = None
        self._repository = None
        self._live_sessions = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_auth_context(x_user_id: str | None = Header(default=None)) -> AuthContext:
    """
    Build the auth context from the X-User-ID header.

    Identity is asserted by the upstream authentication provider.
    """
    return AuthContext(user_id=x_user_id.strip() if x_user_id else None)


def get_current_user(auth: AuthContext = Depends(get_auth_context)) -> str:
    """
    Require a signed-in user.

    Raises:
        HTTPException(401): No user identity on the request
    """
    try:
        return auth.require_user("authenticate request")
    except AuthenticationRequiredError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-ID header is required",
        )


def get_device_channel() -> InMemoryDeviceChannel:
    """Get the shared device channel."""
    return get_service_cache().device_channel


def get_session_repository() -> SqlSessionRepository:
    """Get the shared session repository."""
    return get_service_cache().repository


def get_therapy_session_service(
    repository: SqlSessionRepository = Depends(get_session_repository),
) -> TherapySessionService:
    """
    Get therapy session service instance.

    Args:
        repository: Session repository (injected via Depends)

    Returns:
        TherapySessionService: Service instance
    """
    return TherapySessionService(repository=repository)


def get_live_session_registry() -> LiveSessionRegistry:
    """Get the registry of live session controllers."""
    return get_service_cache().live_sessions


def get_session_controller(
    user_id: str = Depends(get_current_user),
    registry: LiveSessionRegistry = Depends(get_live_session_registry),
) -> SessionLifecycleController:
    """
    Get the current user's live session controller.

    Returns:
        SessionLifecycleController: Controller attached to the device feeds
    """
    return registry.get_or_create(user_id)
