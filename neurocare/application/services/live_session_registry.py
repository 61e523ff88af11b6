"""
Live session registry.

Keeps one SessionLifecycleController per user for the lifetime of the
process, all sharing the same device channel and repository.

Dependencies: neurocare.core, neurocare.configs
System role: Owner of long-lived session controllers
"""

import logging

from neurocare.configs.therapy import TherapySettings
from neurocare.core.context import AuthContext, DeviceContext
from neurocare.core.interfaces import DeviceChannel, SessionRepository
from neurocare.core.session_controller import SessionLifecycleController

logger = logging.getLogger(__name__)


class LiveSessionRegistry:
    """Container for per-user session controllers."""

    def __init__(
        self,
        channel: DeviceChannel,
        repository: SessionRepository,
        settings: TherapySettings | None = None,
    ) -> None:
        self.settings = settings or TherapySettings()
        self.device = DeviceContext(
            channel=channel, battery_level=self.settings.default_battery_level
        )
        self.repository = repository
        self._controllers: dict[str, SessionLifecycleController] = {}

    def get_or_create(self, user_id: str) -> SessionLifecycleController:
        """Get the user's controller, creating and attaching it on first use."""
        controller = self._controllers.get(user_id)
        if controller is None:
            controller = SessionLifecycleController(
                auth=AuthContext(user_id=user_id),
                device=self.device,
                repository=self.repository,
                settings=self.settings,
            )
            controller.attach()
            self._controllers[user_id] = controller
            logger.info("Created session controller for user %s", user_id)
        return controller

    def __len__(self) -> int:
        return len(self._controllers)

    async def close_all(self) -> None:
        """Tear down every controller: timers cancelled, subscriptions released."""
        controllers = list(self._controllers.values())
        self._controllers.clear()
        for controller in controllers:
            await controller.close()
        logger.info("Closed %d session controllers", len(controllers))
