"""
Explicit application-state holders.

AuthContext and DeviceContext are passed into the components that need
them instead of being read from app-wide stores.

Dependencies: None
System role: Injected user and device state
"""

from dataclasses import dataclass

from neurocare.core.exceptions import AuthenticationRequiredError
from neurocare.core.interfaces import DeviceChannel


@dataclass
class AuthContext:
    """Identity of the signed-in user, if any."""

    user_id: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)

    def require_user(self, operation: str) -> str:
        """
        Return the current user id.

        Args:
            operation: Name of the operation needing a user (for the error message)

        Raises:
            AuthenticationRequiredError: If no user is signed in
        """
        if not self.user_id:
            raise AuthenticationRequiredError(operation)
        return self.user_id


@dataclass
class DeviceContext:
    """Handle on the therapy device and its reported battery level."""

    channel: DeviceChannel
    battery_level: int = 75

    def is_connected(self) -> bool:
        return self.channel.is_connected()
