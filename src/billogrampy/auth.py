"""Authentication for the Billogram API."""

import base64
from abc import ABC, abstractmethod


class BaseAuth(ABC):
    """Base authentication class."""

    @abstractmethod
    def get_headers(self) -> dict[str, str]:
        """Get authentication headers for requests."""
        pass


class BasicAuth(BaseAuth):
    """HTTP Basic authentication with an API user id and key.

    API users can only be created from the Billogram web interface.
    """

    def __init__(self, auth_user: str, auth_key: str) -> None:
        """Initialize basic authentication.

        Args:
            auth_user: API user id
            auth_key: API password/key
        """
        self._auth_user = auth_user
        self._auth_key = auth_key

    @property
    def auth_user(self) -> str:
        """API user id the requests are made as."""
        return self._auth_user

    def get_headers(self) -> dict[str, str]:
        """Get authentication headers."""
        token = base64.b64encode(
            f"{self._auth_user}:{self._auth_key}".encode()
        ).decode("ascii")
        return {"Authorization": f"Basic {token}"}

    def __repr__(self) -> str:
        return f"BasicAuth(auth_user={self._auth_user!r})"
