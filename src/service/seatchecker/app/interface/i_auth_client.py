from abc import ABC, abstractmethod

from src.service.seatchecker.domain.value_object import Credentials, SessionToken


class IAuthClient(ABC):
    @abstractmethod
    async def login(self, *, credentials: Credentials) -> SessionToken:
        """
        Exchange account credentials for a short-lived customer token.

        Raises:
            AuthError: transport failure or malformed login response
        """
        pass
