from abc import ABC, abstractmethod


class INotifier(ABC):
    @abstractmethod
    async def notify(self, *, topic: str, message: str) -> None:
        """
        Raises:
            NotificationError: the sink did not accept the notification
        """
        pass
