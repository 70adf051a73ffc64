from abc import ABC, abstractmethod


class NotificationPort(ABC):
    @abstractmethod
    def notify(self, level: str, message: str) -> None:
        """Deliver a user-facing notification. level: "info" | "success" | "warning" | "error"."""
        raise NotImplementedError
