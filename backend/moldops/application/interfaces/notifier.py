"""Abstract interface (port) for the visible notification layer."""

from abc import ABC, abstractmethod

from moldops.domain.entities import Notice


class Notifier(ABC):
    """Receives notices that must reach the user as toasts or banners."""

    @abstractmethod
    def notify(self, notice: Notice) -> None:
        ...
