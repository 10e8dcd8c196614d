from abc import ABC, abstractmethod

from routine_builder.domain.entities.view import SessionView


class SessionRendererPort(ABC):
    @abstractmethod
    def render(self, view: SessionView) -> None:
        raise NotImplementedError
