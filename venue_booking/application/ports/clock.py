from abc import ABC, abstractmethod
from datetime import datetime


class ClockPort(ABC):
    @abstractmethod
    def now(self) -> datetime:
        raise NotImplementedError


class IdGeneratorPort(ABC):
    @abstractmethod
    def new_id(self) -> str:
        raise NotImplementedError
