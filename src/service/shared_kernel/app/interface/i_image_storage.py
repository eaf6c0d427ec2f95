from abc import ABC, abstractmethod


class IImageStorage(ABC):
    """Object storage for uploaded images; returns a durable URL"""

    @abstractmethod
    async def upload(self, *, filename: str, content_type: str, data: bytes) -> str:
        pass
