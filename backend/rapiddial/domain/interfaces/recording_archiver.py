"""
Recording Archiver Interface
Moves a provider-hosted recording to durable storage
"""
from abc import ABC, abstractmethod


class RecordingArchiver(ABC):
    """Abstract base class for recording archives"""

    @abstractmethod
    async def archive(self, call_key: str, provider_url: str) -> str:
        """
        Copy the recording at provider_url to durable storage.

        Returns:
            Stable URL for the archived recording
        """
        pass
