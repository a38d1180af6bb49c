"""
Supabase Recording Archiver
Copies provider-hosted call recordings into Supabase Storage
"""
import asyncio
import logging
from typing import Optional, Tuple

import httpx

from rapiddial.core.exceptions import StorageError
from rapiddial.domain.interfaces.recording_archiver import RecordingArchiver

logger = logging.getLogger(__name__)


class SupabaseRecordingArchiver(RecordingArchiver):
    """
    Downloads a recording from the telephony provider and uploads it to a
    Supabase Storage bucket as {call_key}.mp3.

    Uploads overwrite, so a redelivered recording callback archives to the
    same object and returns the same URL.
    """

    BUCKET_NAME = "recordings"

    def __init__(
        self,
        supabase_client,
        http_client: httpx.AsyncClient,
        bucket: str = BUCKET_NAME,
        provider_auth: Optional[Tuple[str, str]] = None
    ):
        """
        Args:
            supabase_client: Initialized Supabase client
            http_client: Shared httpx client used for downloads
            bucket: Storage bucket name
            provider_auth: (account_sid, auth_token) for provider-protected recordings
        """
        self._supabase = supabase_client
        self._http = http_client
        self._bucket = bucket
        self._provider_auth = provider_auth

    @staticmethod
    def storage_path(call_key: str) -> str:
        # Sanitize to prevent path traversal
        safe_key = call_key.replace("/", "_").replace("\\", "_")
        return f"{safe_key}.mp3"

    @staticmethod
    def download_url(provider_url: str) -> str:
        """Twilio serves the bare recording URL as WAV; ask for MP3"""
        if provider_url.endswith(".mp3") or provider_url.endswith(".wav"):
            return provider_url
        return f"{provider_url}.mp3"

    async def archive(self, call_key: str, provider_url: str) -> str:
        path = self.storage_path(call_key)

        try:
            response = await self._http.get(
                self.download_url(provider_url),
                auth=self._provider_auth,
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Failed to download recording for {call_key}: {e}")
            raise StorageError(f"Recording download failed for {call_key}: {e}") from e

        audio = response.content
        logger.info(f"Uploading recording for {call_key}: {len(audio)} bytes to {self._bucket}/{path}")

        try:
            public_url = await asyncio.to_thread(self._upload, path, audio)
        except Exception as e:
            logger.error(f"Failed to upload recording for {call_key}: {e}", exc_info=True)
            raise StorageError(f"Recording upload failed for {call_key}: {e}") from e

        logger.info(f"Recording archived: {call_key} -> {public_url}")
        return public_url

    def _upload(self, path: str, audio: bytes) -> str:
        bucket = self._supabase.storage.from_(self._bucket)
        bucket.upload(
            path=path,
            file=audio,
            file_options={"content-type": "audio/mpeg", "upsert": "true"}
        )
        return bucket.get_public_url(path)
