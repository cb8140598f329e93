"""
Fetch the voice list from the Wit.ai API.

The fetcher returns the raw response body; decoding is left to the
cache so the exact text can be written to the snapshot.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from .config import WitConfiguration
from .errors import VoiceFetchError

logger = logging.getLogger("wit-voice-cache.fetcher")


class WitVoiceFetcher:
    """Requests the available TTS voices for a Wit app."""

    async def request_voices(
        self,
        config: WitConfiguration,
        options: Optional[dict[str, str]] = None,
    ) -> str:
        """
        Fetch the voice list JSON.

        Args:
            config: Service configuration (token, host, version, timeout).
            options: Extra query parameters added to the request.

        Returns:
            Raw JSON response body (non-empty).

        Raises:
            VoiceFetchError: If the request fails or the body is empty.
        """
        if not config.server_token:
            raise VoiceFetchError(
                "No Wit server token configured. Set WIT_SERVER_TOKEN."
            )

        params = {"v": config.api_version}
        if options:
            params.update(options)
        headers = {
            "Authorization": f"Bearer {config.server_token}",
            "Accept": "application/json",
        }

        logger.info("Requesting voice list from %s", config.voices_url)

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    config.voices_url,
                    params=params,
                    headers=headers,
                    timeout=config.timeout,
                )

                if response.status_code in (401, 403):
                    raise VoiceFetchError(
                        "Wit rejected the server token. Check WIT_SERVER_TOKEN."
                    )

                response.raise_for_status()
                body = response.text

        except httpx.TimeoutException:
            raise VoiceFetchError(
                f"Wit did not respond within {config.timeout:g}s. Try again later."
            ) from None
        except httpx.HTTPStatusError as e:
            raise VoiceFetchError(
                f"Wit returned HTTP {e.response.status_code}: {e.response.reason_phrase}"
            ) from None
        except httpx.RequestError as e:
            raise VoiceFetchError(f"Failed to connect to Wit: {e}") from None
        except httpx.InvalidURL as e:
            raise VoiceFetchError(
                f"Invalid Wit voices URL {config.voices_url!r}: {e}. Check WIT_API_HOST."
            ) from None

        if not body or not body.strip():
            raise VoiceFetchError("Wit returned an empty voice list response")

        logger.debug("Voice list download complete (%d chars)", len(body))
        return body
