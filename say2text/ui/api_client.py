"""
Synchronous HTTP client for the transcription backend.

Uses ``httpx.Client`` (sync) because Streamlit scripts run synchronously.
"""

import logging
from collections.abc import Callable, Iterator

import httpx
import streamlit as st
from pydantic import ValidationError

from say2text.core.config import get_settings
from say2text.core.exceptions import APIError
from say2text.core.models import AudioFile, TranscriptionRecord

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def upload_percent(loaded: int, total: int | None) -> int | None:
    """Convert a byte count into a whole percentage.

    Returns None when the total is unknown so callers can skip the update.
    """
    if not total:
        return None
    return max(0, min(100, round(loaded / total * 100)))


def _backend_message(response: httpx.Response) -> str | None:
    """Pull the error string out of a JSON error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    message = body.get("error") or body.get("detail")
    return str(message) if message else None


class APIClient:
    """Thin synchronous wrapper around httpx for calling the transcription backend.

    All methods return parsed models or raise ``APIError`` with
    user-friendly messages for display in the UI.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000/api",
        timeout: float = 30.0,
        upload_timeout: float = 300.0,
        chunk_size: int = 64 * 1024,
        recording_filename: str = "recording.wav",
        recording_mime_type: str = "audio/wav",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Base URL of the backend, including any ``/api`` prefix.
            timeout: Timeout in seconds for list/delete calls.
            upload_timeout: Timeout in seconds for ``POST /transcribe``,
                which includes the server-side transcription time.
            chunk_size: Upload body is streamed in pieces of this size; one
                progress report is emitted per piece.
            recording_filename: Filename used when the payload is raw bytes.
            recording_mime_type: Content type used when the payload is raw bytes.
            transport: Optional httpx transport (tests inject ``MockTransport``).
        """
        self._base_url = base_url.rstrip("/")
        self._upload_timeout = upload_timeout
        self._chunk_size = chunk_size
        self._recording_filename = recording_filename
        self._recording_mime_type = recording_mime_type
        self._client = httpx.Client(base_url=self._base_url, timeout=timeout, transport=transport)

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request with user-friendly error handling.

        Args:
            method: HTTP method name ("get", "post", "delete").
            path: API endpoint path relative to the base URL.
            **kwargs: Passed through to httpx (content, headers, timeout, etc.).

        Returns:
            The httpx Response object with a successful status code.

        Raises:
            APIError: On connection, timeout, HTTP status, or network errors.
        """
        try:
            resp = getattr(self._client, method)(path, **kwargs)
            resp.raise_for_status()
            return resp
        except httpx.ConnectError:
            raise APIError(
                f"Cannot reach the transcription backend at {self._base_url}.",
                category="connection",
            ) from None
        except httpx.TimeoutException:
            raise APIError(
                "Request timed out. The server may be overloaded.",
                category="timeout",
            ) from None
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            backend_message = _backend_message(exc.response)
            raise APIError(
                backend_message or f"Backend returned HTTP {status}",
                category="http",
                backend_message=backend_message,
                status_code=status,
            ) from None
        except httpx.HTTPError as exc:
            raise APIError(f"Network error: {exc}", category="network") from None

    @staticmethod
    def _parse(model, payload):
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            logger.warning("Unexpected backend payload: %s", exc)
            raise APIError(
                "Unexpected response from the transcription backend.",
                category="invalid_response",
            ) from None

    def _json(self, resp: httpx.Response):
        try:
            return resp.json()
        except ValueError:
            raise APIError(
                "Unexpected response from the transcription backend.",
                category="invalid_response",
            ) from None

    # -- connectivity --

    def check_connection(self) -> tuple[bool, str]:
        """Check if the backend is reachable. Returns (ok, message)."""
        try:
            self._request("get", "/transcriptions")
            return True, "Connected"
        except APIError as exc:
            return False, exc.message

    # -- transcriptions --

    def transcribe(
        self,
        audio: AudioFile | bytes,
        on_progress: ProgressCallback | None = None,
    ) -> TranscriptionRecord:
        """Upload audio as multipart field ``audio`` and return the created record.

        Raw bytes are wrapped with the synthetic recording filename and
        content type. ``on_progress(loaded, total)`` is called after each
        chunk of the encoded body has been handed to the transport.
        """
        if isinstance(audio, (bytes, bytearray)):
            audio = AudioFile(
                filename=self._recording_filename,
                content=bytes(audio),
                content_type=self._recording_mime_type,
            )

        # Encode once up front so the body length (and thus progress) is known.
        encoded = httpx.Request(
            "POST",
            self._base_url,
            files={"audio": (audio.filename, audio.content, audio.content_type)},
        )
        body = encoded.read()
        headers = {
            "Content-Type": encoded.headers["Content-Type"],
            "Content-Length": str(len(body)),
        }
        logger.info("Uploading %s (%d bytes)", audio.filename, audio.size)

        resp = self._request(
            "post",
            "/transcribe",
            content=self._iter_body(body, on_progress),
            headers=headers,
            timeout=self._upload_timeout,
        )
        return self._parse(TranscriptionRecord, self._json(resp))

    def _iter_body(self, body: bytes, on_progress: ProgressCallback | None) -> Iterator[bytes]:
        total = len(body)
        loaded = 0
        for start in range(0, total, self._chunk_size):
            chunk = body[start : start + self._chunk_size]
            yield chunk
            loaded += len(chunk)
            if on_progress is not None:
                on_progress(loaded, total)

    def list_transcriptions(self) -> list[TranscriptionRecord]:
        payload = self._json(self._request("get", "/transcriptions"))
        if not isinstance(payload, list):
            raise APIError(
                "Unexpected response from the transcription backend.",
                category="invalid_response",
            )
        records = []
        for item in payload:
            try:
                records.append(TranscriptionRecord.model_validate(item))
            except ValidationError as exc:
                logger.warning("Skipping unreadable history record: %s", exc)
        return records

    def delete_transcription(self, record_id: str) -> None:
        self._request("delete", f"/transcriptions/{record_id}")


@st.cache_resource
def get_api_client(base_url: str | None = None) -> APIClient:
    """Return a cached APIClient, keyed by base_url.

    Uses Streamlit's ``cache_resource`` to persist the client across reruns.
    When the base URL changes (e.g. user updates sidebar), a new client
    is created automatically because the cache key includes the parameter.
    """
    settings = get_settings()
    return APIClient(
        base_url=base_url or settings.api_base_url,
        timeout=settings.request_timeout,
        upload_timeout=settings.upload_timeout,
        chunk_size=settings.upload_chunk_size,
        recording_filename=settings.recording_filename,
        recording_mime_type=settings.recording_mime_type,
    )


@st.cache_data(ttl=60, show_spinner=False)
def connection_status(base_url: str) -> tuple[bool, str]:
    """Reachability of ``base_url``, probed at most once a minute per URL."""
    return get_api_client(base_url).check_connection()
