#client.py
import logging
from typing import List, Optional

import httpx

from .config import BACKEND_URL, HTTP_TIMEOUT
from .errors import LoadError, MutationError
from .schemas import FileRecord, parse_files_payload

logger = logging.getLogger(__name__)


class BackendClient:
    """HTTP-клиент к бэкенду хранилища: список, удаление, очистка"""

    def __init__(self, base_url: str = BACKEND_URL, client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=HTTP_TIMEOUT)

    async def fetch_files(self) -> List[FileRecord]:
        logger.info("Fetching files")
        try:
            response = await self._client.get("/files")
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise LoadError(f"Error loading files: {e}") from e

        files = parse_files_payload(payload)
        logger.info(f"Fetched {len(files)} files")
        return files

    async def delete_file(self, file_id: str) -> None:
        logger.info(f"Deleting file: {file_id}")
        try:
            response = await self._client.delete(f"/file/{file_id}")
        except httpx.HTTPError as e:
            raise MutationError("delete", f"Error deleting file {file_id}: {e}") from e

        if not response.is_success:
            raise MutationError(
                "delete", f"Error deleting file {file_id}: HTTP {response.status_code}"
            )

    async def cleanup(self) -> None:
        logger.info("Cleaning up all files")
        try:
            response = await self._client.post(
                "/cleanup",
                headers={"Content-Type": "application/json", "Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            raise MutationError("cleanup", f"Error cleaning files: {e}") from e

        if not response.is_success:
            raise MutationError("cleanup", f"Error cleaning files: HTTP {response.status_code}")

    def file_info_url(self, file_id: str) -> str:
        return f"{self.base_url}/file/{file_id}/info"

    async def aclose(self) -> None:
        await self._client.aclose()
