"""
Transport HTTP des datasets IMDb via httpx.

Le contenu est lu en streaming pour ne jamais charger en memoire
un fichier de plusieurs centaines de Mo.
"""

from collections.abc import AsyncIterator
from typing import Optional

import httpx
from loguru import logger

from src.core.exceptions import DownloadFailure
from src.core.ports.transport import IDatasetTransport


class HttpxDatasetTransport(IDatasetTransport):
    """
    Implementation httpx du transport des datasets.

    Aucune relance n'est tentee ici : la politique de retry appartient
    a l'appelant.
    """

    def __init__(
        self,
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Initialise le transport.

        Args:
            timeout: Timeout httpx (connexion et lecture) en secondes
            client: Client httpx a reutiliser (optionnel, pour les tests)
        """
        self._timeout = timeout
        self._client = client

    async def stream(self, url: str) -> AsyncIterator[bytes]:
        """Telecharge url par blocs, leve DownloadFailure en cas d'echec."""
        client = self._client or httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
        try:
            async with client.stream("GET", url) as response:
                if response.is_error:
                    raise DownloadFailure(url, f"HTTP {response.status_code}")
                logger.debug("Telechargement demarre", url=url, size=response.headers.get("Content-Length"))
                async for chunk in response.aiter_bytes():
                    yield chunk
        except httpx.HTTPError as exc:
            raise DownloadFailure(url, str(exc) or exc.__class__.__name__) from exc
        finally:
            if self._client is None:
                await client.aclose()
