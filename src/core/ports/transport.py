"""
Interface port pour le transport HTTP des datasets.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator


class IDatasetTransport(ABC):
    """Telechargement en streaming d'un fichier distant."""

    @abstractmethod
    def stream(self, url: str) -> AsyncIterator[bytes]:
        """
        Retourne le contenu distant par blocs.

        Raises:
            DownloadFailure: Si le statut n'est pas un succes ou si le
                transfert est interrompu
        """
        ...
