"""
Couche services applicatifs (cas d'utilisation).

- catalog_sync/ : Synchronisation du catalogue depuis les datasets IMDb
  (provisionnement, index des episodes, reconstruction, ecriture par batch)

Les services dependent des ports (interfaces) de core/ pour le store,
jamais de son implementation SQLModel.
"""
