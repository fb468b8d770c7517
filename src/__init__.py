"""
CatalogSync - Import du catalogue IMDb dans une bibliothèque locale.

Ce package télécharge les datasets publics IMDb, les lit en streaming,
reconstruit la hiérarchie films / séries / saisons / épisodes et l'écrit
par batch dans le store du catalogue.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur, identifiants)
- services/ : Couche application (orchestration de la synchronisation)
- adapters/ : Datasets IMDb (transport, cache, parsing) et CLI
- infrastructure/ : Store du catalogue (SQLModel + SQLite)
"""
