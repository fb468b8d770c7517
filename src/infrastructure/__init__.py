"""
Couche infrastructure.

Ce module contient l'implementation concrete du store du catalogue
defini dans la couche domaine (ports) :

- persistence/ : Stockage SQLite avec SQLModel (modeles et store)

Architecture hexagonale : le store implemente le port ICatalogStore,
permettant de changer l'implementation (ex: PostgreSQL au lieu de SQLite)
sans modifier le pipeline d'ingestion.
"""
