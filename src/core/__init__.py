"""
Couche domaine (core).

Contient les entités métier, ports (interfaces abstraites), objets valeur
et la dérivation des identifiants stables.
Cette couche n'a AUCUNE dépendance vers l'infrastructure (adapters, frameworks, BDD).

Sous-packages :
- entities/ : Entités du catalogue (Library, Movie, Series, Season, Episode)
- ports/ : Interfaces abstraites (ICatalogStore, IDatasetTransport)
- value_objects/ : Lignes des datasets IMDb (TitleBasics, EpisodeLink)
"""
