"""
Tests pour SQLModelCatalogStore.

Utilise une base SQLite en memoire.
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, select

from src.core.entities.catalog import (
    CollectionType,
    EntityKind,
    Episode,
    Library,
    LibraryOptions,
    Movie,
    Season,
)
from src.core.exceptions import StoreWriteFailure
from src.infrastructure.persistence.database import build_engine, init_db
from src.infrastructure.persistence.models import CatalogItemModel, LibraryModel
from src.infrastructure.persistence.repositories import SQLModelCatalogStore
from src.services.catalog_sync.provisioning import LibraryProvisioner


JAN_2024 = datetime(2024, 1, 1, tzinfo=timezone.utc)
JUNE_2025 = datetime(2025, 6, 1, tzinfo=timezone.utc)
MARCH_2025 = datetime(2025, 3, 1, tzinfo=timezone.utc)


def as_utc(value: datetime) -> datetime:
    """SQLite ne conserve pas le fuseau : une date relue sans fuseau est en UTC."""
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


@pytest.fixture
def session():
    engine = build_engine("sqlite:///:memory:")
    init_db(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture
def store(session) -> SQLModelCatalogStore:
    return SQLModelCatalogStore(session)


def make_library(path: str = "/media/movies") -> Library:
    return Library(
        id=uuid.uuid4(),
        name="External Movies",
        path=path,
        collection_type=CollectionType.MOVIES,
        locations=(path,),
    )


class TestLibraries:
    """Tests de declaration et materialisation des bibliotheques."""

    @pytest.mark.asyncio
    async def test_created_library_is_not_visible_before_validation(self, store, tmp_path):
        path = tmp_path / "movies"
        path.mkdir()
        (path / "stub.txt").write_text("")

        await store.create_library(LibraryOptions("External Movies", str(path), CollectionType.MOVIES))

        assert store.find_library_by_path(str(path)) is None
        assert [lib.path for lib in store.list_top_level_libraries()] == [str(path)]

    @pytest.mark.asyncio
    async def test_validation_materializes_populated_directory(self, store, tmp_path):
        path = tmp_path / "movies"
        path.mkdir()
        (path / "stub.txt").write_text("")
        await store.create_library(LibraryOptions("External Movies", str(path), CollectionType.MOVIES))

        await store.trigger_validation()

        library = store.find_library_by_path(str(path))
        assert library is not None
        assert library.collection_type is CollectionType.MOVIES

    @pytest.mark.asyncio
    async def test_validation_skips_empty_directory(self, store, tmp_path):
        path = tmp_path / "empty"
        path.mkdir()
        await store.create_library(LibraryOptions("External Movies", str(path), CollectionType.MOVIES))

        await store.trigger_validation()

        assert store.find_library_by_path(str(path)) is None

    @pytest.mark.asyncio
    async def test_create_library_twice_keeps_one_row(self, store, session, tmp_path):
        options = LibraryOptions("External Shows", str(tmp_path / "shows"), CollectionType.TVSHOWS)

        await store.create_library(options)
        await store.create_library(options)

        rows = session.exec(select(LibraryModel)).all()
        assert len(rows) == 1
        assert rows[0].enable_internet_providers is False

    def test_find_library_by_path_case_insensitive(self, store, session):
        session.add(
            LibraryModel(
                id=str(uuid.uuid4()),
                name="External Movies",
                path="/Media/Movies",
                collection_type="movies",
                materialized=True,
            )
        )
        session.commit()

        assert store.find_library_by_path("/media/movies") is not None


    @pytest.mark.asyncio
    async def test_created_library_has_utc_timestamp(self, store, session, tmp_path):
        await store.create_library(LibraryOptions("External Movies", str(tmp_path), CollectionType.MOVIES))

        row = session.exec(select(LibraryModel)).one()
        assert row.created_at is not None
        assert as_utc(row.created_at).utcoffset().total_seconds() == 0

    @pytest.mark.asyncio
    async def test_provisioner_resolves_library(self, store, tmp_path, fake_sleep):
        """Provisionnement complet contre le store SQLite."""
        path = str(tmp_path / "media" / "shows")
        provisioner = LibraryProvisioner(store, sleep=fake_sleep)

        library = await provisioner.ensure_library(path, "External Shows", CollectionType.TVSHOWS)

        assert library.path == path
        assert library.collection_type is CollectionType.TVSHOWS
        assert fake_sleep.calls == []

    @pytest.mark.asyncio
    async def test_create_library_database_error_raises_store_write_failure(self):
        session = MagicMock()
        session.exec.return_value.first.return_value = None
        session.commit.side_effect = OperationalError("INSERT", {}, Exception("database is locked"))
        store = SQLModelCatalogStore(session)

        with pytest.raises(StoreWriteFailure) as exc_info:
            await store.create_library(LibraryOptions("External Movies", "/media/movies", CollectionType.MOVIES))

        assert exc_info.value.entity_kind == "library"
        session.rollback.assert_called_once()

    @pytest.mark.asyncio
    async def test_validation_database_error_raises_store_write_failure(self, tmp_path):
        (tmp_path / "stub.txt").write_text("")
        session = MagicMock()
        session.exec.return_value.all.return_value = [
            LibraryModel(id=str(uuid.uuid4()), name="External Movies", path=str(tmp_path), collection_type="movies")
        ]
        session.commit.side_effect = OperationalError("UPDATE", {}, Exception("disk I/O error"))
        store = SQLModelCatalogStore(session)

        with pytest.raises(StoreWriteFailure) as exc_info:
            await store.trigger_validation()

        assert exc_info.value.entity_kind == "library"
        session.rollback.assert_called_once()

class TestCreateEntities:
    """Tests pour create_entities."""

    def test_writes_batch(self, store, session):
        library = make_library()
        movies = [
            Movie(id=uuid.uuid4(), name=f"Movie {n}", parent_id=library.id, path=f"imdb://movie/tt{n}",
                  provider_ids={"Imdb": f"tt{n}"}, genres=("Action", "Sci-Fi"))
            for n in range(3)
        ]

        assert store.create_entities(movies, library) == 3

        rows = session.exec(select(CatalogItemModel)).all()
        assert len(rows) == 3
        assert rows[0].library_id == str(library.id)
        assert rows[0].genres == ["Action", "Sci-Fi"]
        assert rows[0].imdb_id.startswith("tt")

    def test_upsert_keeps_created_at(self, store, session):
        """Reecrire un element met a jour la ligne sans toucher a created_at."""
        library = make_library()
        item_id = uuid.uuid4()
        first = Movie(id=item_id, name="Old", parent_id=library.id, path="p",
                      created_at=JAN_2024, modified_at=JAN_2024)
        second = Movie(id=item_id, name="New", parent_id=library.id, path="p",
                       created_at=JUNE_2025, modified_at=JUNE_2025)

        store.create_entities([first], library)
        store.create_entities([second], library)

        rows = session.exec(select(CatalogItemModel)).all()
        assert len(rows) == 1
        assert rows[0].name == "New"
        assert as_utc(rows[0].created_at) == JAN_2024
        assert as_utc(rows[0].updated_at) == JUNE_2025

    def test_naive_timestamps_are_stored_as_utc(self, store, session):
        library = make_library()
        movie = Movie(id=uuid.uuid4(), name="M", parent_id=library.id, path="p",
                      created_at=datetime(2024, 1, 1), modified_at=datetime(2024, 1, 1))

        store.create_entities([movie], library)

        row = session.get(CatalogItemModel, str(movie.id))
        assert as_utc(row.created_at) == JAN_2024

    def test_duplicate_ids_in_one_batch(self, store, session):
        """Deux saisons identiques dans un batch -> une seule ligne."""
        library = make_library("/media/shows")
        series_id = uuid.uuid4()
        season_id = uuid.uuid4()
        seasons = [
            Season(id=season_id, name="Season 5", parent_id=series_id, path="p", index_number=5),
            Season(id=season_id, name="Season 5", parent_id=series_id, path="p", index_number=5),
        ]

        store.create_entities(seasons, library)

        rows = session.exec(select(CatalogItemModel)).all()
        assert len(rows) == 1
        assert rows[0].index_number == 5

    def test_episode_indexes(self, store, session):
        library = make_library("/media/shows")
        episode = Episode(id=uuid.uuid4(), name="Homer's Enemy", parent_id=uuid.uuid4(), path="p",
                          index_number=3, parent_index_number=5)

        store.create_entities([episode], library)

        row = session.get(CatalogItemModel, str(episode.id))
        assert row.index_number == 3
        assert row.parent_index_number == 5

    def test_empty_batch(self, store):
        assert store.create_entities([], make_library()) == 0

    def test_database_error_raises_store_write_failure(self):
        session = MagicMock()
        session.get.return_value = None
        session.commit.side_effect = OperationalError("INSERT", {}, Exception("disk full"))
        store = SQLModelCatalogStore(session)
        library = make_library()

        with pytest.raises(StoreWriteFailure) as exc_info:
            store.create_entities([Movie(id=uuid.uuid4(), name="M", parent_id=library.id, path="p")], library)

        assert exc_info.value.entity_kind == "movie"
        assert exc_info.value.count == 1
        session.rollback.assert_called_once()


class TestCounts:
    """Tests pour count_by_kind et last_updated."""

    def test_count_by_kind(self, store):
        library = make_library()
        store.create_entities(
            [Movie(id=uuid.uuid4(), name=f"M{n}", parent_id=library.id, path="p") for n in range(2)],
            library,
        )

        counts = store.count_by_kind()

        assert counts[EntityKind.MOVIE] == 2
        assert counts[EntityKind.EPISODE] == 0

    def test_last_updated_empty(self, store):
        assert store.last_updated() is None

    def test_last_updated(self, store):
        library = make_library()
        store.create_entities(
            [Movie(id=uuid.uuid4(), name="M", parent_id=library.id, path="p", modified_at=MARCH_2025)],
            library,
        )

        assert as_utc(store.last_updated()) == MARCH_2025
