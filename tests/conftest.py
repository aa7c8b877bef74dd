"""In-memory stand-ins for the Cassandra cluster and session.

The fake session understands only the statements the service issues, and
keeps the key semantics that matter: movies keyed by id, reviews keyed by
(movie_id, created_at, review_id), read back created_at DESC, review_id ASC.
"""
from datetime import timezone

import pytest
from cassandra import InvalidRequest
from cassandra.cluster import NoHostAvailable
from fastapi import FastAPI
from fastapi.testclient import TestClient

from film_reviews.catalog import CatalogStore
from film_reviews.errors import register_exception_handlers
from film_reviews.ledger import ReviewLedger
from film_reviews.routers import movies, reviews


class FakePrepared:
    def __init__(self, query_string):
        self.query_string = query_string


class FakeSession:
    def __init__(self):
        self.keyspaces = set()
        self.tables = {}
        self.keyspace = None
        self.movies = {}
        self.reviews = {}
        self.statements = []
        self.fail_with = None

    def prepare(self, query):
        return FakePrepared(query)

    def set_keyspace(self, keyspace):
        if keyspace not in self.keyspaces:
            raise InvalidRequest(f"Keyspace '{keyspace}' does not exist")
        self.keyspace = keyspace

    def execute(self, statement, parameters=None):
        query = " ".join(getattr(statement, "query_string", statement).split())
        self.statements.append(query)
        if self.fail_with is not None:
            raise self.fail_with

        if query.startswith("CREATE KEYSPACE IF NOT EXISTS"):
            self.keyspaces.add(query.split()[5])
            return []
        if query.startswith("CREATE TABLE IF NOT EXISTS"):
            if self.keyspace is None:
                raise InvalidRequest("No keyspace has been specified")
            self.tables.setdefault(query.split()[5], query)
            return []
        if query.startswith("INSERT INTO movies"):
            movie_id, title = parameters
            self.movies[movie_id] = title
            return []
        if query.startswith("SELECT id, title FROM movies"):
            return [{"id": movie_id, "title": title} for movie_id, title in self.movies.items()]
        if query.startswith("INSERT INTO movie_reviews"):
            movie_id, created_at, review_id, reviewer, rating = parameters
            if not -2**31 <= rating < 2**31:
                # what the driver raises binding an oversized int
                raise TypeError(f"Received an argument of invalid type for column \"rating\": {rating}")
            # timestamps come back naive UTC at millisecond precision
            stored = created_at.astimezone(timezone.utc).replace(tzinfo=None)
            stored = stored.replace(microsecond=stored.microsecond // 1000 * 1000)
            self.reviews[(movie_id, stored, review_id)] = {
                "movie_id": movie_id,
                "created_at": stored,
                "review_id": review_id,
                "reviewer": reviewer,
                "rating": rating,
            }
            return []
        if query.startswith("SELECT movie_id, reviewer, rating, created_at FROM movie_reviews WHERE movie_id = ?"):
            (movie_id,) = parameters
            rows = [row for key, row in self.reviews.items() if key[0] == movie_id]
            rows.sort(key=lambda row: row["review_id"].bytes)
            rows.sort(key=lambda row: row["created_at"], reverse=True)
            return [
                {column: row[column] for column in ("movie_id", "reviewer", "rating", "created_at")}
                for row in rows
            ]
        raise InvalidRequest(f"Unsupported statement: {query}")


class FakeMetadata:
    def all_hosts(self):
        return ["127.0.0.1:9042"]


class FakeCluster:
    def __init__(self, session, reachable=True):
        self.session = session
        self.reachable = reachable
        self.metadata = FakeMetadata()
        self.connects = 0
        self.is_shutdown = False

    def connect(self):
        self.connects += 1
        if not self.reachable:
            raise NoHostAvailable("Unable to connect to any servers",
                                  {"127.0.0.1:9042": ConnectionRefusedError(111, "Connection refused")})
        return self.session

    def shutdown(self):
        self.is_shutdown = True


@pytest.fixture()
def session():
    return FakeSession()


@pytest.fixture()
def catalog(session):
    return CatalogStore(session)


@pytest.fixture()
def ledger(session):
    return ReviewLedger(session)


@pytest.fixture()
def client(catalog, ledger):
    app = FastAPI()
    app.include_router(movies.router)
    app.include_router(reviews.router)
    register_exception_handlers(app)
    app.state.catalog = catalog
    app.state.ledger = ledger
    return TestClient(app)


@pytest.fixture()
def cluster(session):
    return FakeCluster(session)


@pytest.fixture()
def unreachable_cluster(session):
    return FakeCluster(session, reachable=False)
