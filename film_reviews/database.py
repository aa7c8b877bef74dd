from cassandra import ConsistencyLevel
from cassandra.cluster import Cluster, ExecutionProfile, EXEC_PROFILE_DEFAULT
from cassandra.policies import DCAwareRoundRobinPolicy, FallthroughRetryPolicy
from cassandra.query import dict_factory

from .config import Settings
from .errors import InitializationError, STORAGE_FAILURES
from .logger import setup_logger

logger = setup_logger(__name__)

KEYSPACE = "film_reviews_db"

CREATE_KEYSPACE = """
    CREATE KEYSPACE IF NOT EXISTS {keyspace}
    WITH replication = {{'class': 'SimpleStrategy', 'replication_factor': {replication_factor}}}
"""

CREATE_MOVIES_TABLE = """
    CREATE TABLE IF NOT EXISTS movies (
        id uuid PRIMARY KEY,
        title text
    )
"""

# One partition per movie, newest review first. review_id breaks ties
# between reviews written in the same millisecond.
CREATE_REVIEWS_TABLE = """
    CREATE TABLE IF NOT EXISTS movie_reviews (
        movie_id uuid,
        created_at timestamp,
        review_id uuid,
        reviewer text,
        rating int,
        PRIMARY KEY (movie_id, created_at, review_id)
    ) WITH CLUSTERING ORDER BY (created_at DESC, review_id ASC)
"""


def build_cluster(settings: Settings) -> Cluster:
    """Create an unconnected Cluster configured from settings.

    The default profile never retries a statement; failures surface to the caller.
    """
    try:
        consistency = ConsistencyLevel.name_to_value[settings.CASSANDRA_CONSISTENCY.upper()]
    except KeyError:
        raise InitializationError(f"Unknown consistency level '{settings.CASSANDRA_CONSISTENCY}'")

    profile = ExecutionProfile(
        load_balancing_policy=DCAwareRoundRobinPolicy(local_dc=settings.CASSANDRA_DATACENTER),
        retry_policy=FallthroughRetryPolicy(),
        consistency_level=consistency,
        request_timeout=settings.CASSANDRA_REQUEST_TIMEOUT,
        row_factory=dict_factory,
    )
    return Cluster(
        contact_points=[settings.CASSANDRA_HOST],
        port=settings.CASSANDRA_PORT,
        execution_profiles={EXEC_PROFILE_DEFAULT: profile},
    )


class Database:
    """Process-wide handle on the cluster connection and its session."""

    def __init__(self, cluster, keyspace: str = KEYSPACE, replication_factor: int = 1):
        self.cluster = cluster
        self.keyspace = keyspace
        self.replication_factor = replication_factor
        self.session = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(build_cluster(settings), replication_factor=settings.CASSANDRA_REPLICATION_FACTOR)

    def bootstrap(self):
        """Connect and make sure the keyspace and both tables exist.

        Every statement is IF NOT EXISTS, so this can run against an
        already initialized database. Any failure raises InitializationError.
        """
        try:
            logger.info("Connecting to Cassandra")
            if self.session is None:
                self.session = self.cluster.connect()
            logger.info("Connected to cluster", extra={"hosts": len(self.cluster.metadata.all_hosts())})

            logger.info("Creating keyspace if missing", extra={"keyspace": self.keyspace})
            self.session.execute(CREATE_KEYSPACE.format(
                keyspace=self.keyspace, replication_factor=int(self.replication_factor)))
            self.session.set_keyspace(self.keyspace)

            logger.info("Creating table 'movies' if missing")
            self.session.execute(CREATE_MOVIES_TABLE)

            logger.info("Creating table 'movie_reviews' if missing")
            self.session.execute(CREATE_REVIEWS_TABLE)
        except STORAGE_FAILURES as e:
            logger.exception("Database initialization failed")
            raise InitializationError(f"Database initialization failed: {e}") from e

        logger.info("Database ready", extra={"keyspace": self.keyspace})
        return self.session

    def shutdown(self):
        self.cluster.shutdown()
        self.session = None
        logger.info("Cluster connection closed")
