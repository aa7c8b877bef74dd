from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    CASSANDRA_HOST: str = "127.0.0.1"
    CASSANDRA_PORT: int = 9042
    CASSANDRA_DATACENTER: str = "datacenter1"
    CASSANDRA_REPLICATION_FACTOR: int = 1
    CASSANDRA_CONSISTENCY: str = "LOCAL_ONE"
    CASSANDRA_REQUEST_TIMEOUT: float = 10.0

    HOST: str = "0.0.0.0"
    PORT: int = 3000
    ALLOWED_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"  # Load environment variables from .env file

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

settings = Settings()
