import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load the appropriate .env file on module import
env = os.environ.get("TABLEDAO_ENV", "development").lower()
env_file = f".env.{env}"
if os.path.exists(env_file):
    load_dotenv(env_file)
else:
    # Fall back to the default .env file
    load_dotenv()


@dataclass
class Config:
    environment: str
    database_url: str
    primary_key_field: str
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            environment=env,
            database_url=os.environ.get(
                "DATABASE_URL", "postgresql://localhost:5432/tabledao"
            ),
            primary_key_field=os.environ.get("TABLEDAO_PRIMARY_KEY", "id"),
            log_level=os.environ.get("TABLEDAO_LOG_LEVEL", "WARNING").upper(),
        )


config = Config.from_env()
