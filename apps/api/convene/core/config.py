import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True)
class Settings:
    env: str = os.getenv("ENV", "local")

    # Persistence
    data_dir: str = os.getenv("CONVENE_DATA_DIR", "data")
    data_file: str = os.getenv("CONVENE_DATA_FILE", "convene_data.txt")
    storage_backend: str = os.getenv("STORAGE_BACKEND", "local")
    autosave: bool = _bool(os.getenv("CONVENE_AUTOSAVE"), default=True)

    # Observability
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    metrics_enabled: bool = _bool(os.getenv("METRICS_ENABLED"), default=True)

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir) / self.data_file


settings = Settings()
