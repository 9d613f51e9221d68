"""Project-level configuration and path helpers."""

from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "03_config"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "simple.conf"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"
DEFAULT_QUEUE_SIZE = 10

LOGS_DIR.mkdir(parents=True, exist_ok=True)


PathLike = Union[str, Path]


def resolve_config_path(env_value: PathLike | None = None) -> Path | None:
    """Resolve CONFIG_FILE to an absolute path (None means the built-in math example)."""
    if not env_value:
        return None

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def resolve_queue_size(env_value: str | int | None = None) -> int:
    """Resolve QUEUE_SIZE to a positive int, falling back to the default."""
    if env_value is None or env_value == "":
        return DEFAULT_QUEUE_SIZE

    size = int(env_value)
    if size < 1:
        raise ValueError(f"Queue size must be positive, got {size}")
    return size
