import os

from dotenv import find_dotenv, load_dotenv

from finance_tracker.logger import get_logger

logger = get_logger(__name__)


CONFIG_FILENAME = "config.yaml"

DEFAULT_RECENT_TRANSACTIONS_LIMIT = 10
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000

CONFIG_KEYS = (
    "LOG_LEVEL",
    "LOG_DIR",
    "RECENT_TRANSACTIONS_LIMIT",
    "SEED_DEMO_DATA",
    "APP_HOST",
    "APP_PORT",
)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

_config_file_path: str | None = None
_config_file_values: dict[str, str] = {}


def _resolve_dotenv_path() -> str | None:
    config_dir = os.getenv("CONFIG_DIR")
    if config_dir:
        candidate = os.path.join(config_dir, ".env")
        if os.path.exists(candidate):
            return candidate
    return find_dotenv(usecwd=True) or None


def _resolve_config_path() -> str:
    config_dir = os.getenv("CONFIG_DIR")
    if config_dir:
        return os.path.join(config_dir, CONFIG_FILENAME)
    cwd = os.getcwd()
    candidate = os.path.join(cwd, "config", CONFIG_FILENAME)
    if os.path.exists(candidate):
        return candidate
    return os.path.join(cwd, CONFIG_FILENAME)


def _strip_comment(raw_value: str) -> str:
    quote: str | None = None
    for index, char in enumerate(raw_value):
        if char in ("'", '"'):
            if quote is None:
                quote = char
            elif quote == char:
                quote = None
        elif char == "#" and quote is None:
            return raw_value[:index]
    return raw_value


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_config_line(line: str) -> tuple[str, str] | None:
    stripped = line.strip()
    if not stripped or stripped.startswith("#") or ":" not in stripped:
        return None
    key, raw_value = stripped.split(":", 1)
    key = key.strip()
    value = _unquote(_strip_comment(raw_value).strip())
    if not key or not value:
        return None
    return key, value


def read_config_file(path: str | None) -> dict[str, str]:
    """Read flat ``KEY: value`` pairs; anything nested or empty is skipped."""
    if not path or not os.path.exists(path):
        return {}

    values: dict[str, str] = {}
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            parsed = parse_config_line(line)
            if parsed:
                key, value = parsed
                values[key] = value
    return values


def load_environment() -> None:
    """
    Populate ``os.environ`` from ``.env`` and then ``config.yaml``.

    Real environment variables always win; the config file only fills gaps.
    """
    global _config_file_path
    global _config_file_values

    dotenv_path = _resolve_dotenv_path()
    if dotenv_path:
        load_dotenv(dotenv_path=dotenv_path, override=False)

    _config_file_path = _resolve_config_path()
    _config_file_values = read_config_file(_config_file_path)

    for key in CONFIG_KEYS:
        if key not in os.environ and key in _config_file_values:
            os.environ[key] = _config_file_values[key]


def get_config_path() -> str | None:
    return _config_file_path


def get_env_int(name: str, default: int, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("[ENV] Invalid %s='%s', using default %s.", name, raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning(
            "[ENV] %s='%s' below minimum %s, using default %s.",
            name,
            raw,
            min_value,
            default,
        )
        return default
    return value


def get_env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    logger.warning("[ENV] Invalid %s='%s', using default %s.", name, raw, default)
    return default


def recent_transactions_limit() -> int:
    return get_env_int(
        "RECENT_TRANSACTIONS_LIMIT",
        DEFAULT_RECENT_TRANSACTIONS_LIMIT,
        min_value=1,
    )


def seed_demo_data() -> bool:
    return get_env_bool("SEED_DEMO_DATA", True)


def log_environment() -> None:
    logger.info("[ENV] Config file: %s", _config_file_path or "<none>")
    for key in CONFIG_KEYS:
        value = os.getenv(key)
        logger.info("[ENV] %s=%s", key, "<unset>" if value is None else value)


load_environment()
