import os

# ── Paths ─────────────────────────────────────────────────────────────────────
BACKEND_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(BACKEND_DIR)
DEFAULT_CATALOG_FILENAME = "CS 300 ABCU_Advising_Program_Input.csv"
DEFAULT_CATALOG_PATH = os.path.join(PROJECT_ROOT, "data", DEFAULT_CATALOG_FILENAME)


def resolve_catalog_path(raw: str | None = None) -> str:
    """
    Catalog file to load.

    Uses CATALOG_PATH from the environment when `raw` is not given.
    Relative paths resolve against the project root; unset means the
    bundled default catalog.
    """
    if raw is None:
        raw = os.environ.get("CATALOG_PATH")
    if not raw:
        return DEFAULT_CATALOG_PATH
    if not os.path.isabs(raw):
        return os.path.join(PROJECT_ROOT, raw)
    return raw


def env_float(name: str, default: float, minimum: float = 0.0) -> float:
    raw = os.environ.get(name, "")
    try:
        return max(minimum, float(raw))
    except (TypeError, ValueError):
        return default


def env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.environ.get(name, "")
    try:
        return max(minimum, int(raw))
    except (TypeError, ValueError):
        return default


def env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y"}
