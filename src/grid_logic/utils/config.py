import logging
import os
from dotenv import load_dotenv

load_dotenv()

DEFAULT_LOG_LEVEL = "WARNING"


def resolve_log_level(value) -> str:
    """Upper-cased level name, or WARNING when the name is not a logging level."""
    name = str(value or DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(name), int):
        return DEFAULT_LOG_LEVEL
    return name


class Settings:
    # Solver Settings (0 means no step budget)
    MAX_STEPS: int = int(os.getenv("NONOGRAM_MAX_STEPS", "0"))

    # Logging
    LOG_LEVEL: str = resolve_log_level(os.getenv("NONOGRAM_LOG_LEVEL", DEFAULT_LOG_LEVEL))

settings = Settings()
