"""Environment loading for CLI scripts."""
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def load_env_if_present(env_file: Optional[str] = None) -> bool:
    """
    Load a .env file into os.environ without overriding existing variables.

    Args:
        env_file: Path to .env file (default: .env in project root)

    Returns:
        True if a file was found and loaded, False otherwise
    """
    env_path = Path(env_file) if env_file else PROJECT_ROOT / ".env"
    if not env_path.is_file():
        return False
    loaded = load_dotenv(env_path, override=False)
    if loaded:
        logger.debug("Loaded environment variables from %s", env_path)
    return loaded
