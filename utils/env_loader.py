from pathlib import Path
from dotenv import load_dotenv


def load_env() -> None:
    """Load the project's .env if present, otherwise search from the cwd."""
    env_path = Path(__file__).resolve().parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    else:
        load_dotenv()
