"""
Utility functions for flowchartbot.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

API_KEY_ENV = "GROQ_API_KEY"
BASE_URL_ENV = "FLOWCHARTBOT_BASE_URL"
MODEL_ENV = "FLOWCHARTBOT_MODEL"


def ensure_api_key(env_var: str = API_KEY_ENV) -> str:
    """
    Ensure the completion API key is available in the environment.

    Checks the environment variable first and then tries the .env file in
    the working directory and in the project root.

    Args:
        env_var: Name of the environment variable holding the key

    Returns:
        str: The API key

    Raises:
        ValueError: If the API key cannot be found
    """
    if os.getenv(env_var):
        return os.getenv(env_var)

    for env_file in (Path(".env"), Path(__file__).parent.parent / ".env"):
        if env_file.exists():
            load_dotenv(env_file)
            if os.getenv(env_var):
                print(f"Loaded {env_var} from {env_file}")
                return os.getenv(env_var)

    raise ValueError(
        f"{env_var} environment variable is not set. "
        f"You can set it with os.environ['{env_var}'] = 'your_api_key' "
        "or by adding it to a .env file."
    )


def env_setting(name: str, default: str) -> str:
    """Return the environment override for ``name`` or ``default``."""
    return os.getenv(name) or default


def build_prompt(prompt_file: str = None) -> str:
    """
    Build the system prompt for the flowchart generator.

    Args:
        prompt_file: Path to prompt file (optional, defaults to the bundled prompt)

    Returns:
        str: The complete prompt
    """
    if prompt_file is None:
        prompt_file = Path(__file__).parent / "prompts" / "prompt.md"

    return Path(prompt_file).read_text().strip()
