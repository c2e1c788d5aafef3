"""Version information for send-google-chat-webhook."""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path

DISTRIBUTION_NAME = "send-google-chat-webhook"


def get_version_from_pyproject() -> str:
    """
    Get version from the installed distribution or pyproject.toml.

    Returns:
        Version string

    Raises:
        RuntimeError: If version cannot be determined
    """
    try:
        return get_version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        # Running from a source checkout
        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with pyproject_path.open("rb") as f:
                data = tomllib.load(f)
                return str(data["project"]["version"])

        raise RuntimeError("Could not determine package version") from None


__version__ = get_version_from_pyproject()

__all__ = ["__version__"]
