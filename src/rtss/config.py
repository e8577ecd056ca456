import json
import logging
import os
from dataclasses import dataclass

from appdirs import user_config_dir  # type: ignore

from rtss.duration import FORMATTERS

logger = logging.getLogger(__name__)

FORMAT_ENV_VAR = "RTSS_FORMAT"
DEFAULT_FORMAT = "human"


@dataclass
class Settings:
    """Effective settings after merging config file, environment and flags."""

    formatter_name: str
    use_pty: bool


def get_config_path() -> str:
    env_path = user_config_dir("rtss", "rtss", roaming=True)
    config_file = os.path.join(env_path, "config.json")
    return config_file


def save_config(config: dict) -> None:
    config_file = get_config_path()
    # make all subdirs of config_file
    os.makedirs(os.path.dirname(config_file), exist_ok=True)
    with open(config_file, "w") as f:
        json.dump(config, f)


def create_or_load_config() -> dict:
    config_file = get_config_path()
    if not os.path.exists(config_file):
        logger.debug(f"No config file at {config_file}")
        return {}
    try:
        with open(config_file) as f:
            config = json.loads(f.read())
    except (OSError, ValueError) as e:
        logger.warning(f"Could not load config file: {e}")
        return {}
    if not isinstance(config, dict):
        logger.warning(f"Ignoring config file {config_file}: expected a JSON object")
        return {}
    logger.debug(f"Loaded config from {config_file}")
    return config


def resolve_settings(
    sortable: bool, pty: bool, config: dict | None = None
) -> Settings:
    """Merge settings in order of preference: flags, environment, config file.

    Args:
        sortable: --sortable was given
        pty: --pty/--tty was given
        config: Parsed config file contents (loaded if None)
    """
    if config is None:
        config = create_or_load_config()

    if sortable:
        formatter_name = "sortable"
    else:
        formatter_name = os.environ.get(FORMAT_ENV_VAR) or config.get(
            "format", DEFAULT_FORMAT
        )

    if formatter_name not in FORMATTERS:
        logger.warning(
            f"Unknown duration format {formatter_name!r}, using {DEFAULT_FORMAT!r}"
        )
        formatter_name = DEFAULT_FORMAT

    use_pty = pty or bool(config.get("pty", False))
    return Settings(formatter_name=formatter_name, use_pty=use_pty)
