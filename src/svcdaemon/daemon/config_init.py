"""Configuration file generation with defaults and optional prompts."""

import json
from pathlib import Path
from typing import Any

import typer

from svcdaemon.config import CommandsConfig, LoggingConfig, PathsConfig, ServiceConfig

from .paths import get_config_file_path


def generate_default_config(
    name: str | None = None,
    port: str = "",
    version: str | None = None,
    description: str = "",
    dependencies: list[str] | None = None,
    log_level: str = "INFO",
) -> dict[str, Any]:
    """Generate default configuration dictionary.

    Args:
        name: Service name (default: ServiceConfig default).
        port: Informational port embedded in the service definition.
        version: Service version string.
        description: Human-readable description.
        dependencies: Services this one requires.
        log_level: Logging level (default: INFO).

    Returns:
        Configuration dictionary.
    """
    service = ServiceConfig()
    return {
        "_comment": "Keys starting with _ or $ are ignored.",
        "service": {
            "name": name or service.name,
            "port": port,
            "version": version or service.version,
            "description": description,
            "dependencies": list(dependencies or []),
        },
        "paths": PathsConfig().model_dump(),
        "commands": CommandsConfig().model_dump(),
        "logging": {**LoggingConfig().model_dump(), "level": log_level},
    }


def init_config(
    force: bool = False,
    name: str | None = None,
    port: str | None = None,
    interactive: bool = True,
    config_path: Path | None = None,
) -> Path:
    """Generate default config file with optional prompts.

    Args:
        force: Overwrite existing config file.
        name: Service name (prompts if None and interactive).
        port: Informational port (prompts if None and interactive).
        interactive: Enable interactive prompts.
        config_path: Target file (default: paths.get_config_file_path()).

    Returns:
        Path to created config file.

    Raises:
        FileExistsError: If config exists and force=False.
    """
    if config_path is None:
        config_path = get_config_file_path()

    if config_path.exists() and not force:
        raise FileExistsError(f"Config already exists: {config_path}")

    config_path.parent.mkdir(parents=True, exist_ok=True)

    if interactive:
        if name is None:
            name = typer.prompt("Service name", default=ServiceConfig().name)
        if port is None:
            port = typer.prompt("Port", default="")

    config = generate_default_config(name=name, port=port or "")
    config_path.write_text(json.dumps(config, indent=2), encoding="utf-8")

    return config_path
