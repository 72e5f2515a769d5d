from pathlib import Path

# Config files
CONFIG_DIRNAME = ".blu"
CONFIG_FILENAME = "config.yml"

# Fenced blocks
FENCE_DELIMITER = "```"

# Characters shown on each side of a JSON syntax error
DIAGNOSTIC_SNIPPET_RADIUS = 10

# Materialization
DEFAULT_MAX_WORKERS = 1
MATERIALIZE_ENCODING = "utf-8"


def config_path(base: Path) -> Path:
    return base / CONFIG_DIRNAME / CONFIG_FILENAME
