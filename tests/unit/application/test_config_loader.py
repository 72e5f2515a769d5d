from pathlib import Path

import pytest

from blu.application.config_loader import ConfigLoadError, load_config
from blu.application.config_models import BluConfig


def _write_config(base: Path, text: str) -> Path:
    path = base / ".blu" / "config.yml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_when_no_files(tmp_path: Path) -> None:
    cfg = load_config(project_root=tmp_path / "proj", user_home=tmp_path / "home")

    assert cfg == BluConfig()
    assert cfg.materialize.max_workers == 1
    assert cfg.logging.level == "WARNING"
    assert cfg.events.stderr is False


def test_project_overrides_user_overrides_defaults(tmp_path: Path) -> None:
    home = tmp_path / "home"
    proj = tmp_path / "proj"
    _write_config(home, "materialize:\n  max_workers: 8\nlogging:\n  level: info\n")
    _write_config(proj, "materialize:\n  max_workers: 2\n")

    cfg = load_config(project_root=proj, user_home=home)

    assert cfg.materialize.max_workers == 2
    # Deep merge keeps the user's logging section
    assert cfg.logging.level == "INFO"


def test_empty_file_is_ignored(tmp_path: Path) -> None:
    _write_config(tmp_path, "")
    assert load_config(project_root=tmp_path, user_home=tmp_path / "none") == BluConfig()


def test_malformed_yaml_raises(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "materialize: [unclosed\n")

    with pytest.raises(ConfigLoadError, match="Malformed YAML") as excinfo:
        load_config(project_root=tmp_path, user_home=tmp_path / "none")
    assert excinfo.value.path == path
    assert str(path) in str(excinfo.value)


def test_unreadable_file_raises(tmp_path: Path) -> None:
    path = tmp_path / ".blu" / "config.yml"
    path.parent.mkdir(parents=True)
    path.write_bytes(b"\xff\xfe not utf-8")

    with pytest.raises(ConfigLoadError, match="Failed to read config file") as excinfo:
        load_config(project_root=tmp_path, user_home=tmp_path / "none")
    assert excinfo.value.path == path


def test_config_path_is_a_directory_raises(tmp_path: Path) -> None:
    (tmp_path / ".blu" / "config.yml").mkdir(parents=True)

    with pytest.raises(ConfigLoadError, match="Failed to read config file"):
        load_config(project_root=tmp_path, user_home=tmp_path / "none")


def test_non_mapping_root_raises(tmp_path: Path) -> None:
    _write_config(tmp_path, "- a\n- b\n")

    with pytest.raises(ConfigLoadError, match="YAML root must be a mapping"):
        load_config(project_root=tmp_path, user_home=tmp_path / "none")


@pytest.mark.parametrize(
    "text",
    [
        "materialize:\n  max_workers: 0\n",
        "logging:\n  level: chatty\n",
        "unknown_section: true\n",
        "events:\n  stderr: true\n  colour: red\n",
    ],
)
def test_schema_violations_raise(tmp_path: Path, text: str) -> None:
    _write_config(tmp_path, text)

    with pytest.raises(ConfigLoadError, match="Invalid config"):
        load_config(project_root=tmp_path, user_home=tmp_path / "none")
