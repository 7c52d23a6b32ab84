import logging
from pathlib import Path

import pytest
import structlog

from filehound.logging_setup import configure_library_defaults


def create_project_structure(base: Path, structure: dict):
    """Creates files and directories from a nested dict: str values are file contents, dict values are subdirectories."""
    for name, content in structure.items():
        target = base / name
        if isinstance(content, dict):
            target.mkdir(parents=True, exist_ok=True)
            create_project_structure(target, content)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """
    root/
      .c.txt   (8KB, hidden)
      a.txt    (1KB)
      b.log    (10KB)
      sub/d.txt (7KB)
    """
    root = tmp_path / "sample"
    create_project_structure(root, {
        ".c.txt": "c" * 8 * 1024,
        "a.txt": "a" * 1024,
        "b.log": "b" * 10 * 1024,
        "sub": {"d.txt": "d" * 7 * 1024},
    })
    return root


@pytest.fixture
def nested_tree(tmp_path: Path) -> Path:
    """
    root/
      .hidden/secret.txt
      .hidden/inner/deep.txt
      empty/
      one/one.txt
      one/two/two.txt
      one/two/three/three.txt
      top.txt
    """
    root = tmp_path / "nested"
    create_project_structure(root, {
        ".hidden": {"secret.txt": "s", "inner": {"deep.txt": "d"}},
        "empty": {},
        "one": {
            "one.txt": "1",
            "two": {"two.txt": "2", "three": {"three.txt": "3"}},
        },
        "top.txt": "t",
    })
    return root


@pytest.fixture(autouse=True)
def isolated_logging_and_user_config(tmp_path_factory, monkeypatch):
    """Keeps a developer's ~/.config/filehound out of tests and resets logging between tests."""
    fake_home_config = tmp_path_factory.mktemp("home") / "config.toml"
    monkeypatch.setattr("filehound.config.loader.USER_CONFIG_FILE", fake_home_config)
    yield
    logging.getLogger("filehound").handlers.clear()
    structlog.reset_defaults()
    configure_library_defaults()

