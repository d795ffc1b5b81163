"""
Pytest fixtures shared by the pagebuilder tests.

- `app` runs against an in-memory SQLite database with a fresh schema per test
- `templates_root` / `write_template` build template directory trees under tmp_path
"""

import json
from pathlib import Path
from typing import Callable, Optional

import pytest
import yaml

from pagebuilder import create_app
from pagebuilder.extensions import db
from pagebuilder.repositories.catalog_store import CatalogStore


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest.fixture
def app(templates_root: Path):
    app = create_app("testing")
    app.config["PAGEBUILDER_TEMPLATES_ROOT"] = str(templates_root)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app) -> CatalogStore:
    return CatalogStore()


# =============================================================================
# Filesystem Fixtures
# =============================================================================

@pytest.fixture
def templates_root(tmp_path: Path) -> Path:
    """Empty templates root; one subdirectory per template."""
    root = tmp_path / "pages"
    root.mkdir()
    return root


@pytest.fixture
def write_template(templates_root: Path) -> Callable[..., Path]:
    """
    Create (or overwrite) a template directory.

    descriptor:
    - None: directory without a descriptor
    - str: written verbatim
    - dict: dumped as YAML, or JSON when filename ends in .json
    """

    def _write(name: str, descriptor=None, filename: str = "config.yaml") -> Path:
        directory = templates_root / name
        directory.mkdir(exist_ok=True)

        for existing in [*directory.glob("config.*"), directory / "config"]:
            if not existing.is_file():
                continue
            existing.unlink()

        if descriptor is None:
            return directory

        if isinstance(descriptor, str):
            content = descriptor
        elif filename.endswith(".json"):
            content = json.dumps(descriptor)
        else:
            content = yaml.safe_dump(descriptor, sort_keys=False)

        (directory / filename).write_text(content, encoding="utf-8")
        return directory

    return _write
