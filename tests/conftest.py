"""Shared fixtures for depscan tests."""

import json

import pytest


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def project_dir(tmp_path):
    """A project with axios declared and follow-redirects installed transitively."""
    (tmp_path / "package.json").write_text(
        json.dumps({"name": "demo", "dependencies": {"axios": "^1.12.2"}})
    )
    (tmp_path / "package-lock.json").write_text(
        json.dumps(
            {
                "name": "demo",
                "lockfileVersion": 3,
                "packages": {
                    "": {"name": "demo", "dependencies": {"axios": "^1.12.2"}},
                    "node_modules/axios": {"version": "1.12.2"},
                    "node_modules/follow-redirects": {"version": "1.15.0"},
                },
            }
        )
    )
    return tmp_path
