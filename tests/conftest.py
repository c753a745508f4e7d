"""Shared fixtures built on tests/fixtures/users.yaml, a small users API."""

from __future__ import annotations

import copy
import json
from pathlib import Path

import pytest

from snippetgen.loader import load_spec

FIXTURES = Path(__file__).parent / "fixtures"
USERS_YAML = FIXTURES / "users.yaml"


@pytest.fixture
def users_spec() -> dict:
    """A fresh copy of the users API document; tests may mutate it."""
    return load_spec(USERS_YAML)


@pytest.fixture
def multipart_schema(users_spec) -> dict:
    """The inline multipart/form-data schema of PATCH /api/users/{id}."""
    content = users_spec["paths"]["/api/users/{id}"]["patch"]["requestBody"]["content"]
    return copy.deepcopy(content["multipart/form-data"]["schema"])


@pytest.fixture
def users_yaml() -> Path:
    return USERS_YAML


@pytest.fixture
def users_json(tmp_path: Path, users_spec) -> Path:
    path = tmp_path / "users.json"
    path.write_text(json.dumps(users_spec), encoding="utf-8")
    return path
