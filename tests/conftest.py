from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from todo_api.main import create_app
from todo_api.repositories import InMemoryRepository
from todo_api.settings import get_settings


@pytest.fixture()
def repo() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture()
def client(repo: InMemoryRepository) -> Iterator[TestClient]:
    # Fresh app per test so ids start at 1
    app = create_app(repository=repo, settings=get_settings())
    with TestClient(app) as c:
        yield c
