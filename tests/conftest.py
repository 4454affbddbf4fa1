import threading
from datetime import datetime, UTC

import pytest

from shortlinks.models import LinkModel
from shortlinks.dao.base import LinkBaseDAO
from shortlinks.dao.exceptions import LinkAlreadyExistsError, LinkNotFoundError
from shortlinks.utils.constants import LINKS_PAGE_SIZE


class InMemoryLinkDAO(LinkBaseDAO):
    """Dict-backed LinkBaseDAO whose conditional insert is guarded by a lock.

    `failure` (an exception instance) is raised by every operation when set.
    """

    def __init__(self):
        self.links: dict[str, LinkModel] = {}
        self.failure: Exception | None = None
        self.insert_calls = 0
        self.close_calls = 0
        self._lock = threading.Lock()

    def insert(self, hash: str, url: str, **kwargs) -> LinkModel:
        if self.failure is not None:
            raise self.failure
        with self._lock:
            self.insert_calls += 1
            if hash in self.links:
                raise LinkAlreadyExistsError(f"Link with hash '{hash}' already exists.")
            link = LinkModel(hash=hash, url=url, created_at=datetime.now(UTC))
            self.links[hash] = link
        return link

    def get(self, hash: str, **kwargs) -> LinkModel:
        if self.failure is not None:
            raise self.failure
        with self._lock:
            try:
                return self.links[hash]
            except KeyError:
                raise LinkNotFoundError(f"Link with hash '{hash}' not found.") from None

    def recent(self, limit: int = LINKS_PAGE_SIZE, **kwargs) -> list[LinkModel]:
        if self.failure is not None:
            raise self.failure
        with self._lock:
            return list(reversed(self.links.values()))[:limit]

    def close(self) -> None:
        self.close_calls += 1


@pytest.fixture
def fake_dao() -> InMemoryLinkDAO:
    return InMemoryLinkDAO()


@pytest.fixture
def appconfig():
    """Lambda configuration as returned by load_config()."""
    return {'dynamodb': {'table_name': 'links', 'region_name': 'eu-west-1'}}


@pytest.fixture
def api_event():
    """Minimal API Gateway proxy event on a custom domain."""
    return {
        'requestContext': {'domainName': 'links.example.com', 'stage': 'Prod'},
        'pathParameters': None,
        'body': None,
    }
