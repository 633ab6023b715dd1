"""Pytest configuration and fixtures."""

from datetime import datetime, timezone

import mongomock
import pytest

from docmanager import (
    DocumentStore,
    GenericDocumentManager,
    ManagerConfigBuilder,
    MappingRequestContext,
    SignalEventDispatcher,
)
from tests.sample_documents import Organization


@pytest.fixture
def db():
    """An in-memory MongoDB database."""
    return mongomock.MongoClient().docmanager_test


@pytest.fixture
def store(db):
    return DocumentStore(db)


@pytest.fixture
def organizations(store):
    """Five organizations, saved in the store."""
    docs = [
        Organization(name="Bob Smith Ltd", type="a", createdAt=datetime(2021, 1, 3, tzinfo=timezone.utc)),
        Organization(name="Alice Corp", type="a", createdAt=datetime(2021, 1, 1, tzinfo=timezone.utc)),
        Organization(name="bobcat works", type="b", createdAt=datetime(2021, 1, 5, tzinfo=timezone.utc)),
        Organization(name="Carol & Co", type="c", createdAt=datetime(2021, 1, 2, tzinfo=timezone.utc)),
        Organization(name="Dave.io", type="c", createdAt=datetime(2021, 1, 4, tzinfo=timezone.utc)),
    ]
    for doc in docs:
        store.persist(doc)
    store.flush()
    return docs


@pytest.fixture
def request_values():
    """Mutable request parameters seen by the manager (request key -> value)."""
    return {}


@pytest.fixture
def dispatcher():
    return SignalEventDispatcher()


@pytest.fixture
def config_builder():
    return (
        ManagerConfigBuilder()
        .set_document(Organization)
        .set_key("organization")
        .set_accept_from_request(["page", "query", "items_per_page", "sort_by", "sort_dir"])
        .set_items_per_page(2)
        .set_query_fields(["name", "type"])
    )


@pytest.fixture
def manager(config_builder, store, request_values, dispatcher):
    return GenericDocumentManager(
        config_builder.build(),
        store=store,
        event_dispatcher=dispatcher,
        request_context=MappingRequestContext(request_values),
    )
