"""End-to-end tests for GenericDocumentManager against an in-memory MongoDB."""

import logging
from unittest.mock import MagicMock

import pytest
from flask import Flask

from docmanager import (
    ConfigurationError,
    GenericDocumentManager,
    INVALID_DATE,
    MappingRequestContext,
    NotFoundError,
    Page,
)
from tests.sample_documents import Organization, User


def group_counts(groups):
    return {group["_id"]: group["count"] for group in groups}


@pytest.fixture
def mock_store_manager(config_builder):
    """A manager whose store records every call and returns nothing."""
    store = MagicMock()
    return GenericDocumentManager(config_builder.build(), store=store, request_context=MappingRequestContext()), store


class TestGetDocuments:
    def test_first_page(self, manager, organizations):
        page = manager.get_documents()

        assert isinstance(page, Page)
        assert page.page == 1
        assert page.items_per_page == 2
        assert len(page.items) == 2
        assert page.total_count == 5
        assert page.page_count == 3

    def test_items_never_exceed_items_per_page(self, manager, request_values, organizations):
        for page_number in ("1", "2", "3", "4"):
            request_values["page"] = page_number
            page = manager.get_documents()
            assert len(page.items) <= page.items_per_page
            assert page.total_count == manager.count()

    def test_pages_cover_every_document_once(self, manager, request_values, organizations):
        request_values["sort_by"] = "name"
        seen = []
        for page_number in ("1", "2", "3"):
            request_values["page"] = page_number
            seen.extend(org.name for org in manager.get_documents())
        assert sorted(seen) == sorted(org.name for org in organizations)

    def test_free_text_from_request_is_case_insensitive(self, manager, request_values, organizations):
        request_values["q"] = "bob"

        page = manager.get_documents()

        assert sorted(org.name for org in page.items) == ["Bob Smith Ltd", "bobcat works"]
        assert page.total_count == 2

    def test_free_text_is_matched_literally(self, manager, organizations):
        page = manager.get_documents(query="a.e")
        assert page.total_count == 0

        page = manager.get_documents(query=".io")
        assert [org.name for org in page.items] == ["Dave.io"]

    def test_explicit_query_wins_over_request(self, manager, request_values, organizations):
        request_values["q"] = "bob"
        page = manager.get_documents(query="alice")
        assert [org.name for org in page.items] == ["Alice Corp"]

    def test_filters_are_anded_with_free_text(self, manager, organizations):
        page = manager.get_documents(
            filters=[{"field": "type", "selector": "equals", "value": "a"}],
            query="bob",
        )
        assert [org.name for org in page.items] == ["Bob Smith Ltd"]

    def test_no_match_gives_an_empty_page(self, manager, organizations):
        page = manager.get_documents(filters=[{"field": "type", "selector": "equals", "value": "z"}])
        assert page.items == []
        assert page.total_count == 0

    def test_sort_field_from_request_is_camel_cased(self, manager, request_values, organizations):
        request_values["sort_by"] = "created-at"
        request_values["order"] = "desc"

        page = manager.get_documents()

        assert [org.name for org in page.items] == ["bobcat works", "Dave.io"]

    def test_invalid_sort_direction_falls_back_to_ascending(self, manager, request_values, organizations, caplog):
        request_values["sort_by"] = "createdAt"
        request_values["order"] = "sideways"

        with caplog.at_level(logging.WARNING, logger="docmanager"):
            page = manager.get_documents()

        assert [org.name for org in page.items] == ["Alice Corp", "Carol & Co"]
        assert "sideways" in caplog.text

    def test_invalid_page_falls_back_to_default(self, manager, request_values, organizations, caplog):
        request_values["page"] = "abc"
        request_values["per_page"] = "0"

        with caplog.at_level(logging.WARNING, logger="docmanager"):
            page = manager.get_documents()

        assert page.page == 1
        assert page.items_per_page == 2
        assert "abc" in caplog.text

    def test_request_values_are_ignored_when_not_accepted(self, config_builder, store, organizations):
        config = config_builder.set_accept_from_request(["page"]).build()
        manager = GenericDocumentManager(config, store=store, request_context=MagicMock(get=lambda key, default=None: "bob" if key == "q" else default))

        assert manager.get_documents().total_count == 5

    def test_primes(self, manager, store):
        owner = User(name="Olga")
        store.persist(owner)
        store.persist(Organization(name="Owned", owner=owner.get_id()))
        store.flush()

        page = manager.get_documents(primes=["owner"])

        assert page.items[0].owner.name == "Olga"

    def test_reads_the_flask_request_by_default(self, config_builder, store, organizations):
        manager = GenericDocumentManager(config_builder.build(), store=store)
        app = Flask(__name__)

        with app.test_request_context("/organizations?q=bob&per_page=1&page=2"):
            page = manager.get_documents()

        assert page.total_count == 2
        assert page.items_per_page == 1
        assert len(page.items) == 1

    def test_bad_operator_fails_before_the_store_is_used(self, mock_store_manager):
        manager, store = mock_store_manager

        with pytest.raises(ConfigurationError):
            manager.get_documents(filters=[{"field": "name", "selector": "like", "value": "bob"}])

        assert store.method_calls == []

    def test_search_without_query_fields_fails(self, config_builder, store, organizations):
        manager = GenericDocumentManager(config_builder.set_query_fields([]).build(), store=store)
        with pytest.raises(ConfigurationError):
            manager.get_documents(query="bob")


class TestCount:
    def test_count_ignores_request_term_by_default(self, manager, request_values, organizations):
        request_values["q"] = "bob"
        assert manager.count() == 5

    def test_count_with_term(self, manager, organizations):
        assert manager.count(query="bob") == 2

    def test_count_with_request_term(self, manager, request_values, organizations):
        request_values["q"] = "bob"
        assert manager.count(query=True) == 2

    def test_count_with_filters(self, manager, organizations):
        filters = [{"field": "type", "selector": "in", "value": ["a", "b"]}]
        assert manager.count(filters) == 3


class TestAggregation:
    def test_count_by_group(self, manager, organizations):
        assert group_counts(manager.count_by_group("type")) == {"a": 2, "b": 1, "c": 2}

    def test_count_by_group_with_free_text(self, manager, request_values, organizations):
        request_values["q"] = "bob"
        assert group_counts(manager.count_by_group("type")) == {"a": 1, "b": 1}

    def test_count_by_group_with_match(self, manager, organizations):
        groups = manager.count_by_group("type", match={"type": {"$in": ["a", "b"]}})
        assert group_counts(groups) == {"a": 2, "b": 1}

    def test_count_by_group_sorted_and_limited(self, manager, organizations):
        groups = manager.count_by_group("type", sort={"count": "desc", "_id": "asc"}, limit=1)
        assert groups == [{"_id": "a", "count": 2}]

    def test_aggregate_group_with_custom_expression(self, manager, organizations):
        groups = manager.aggregate_group({"_id": "$type", "names": {"$push": "$name"}}, match={"type": "c"})
        assert len(groups) == 1
        assert sorted(groups[0]["names"]) == ["Carol & Co", "Dave.io"]


class TestFind:
    def test_find_by_string_id(self, manager, organizations):
        alice = organizations[1]
        assert manager.find(str(alice.get_id())).name == "Alice Corp"

    def test_find_with_filters_that_exclude_the_document(self, manager, organizations):
        alice = organizations[1]
        with pytest.raises(NotFoundError):
            manager.find(alice.get_id(), filters=[{"field": "type", "selector": "equals", "value": "b"}])

    def test_find_with_invalid_id(self, manager, organizations):
        with pytest.raises(NotFoundError):
            manager.find("not-an-id")

    def test_find_by_and_find_one_by(self, manager, organizations):
        assert [org.name for org in manager.find_by({"type": "c"}, sort={"name": "asc"})] == ["Carol & Co", "Dave.io"]
        assert manager.find_one_by({"name": "Nobody"}) is None


class TestWriting:
    def test_save_and_remove(self, manager):
        first = Organization(name="First")
        second = Organization(name="Second")

        manager.save([first, second])
        assert manager.count() == 2

        assert manager.remove(first) is True
        assert [org.name for org in manager.find_by()] == ["Second"]

    def test_failed_save_leaves_nothing_staged(self, manager, store):
        with pytest.raises(TypeError):
            manager.save([Organization(name="Good"), {"name": "not a document"}])

        assert not store.has_staged()

        manager.save([Organization(name="Unrelated")])

        assert [org.name for org in manager.find_by()] == ["Unrelated"]

    def test_failed_remove_leaves_nothing_staged(self, manager, store, organizations):
        with pytest.raises(TypeError):
            manager.remove([organizations[0], "not a document"])

        assert not store.has_staged()
        assert manager.count() == 5

    def test_remove_nothing_does_not_touch_the_store(self, mock_store_manager):
        manager, store = mock_store_manager

        assert manager.remove([]) is False
        assert store.method_calls == []

    def test_get_identifiers(self, organizations):
        ids = GenericDocumentManager.get_identifiers(organizations[:2])
        assert ids == [organizations[0].get_id(), organizations[1].get_id()]


class TestEvents:
    def test_notify_uses_the_config_key(self, manager, dispatcher):
        received = []
        dispatcher.connect("organization.created", lambda sender, event: received.append(event))

        event = manager.notify("created", {"data": {"name": "Acme"}})

        assert received == [event]
        assert event.key == "organization.created"
        assert event.get_argument("data") == {"name": "Acme"}

    def test_notify_carries_the_subject(self, manager, organizations):
        event = manager.notify("updated", subject=organizations[0])

        assert event.subject is organizations[0]
        assert event.arguments == {}

    def test_notify_without_key_fails(self, config_builder, store):
        config = config_builder.build().replace(key=None)
        manager = GenericDocumentManager(config, store=store)

        with pytest.raises(ConfigurationError):
            manager.notify("created")

    def test_dispatch_with_explicit_key(self, manager, dispatcher):
        received = []
        dispatcher.connect("invitation.sent", lambda sender, event: received.append(event.key))

        manager.dispatch("invitation.sent")

        assert received == ["invitation.sent"]


class TestConfiguration:
    def test_configure_returns_a_new_manager(self, manager, organizations):
        wider = manager.configure(items_per_page=10)

        assert len(wider.get_documents().items) == 5
        assert len(manager.get_documents().items) == 2
        assert wider.store is manager.store

    def test_invalid_configure_fails(self, manager):
        with pytest.raises(ConfigurationError):
            manager.configure(items_per_page=0)


def test_date_helpers():
    assert GenericDocumentManager.normalize_date("2021-05-01T10:00:00.5Z") == GenericDocumentManager.normalize_date("2021-05-01T10:00:00Z")
    assert GenericDocumentManager.normalize_date_to_mongo("yesterday") is INVALID_DATE
