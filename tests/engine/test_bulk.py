import uuid

import pytest

from searchbridge.engine import (
    SOFT_DELETED_FIELD,
    BadRequestError,
    BulkWriteCoordinator,
)

from ._data import SearchableRecord
from ._providers import FakeTransport, get_component


def test_update_adds_objects_to_index():
    transport = FakeTransport()
    engine = get_component(transport)

    engine.update([SearchableRecord(1)])

    assert transport.calls == [
        (
            "bulk",
            {
                "index": "table",
                "operations": [
                    {"index": {"_index": "table", "_id": "1"}},
                    {"id": 1},
                ],
            },
        )
    ]


def test_update_merges_metadata_and_key():
    transport = FakeTransport()
    engine = get_component(transport)
    record = SearchableRecord(
        "abc", value={"title": "zonda"}, key_name="uuid"
    )
    record.metadata = {"tenant": 7}

    engine.update([record])

    (call,) = transport.calls_named("bulk")
    assert call["operations"] == [
        {"index": {"_index": "table", "_id": "abc"}},
        {"title": "zonda", "tenant": 7, "uuid": "abc"},
    ]


def test_update_with_soft_deletes():
    transport = FakeTransport()
    engine = get_component(transport, soft_delete=True)

    engine.update(
        [
            SearchableRecord(1, soft_delete=True),
            SearchableRecord(2, soft_delete=True, trashed=True),
        ]
    )

    (call,) = transport.calls_named("bulk")
    assert call["operations"] == [
        {"index": {"_index": "table", "_id": "1"}},
        {"id": 1, SOFT_DELETED_FIELD: 0},
        {"index": {"_index": "table", "_id": "2"}},
        {"id": 2, SOFT_DELETED_FIELD: 1},
    ]


def test_soft_delete_metadata_not_pushed_when_disabled():
    transport = FakeTransport()
    engine = get_component(transport)

    engine.update([SearchableRecord(1, soft_delete=True)])

    (call,) = transport.calls_named("bulk")
    assert call["operations"][1] == {"id": 1}


def test_update_empty():
    transport = FakeTransport()
    engine = get_component(transport)

    engine.update([])

    assert transport.calls == []


@pytest.mark.parametrize("value", [{}, None])
def test_update_empty_searchable_dict_does_not_add_objects(value):
    transport = FakeTransport()
    engine = get_component(transport, soft_delete=True)

    engine.update(
        [
            SearchableRecord(1, value=value),
            SearchableRecord(2, value=value, soft_delete=True, trashed=True),
        ]
    )

    assert transport.calls == []


def test_update_skips_only_empty_records():
    transport = FakeTransport()
    engine = get_component(transport)

    engine.update(
        [
            SearchableRecord(1, value={}),
            SearchableRecord(2),
        ]
    )

    (call,) = transport.calls_named("bulk")
    assert call["operations"] == [
        {"index": {"_index": "table", "_id": "2"}},
        {"id": 2},
    ]


def test_delete_removes_objects_from_index():
    transport = FakeTransport()
    engine = get_component(transport)

    engine.delete([SearchableRecord(1), SearchableRecord(2)])

    assert transport.calls == [
        (
            "bulk",
            {
                "index": "table",
                "operations": [
                    {"delete": {"_index": "table", "_id": "1"}},
                    {"delete": {"_index": "table", "_id": "2"}},
                ],
            },
        )
    ]


def test_delete_with_custom_search_key():
    transport = FakeTransport()
    engine = get_component(transport)

    engine.delete([SearchableRecord("my-key", key_name="uuid")])

    (call,) = transport.calls_named("bulk")
    assert call["operations"] == [
        {"delete": {"_index": "table", "_id": "my-key"}}
    ]


def test_delete_bare_identifiers_with_collection():
    transport = FakeTransport()
    engine = get_component(transport)

    engine.delete([5, "6"], collection="posts")

    (call,) = transport.calls_named("bulk")
    assert call == {
        "index": "posts",
        "operations": [
            {"delete": {"_index": "posts", "_id": "5"}},
            {"delete": {"_index": "posts", "_id": "6"}},
        ],
    }


def test_delete_uuid_identifiers():
    transport = FakeTransport()
    engine = get_component(transport)
    ids = [uuid.uuid4(), uuid.uuid4()]

    engine.delete(ids, collection="table")

    (call,) = transport.calls_named("bulk")
    assert call["operations"] == [
        {"delete": {"_index": "table", "_id": str(id)}} for id in ids
    ]


def test_delete_mixed_records_and_identifiers():
    transport = FakeTransport()
    engine = get_component(transport)

    engine.delete([SearchableRecord(1), 2])

    (call,) = transport.calls_named("bulk")
    assert call == {
        "index": "table",
        "operations": [
            {"delete": {"_index": "table", "_id": "1"}},
            {"delete": {"_index": "table", "_id": "2"}},
        ],
    }


def test_delete_bare_identifiers_use_default_collection():
    transport = FakeTransport()
    engine = get_component(transport, collection="defaults")

    engine.delete([5])

    (call,) = transport.calls_named("bulk")
    assert call["index"] == "defaults"


def test_delete_bare_identifiers_without_collection():
    transport = FakeTransport()
    engine = get_component(transport)

    with pytest.raises(BadRequestError):
        engine.delete([5])
    assert transport.calls == []


def test_delete_empty():
    transport = FakeTransport()
    engine = get_component(transport)

    engine.delete([])

    assert transport.calls == []


def test_bulk_errors_are_logged_not_raised(caplog):
    response = {
        "errors": True,
        "items": [
            {"index": {"_id": "1", "status": 201}},
            {"index": {"_id": "2", "status": 400, "error": {"type": "x"}}},
        ],
    }
    transport = FakeTransport(responses=[response])
    coordinator = BulkWriteCoordinator(transport)
    batch = coordinator.build_index_batch(
        [SearchableRecord(1), SearchableRecord(2)]
    )

    with caplog.at_level("WARNING", logger="searchbridge"):
        result = coordinator.submit(batch)

    assert result == response
    assert "1 failed items" in caplog.text


def test_transport_errors_propagate():
    class FailingTransport(FakeTransport):
        def bulk(self, index, operations):
            raise ConnectionError("engine down")

    engine = get_component(FailingTransport())

    with pytest.raises(ConnectionError):
        engine.update([SearchableRecord(1)])


def test_write_batch_shape():
    coordinator = BulkWriteCoordinator(FakeTransport())

    batch = coordinator.build_index_batch(
        [SearchableRecord(1), SearchableRecord(2, value={})]
    )

    assert batch.collection == "table"
    assert len(batch.operations) == 1
    assert batch.operations[0].id == "1"
    assert batch.operations[0].document == {"id": 1}
