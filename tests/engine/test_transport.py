from searchbridge.engine.providers.elasticsearch import ElasticsearchTransport


class FakeApiResponse:
    def __init__(self, body):
        self.body = body


class FakeIndicesClient:
    def __init__(self, calls):
        self.calls = calls

    def create(self, **kwargs):
        self.calls.append(("indices.create", kwargs))
        return FakeApiResponse({"acknowledged": True})

    def delete(self, **kwargs):
        self.calls.append(("indices.delete", kwargs))
        return FakeApiResponse({"acknowledged": True})


class FakeClient:
    def __init__(self):
        self.calls = []
        self.indices = FakeIndicesClient(self.calls)
        self.closed = False

    def bulk(self, **kwargs):
        self.calls.append(("bulk", kwargs))
        return FakeApiResponse({"errors": False, "items": []})

    def search(self, **kwargs):
        self.calls.append(("search", kwargs))
        return FakeApiResponse({"hits": {"hits": []}})

    def delete_by_query(self, **kwargs):
        self.calls.append(("delete_by_query", kwargs))
        return FakeApiResponse({"deleted": 3})

    def close(self):
        self.closed = True


def test_transport_forwards_to_client():
    client = FakeClient()
    transport = ElasticsearchTransport(client)

    assert transport.bulk("t", [{"delete": {"_id": "1"}}]) == {
        "errors": False,
        "items": [],
    }
    assert transport.search("t", {"size": 1}) == {"hits": {"hits": []}}
    assert transport.delete_by_query("t", {"match_all": {}}) == {
        "deleted": 3
    }
    assert transport.create_index("t", {"settings": {}}) == {
        "acknowledged": True
    }
    assert transport.delete_index("t") == {"acknowledged": True}
    transport.close()

    assert client.calls == [
        ("bulk", {"index": "t", "operations": [{"delete": {"_id": "1"}}]}),
        ("search", {"index": "t", "size": 1}),
        ("delete_by_query", {"index": "t", "query": {"match_all": {}}}),
        ("indices.create", {"index": "t", "settings": {}}),
        ("indices.delete", {"index": "t"}),
    ]
    assert client.closed is True


def test_transport_expands_search_body_into_keywords():
    client = FakeClient()
    transport = ElasticsearchTransport(client)
    body = {
        "_source": True,
        "size": 10,
        "from": 20,
        "query": {"bool": {"must": []}},
    }

    transport.search("posts", body)

    assert client.calls == [("search", {"index": "posts", **body})]
