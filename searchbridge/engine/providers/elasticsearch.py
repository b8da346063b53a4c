"""
Elasticsearch.

Also serves OpenSearch clusters, which accept the same request bodies.
"""

from __future__ import annotations

__all__ = ["Elasticsearch", "ElasticsearchTransport"]

from typing import Any, Iterable

from elasticsearch import Elasticsearch as SyncElasticsearch

from searchbridge.core import Context, Provider, Response
from searchbridge.core.exceptions import BadRequestError

from .._bulk import BulkWriteCoordinator
from .._executor import SearchExecutor
from .._index_admin import IndexAdmin
from .._models import IndexSettings, PredicateSet
from .._query import DistinctAggregator, QueryTranslator
from .._reconciler import ResultReconciler
from .._record import Record, RecordSource
from .._transport import Transport

DEFAULT_SEARCH_SIZE = 10000
DEFAULT_PAGE_SIZE = 10


class ElasticsearchTransport:
    """Transport over the official Elasticsearch client."""

    client: SyncElasticsearch

    def __init__(self, client: SyncElasticsearch):
        self.client = client

    def bulk(
        self, index: str, operations: list[dict[str, Any]]
    ) -> dict[str, Any]:
        resp = self.client.bulk(index=index, operations=operations)
        return resp.body

    def search(self, index: str, body: dict[str, Any]) -> dict[str, Any]:
        resp = self.client.search(index=index, **body)
        return resp.body

    def delete_by_query(
        self, index: str, query: dict[str, Any]
    ) -> dict[str, Any]:
        resp = self.client.delete_by_query(index=index, query=query)
        return resp.body

    def create_index(
        self, index: str, body: dict[str, Any]
    ) -> dict[str, Any]:
        resp = self.client.indices.create(index=index, **body)
        return resp.body

    def delete_index(self, index: str) -> dict[str, Any]:
        resp = self.client.indices.delete(index=index)
        return resp.body

    def close(self) -> None:
        self.client.close()


class Elasticsearch(Provider):
    hosts: str | list[str] | dict[str, str | int] | None
    cloud_id: str | None
    api_key: str | list[str] | None
    basic_auth: str | list[str] | None
    bearer_auth: str | None
    headers: dict[str, str] | None
    verify_certs: bool | None
    ca_certs: str | None
    request_timeout: float | None

    index: str | None
    soft_delete: bool
    indices: dict[str, Any] | None
    nparams: dict[str, Any]

    _transport: Transport | None
    _init: bool

    def __init__(
        self,
        hosts: str | list[str] | dict[str, str | int] | None = None,
        cloud_id: str | None = None,
        api_key: str | list[str] | None = None,
        basic_auth: str | list[str] | None = None,
        bearer_auth: str | None = None,
        headers: dict[str, str] | None = None,
        verify_certs: bool | None = None,
        ca_certs: str | None = None,
        request_timeout: float | None = None,
        index: str | None = None,
        soft_delete: bool = False,
        indices: dict[str, Any] | None = None,
        nparams: dict[str, Any] = dict(),
        transport: Transport | None = None,
        **kwargs,
    ):
        """Initialize.

        Args:
            hosts:
                Elasticsearch hosts.
            cloud_id:
                Elasticsearch cloud id.
            api_key:
                Elasticsearch api key.
            basic_auth:
                Elasticsearch basic auth.
            bearer_auth:
                Elasticsearch bearer auth.
            headers:
                Elasticsearch http headers.
            verify_certs:
                Elasticsearch verify certs.
            ca_certs:
                Elasticsearch ca certs.
            request_timeout:
                Per request timeout in seconds.
            index:
                Default index when neither the query nor the
                record source names one.
            soft_delete:
                Push the soft delete marker into indexed documents
                of records that support it.
            indices:
                Index creation settings. The "default" entry applies
                to every index, other entries to the index of that name.
            nparams:
                Native parameters to Elasticsearch client.
            transport:
                Transport to use instead of building a client.
        """
        super().__init__(**kwargs)
        self.hosts = hosts
        self.cloud_id = cloud_id
        self.api_key = api_key
        self.basic_auth = basic_auth
        self.bearer_auth = bearer_auth
        self.headers = headers
        self.verify_certs = verify_certs
        self.ca_certs = ca_certs
        self.request_timeout = request_timeout

        self.index = index
        self.soft_delete = soft_delete
        self.indices = indices
        self.nparams = nparams

        self._transport = transport
        self._init = transport is not None

    @property
    def transport(self) -> Transport:
        if not self._init:
            client = SyncElasticsearch(**self._get_client_params())
            self._transport = ElasticsearchTransport(client)
            self._init = True
        return self._transport

    def __setup__(self, context: Context | None = None) -> None:
        _ = self.transport

    def _get_client_params(self) -> dict:
        def _add_if_not_none(key, value):
            return {key: value} if value is not None else {}

        def _convert_if_list(value):
            return tuple(value) if isinstance(value, list) else value

        if self.hosts is None and self.cloud_id is None:
            raise BadRequestError("Either hosts or cloud_id must be set")
        args = {
            **_add_if_not_none("hosts", self.hosts),
            **_add_if_not_none("cloud_id", self.cloud_id),
            **_add_if_not_none("api_key", _convert_if_list(self.api_key)),
            **_add_if_not_none(
                "basic_auth", _convert_if_list(self.basic_auth)
            ),
            **_add_if_not_none("bearer_auth", self.bearer_auth),
            **_add_if_not_none("headers", self.headers),
            **_add_if_not_none("verify_certs", self.verify_certs),
            **_add_if_not_none("ca_certs", self.ca_certs),
            **_add_if_not_none("request_timeout", self.request_timeout),
        }
        if self.nparams is not None:
            args.update(self.nparams)
        return args

    def _get_collection_name(
        self,
        collection_name: str | None,
        source: RecordSource | None = None,
    ) -> str:
        collection_name = (
            collection_name
            or (source.searchable_as() if source is not None else None)
            or self._get_default_collection()
        )
        if not collection_name:
            raise BadRequestError("Collection name must be specified")
        return collection_name

    def _get_default_collection(self) -> str | None:
        component = getattr(self, "__component__", None)
        return self.index or getattr(component, "collection", None)

    def _get_source(
        self,
        predicates: PredicateSet | None,
        source: RecordSource | None,
    ) -> RecordSource:
        if source is None and predicates is not None:
            source = predicates.source
        if source is None:
            raise BadRequestError("Record source must be specified")
        return source

    def update(
        self,
        records: Iterable[Record] = (),
        **kwargs: Any,
    ) -> Response[None]:
        coordinator = BulkWriteCoordinator(self.transport, self.soft_delete)
        batch = coordinator.build_index_batch(records)
        resp = coordinator.submit(batch)
        return Response(result=None, native=dict(result=resp))

    def delete(
        self,
        records: Iterable[Record | str | int] = (),
        collection: str | None = None,
        **kwargs: Any,
    ) -> Response[None]:
        coordinator = BulkWriteCoordinator(self.transport, self.soft_delete)
        batch = coordinator.build_delete_batch(
            records, collection or self._get_default_collection()
        )
        resp = coordinator.submit(batch)
        return Response(result=None, native=dict(result=resp))

    def search(
        self,
        predicates: PredicateSet,
        **kwargs: Any,
    ) -> Response[Any]:
        options = {
            "_source": True,
            "size": predicates.limit or DEFAULT_SEARCH_SIZE,
            "from": predicates.offset,
        }
        resp = self._perform_search(predicates, options)
        if predicates.callback is not None:
            return Response(result=resp)
        return Response(
            result=SearchExecutor.extract_hits(resp), native=dict(result=resp)
        )

    def paginate(
        self,
        predicates: PredicateSet,
        per_page: int = DEFAULT_PAGE_SIZE,
        page: int = 1,
        **kwargs: Any,
    ) -> Response[Any]:
        per_page = per_page or DEFAULT_PAGE_SIZE
        options = {
            "_source": True,
            "size": per_page,
            "from": (page - 1) * per_page,
        }
        options = {k: v for k, v in options.items() if v}
        resp = self._perform_search(predicates, options)
        if predicates.callback is not None:
            return Response(result=resp)
        return Response(
            result=SearchExecutor.extract_hits(resp), native=dict(result=resp)
        )

    def distinct(
        self,
        predicates: PredicateSet,
        field: str | None = None,
        **kwargs: Any,
    ) -> Response[list[Any]]:
        if field is not None:
            predicates = predicates.model_copy(update={"distinct_field": field})
        if not predicates.distinct_field:
            raise BadRequestError("Distinct field must be specified")
        resp = self._perform_search(predicates, {})
        keys = DistinctAggregator.extract_keys(
            resp, predicates.distinct_field
        )
        return Response(result=keys, native=dict(result=resp))

    def count(
        self,
        predicates: PredicateSet,
        **kwargs: Any,
    ) -> Response[int]:
        response = self.search(predicates)
        return Response(
            result=SearchExecutor.get_total_count(response.result),
            native=response.native,
        )

    def map_ids(
        self,
        results: Any = None,
        **kwargs: Any,
    ) -> Response[list[Any]]:
        return Response(result=SearchExecutor.map_ids(results))

    def map(
        self,
        predicates: PredicateSet,
        results: Any = None,
        source: RecordSource | None = None,
        **kwargs: Any,
    ) -> Response[Any]:
        records = ResultReconciler.reconcile(
            predicates, results, self._get_source(predicates, source)
        )
        return Response(result=records)

    def lazy_map(
        self,
        predicates: PredicateSet,
        results: Any = None,
        source: RecordSource | None = None,
        **kwargs: Any,
    ) -> Response[Iterable[Any]]:
        records = ResultReconciler.reconcile_lazy(
            predicates, results, self._get_source(predicates, source)
        )
        return Response(result=records)

    def get_total_count(
        self,
        results: Any = None,
        **kwargs: Any,
    ) -> Response[int]:
        return Response(result=SearchExecutor.get_total_count(results))

    def flush(
        self,
        source: RecordSource | None = None,
        collection: str | None = None,
        **kwargs: Any,
    ) -> Response[None]:
        index = self._get_collection_name(collection, source)
        resp = self.transport.delete_by_query(
            index=index, query={"match_all": {}}
        )
        return Response(result=None, native=dict(result=resp))

    def create_index(
        self,
        name: str,
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> Response[dict[str, Any]]:
        admin = IndexAdmin(
            self.transport, IndexSettings.from_config(self.indices)
        )
        resp = admin.create_index(name, options)
        return Response(result=resp, native=dict(result=resp))

    def delete_index(
        self,
        name: str,
        **kwargs: Any,
    ) -> Response[dict[str, Any]]:
        admin = IndexAdmin(
            self.transport, IndexSettings.from_config(self.indices)
        )
        resp = admin.delete_index(name)
        return Response(result=resp, native=dict(result=resp))

    def close(
        self,
        **kwargs: Any,
    ) -> Response[None]:
        if self._init and self._transport is not None:
            self._transport.close()
            self._init = False
            self._transport = None
        return Response(result=None)

    def _perform_search(
        self,
        predicates: PredicateSet,
        defaults: dict[str, Any],
    ) -> Any:
        source = predicates.source
        index = self._get_collection_name(predicates.index, source)
        fields = source.searchable_fields() if source is not None else []
        executor = SearchExecutor(self.transport)
        query = QueryTranslator.compile(predicates, fields)
        options = executor.build_options(predicates, defaults)
        return executor.execute(index, predicates, query, options)
