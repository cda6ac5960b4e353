"""Elasticsearch engine builder and request adapter."""

from typing import Any, Dict, Mapping

from elastic_transport import ObjectApiResponse

from elasticsearch import Elasticsearch
from searchsuite_client.es.protocols import RequestParams
from searchsuite_client.es.settings import CLIENT_PARAMS_KEY
from searchsuite_client.logging.logger import log_debug


def _call(es_client: Elasticsearch, method: str, params: RequestParams) -> Any:
    """Call an elasticsearch-py API method with a request parameter mapping.

    The reserved "client" entry is turned into per-request transport options,
    every other entry is passed as a keyword argument.
    Object responses are returned as their plain dict body.
    """
    kwargs = dict(params)
    client_params = kwargs.pop(CLIENT_PARAMS_KEY, None) or {}

    # elasticsearch-py has no per-request connect timeout, only the total one
    timeout = client_params.get("timeout")
    if timeout is not None:
        es_client = es_client.options(request_timeout=timeout)

    target: Any = es_client
    for name in method.split("."):
        target = getattr(target, name)
    response = target(**kwargs)

    if isinstance(response, ObjectApiResponse):
        return response.body
    return response


class ElasticsearchIndices:
    """Index administration operations of an Elasticsearch client."""

    def __init__(self, es_client: Elasticsearch) -> None:
        self._es_client = es_client

    def create(self, params: RequestParams) -> Any:
        return _call(self._es_client, "indices.create", params)

    def delete(self, params: RequestParams) -> Any:
        return _call(self._es_client, "indices.delete", params)

    def exists(self, params: RequestParams) -> bool:
        return bool(_call(self._es_client, "indices.exists", params))

    def put_settings(self, params: RequestParams) -> Any:
        return _call(self._es_client, "indices.put_settings", params)

    def put_mapping(self, params: RequestParams) -> Any:
        """Put a mapping, dropping the legacy mapping type.

        Elasticsearch 7+ has no mapping types: a request such as
        {"index": "x", "type": "product", "body": {"product": {...}}}
        is sent as {"index": "x", "body": {...}}.
        """
        kwargs = dict(params)
        doc_type = kwargs.pop("type", None)
        body = kwargs.get("body")
        if doc_type is not None and isinstance(body, Mapping) and doc_type in body:
            kwargs["body"] = body[doc_type]
        return _call(self._es_client, "indices.put_mapping", kwargs)

    def forcemerge(self, params: RequestParams) -> Any:
        return _call(self._es_client, "indices.forcemerge", params)

    def refresh(self, params: RequestParams) -> Any:
        return _call(self._es_client, "indices.refresh", params)

    def get_mapping(self, params: RequestParams) -> Dict[str, Any]:
        return _call(self._es_client, "indices.get_mapping", params)  # type: ignore[no-any-return]

    def update_aliases(self, params: RequestParams) -> Any:
        return _call(self._es_client, "indices.update_aliases", params)

    def analyze(self, params: RequestParams) -> Dict[str, Any]:
        return _call(self._es_client, "indices.analyze", params)  # type: ignore[no-any-return]

    def stats(self, params: RequestParams) -> Dict[str, Any]:
        return _call(self._es_client, "indices.stats", params)  # type: ignore[no-any-return]


class ElasticsearchEngine:
    """Search engine handle backed by elasticsearch-py."""

    def __init__(self, es_client: Elasticsearch) -> None:
        self._es_client = es_client
        self._indices = ElasticsearchIndices(es_client)

    @property
    def indices(self) -> ElasticsearchIndices:
        return self._indices

    def info(self, params: RequestParams) -> Dict[str, Any]:
        return _call(self._es_client, "info", params)  # type: ignore[no-any-return]

    def ping(self, params: RequestParams) -> bool:
        return bool(_call(self._es_client, "ping", params))

    def bulk(self, params: RequestParams) -> Dict[str, Any]:
        return _call(self._es_client, "bulk", params)  # type: ignore[no-any-return]

    def search(self, params: RequestParams) -> Dict[str, Any]:
        return _call(self._es_client, "search", params)  # type: ignore[no-any-return]

    def termvectors(self, params: RequestParams) -> Dict[str, Any]:
        return _call(self._es_client, "termvectors", params)  # type: ignore[no-any-return]


class ClientBuilder:
    """Build an Elasticsearch engine handle from connection options."""

    def build(self, options: Dict[str, Any]) -> ElasticsearchEngine:
        log_debug("building elasticsearch client", hosts=options.get("hosts"))
        return ElasticsearchEngine(Elasticsearch(**options))
