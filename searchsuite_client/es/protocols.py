"""Capability interfaces of the underlying search engine client.

Every engine operation receives a single request parameter mapping, already
merged with the timeout parameters by the facade. Any client exposing these
operations can be substituted for elasticsearch-py.
"""

from typing import Any, Dict, Mapping, Protocol

RequestParams = Mapping[str, Any]


class IndicesEngine(Protocol):
    """Index administration operations."""

    def create(self, params: RequestParams) -> Any: ...

    def delete(self, params: RequestParams) -> Any: ...

    def exists(self, params: RequestParams) -> bool: ...

    def put_settings(self, params: RequestParams) -> Any: ...

    def put_mapping(self, params: RequestParams) -> Any: ...

    def forcemerge(self, params: RequestParams) -> Any: ...

    def refresh(self, params: RequestParams) -> Any: ...

    def get_mapping(self, params: RequestParams) -> Mapping[str, Any]:
        """Return the mappings keyed by concrete index name.

        Raises an error whose ``status_code`` is 404 when nothing matches.
        """

    def update_aliases(self, params: RequestParams) -> Any: ...

    def analyze(self, params: RequestParams) -> Dict[str, Any]: ...

    def stats(self, params: RequestParams) -> Dict[str, Any]: ...


class SearchEngine(Protocol):
    """Live engine client handle."""

    @property
    def indices(self) -> IndicesEngine: ...

    def info(self, params: RequestParams) -> Dict[str, Any]: ...

    def ping(self, params: RequestParams) -> bool: ...

    def bulk(self, params: RequestParams) -> Dict[str, Any]: ...

    def search(self, params: RequestParams) -> Dict[str, Any]: ...

    def termvectors(self, params: RequestParams) -> Dict[str, Any]: ...


class EngineBuilder(Protocol):
    """Turns connection options into a live engine handle."""

    def build(self, options: Dict[str, Any]) -> SearchEngine: ...
