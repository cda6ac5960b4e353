"""Elasticsearch client facade.

SearchClient forwards index administration, bulk indexing and query operations
to the underlying engine handle, merging the configured timeout parameters into
every request. Engine errors propagate unchanged, except a not-found condition
while resolving an alias, which resolves to no index.
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from searchsuite_client.config import Config
from searchsuite_client.es.builder import ClientBuilder
from searchsuite_client.es.protocols import EngineBuilder, SearchEngine
from searchsuite_client.es.settings import CLIENT_PARAMS_KEY
from searchsuite_client.logging.logger import log_debug


class TimeoutParameters(BaseModel):
    """Timeouts merged into every request, in seconds."""
    model_config = ConfigDict(frozen=True)

    timeout: float
    server_timeout: float

    @classmethod
    def from_config(cls, config: Config) -> "TimeoutParameters":
        return cls(timeout=config.timeout, server_timeout=config.connection_timeout)


class MappingLookup(BaseModel):
    """Result of a mapping lookup: either found with its mapping, or not found."""

    found: bool
    mapping: Dict[str, Any] = Field(default_factory=dict)

    def index_names(self) -> List[str]:
        return list(self.mapping.keys()) if self.found else []


def is_not_found(error: BaseException) -> bool:
    """Check if an engine error reports a missing resource (HTTP 404)."""
    return getattr(error, "status_code", None) == 404


class SearchClient:
    """Narrow facade over a search engine client."""

    def __init__(self, config: Config, builder: EngineBuilder) -> None:
        self._engine: SearchEngine = builder.build(config.get_options())
        self._timeout_params = TimeoutParameters.from_config(config)
        self._client_params: Dict[str, Any] = self._timeout_params.model_dump()

    @property
    def timeout_params(self) -> TimeoutParameters:
        return self._timeout_params

    def info(self) -> Dict[str, Any]:
        return self._engine.info(self._prepare_params())

    def ping(self) -> bool:
        return self._engine.ping(self._prepare_params())

    def create_index(self, index_name: str, index_settings: Dict[str, Any]) -> None:
        self._engine.indices.create(self._prepare_params({"index": index_name, "body": index_settings}))

    def delete_index(self, index_name: str) -> None:
        self._engine.indices.delete(self._prepare_params({"index": index_name}))

    def index_exists(self, index_name: str) -> bool:
        return self._engine.indices.exists(self._prepare_params({"index": index_name}))

    def put_index_settings(self, index_name: str, index_settings: Dict[str, Any]) -> None:
        self._engine.indices.put_settings(self._prepare_params({"index": index_name, "body": index_settings}))

    def put_mapping(self, index_name: str, doc_type: str, mapping: Dict[str, Any]) -> None:
        self._engine.indices.put_mapping(self._prepare_params({
            "index": index_name,
            "type": doc_type,
            "body": {doc_type: mapping},
        }))

    def force_merge(self, index_name: str) -> None:
        self._engine.indices.forcemerge(self._prepare_params({"index": index_name}))

    def refresh_index(self, index_name: str) -> None:
        self._engine.indices.refresh(self._prepare_params({"index": index_name}))

    def get_indices_name_by_alias(self, index_alias: str) -> List[str]:
        """Get the names of the indices an alias points to.

        Returns an empty list when the alias does not exist.
        """
        lookup = self._lookup_mapping(index_alias)
        if not lookup.found:
            log_debug("alias not found, no index resolved", alias=index_alias)
        return lookup.index_names()

    def update_aliases(self, alias_actions: List[Dict[str, Any]]) -> None:
        self._engine.indices.update_aliases(self._prepare_params({"body": {"actions": alias_actions}}))

    def bulk(self, bulk_params: Mapping[str, Any]) -> Dict[str, Any]:
        return self._engine.bulk(self._prepare_params(bulk_params))

    def search(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        return self._engine.search(self._prepare_params(params))

    def analyze(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        return self._engine.indices.analyze(self._prepare_params(params))

    def index_stats(self, index_name: str) -> Dict[str, Any]:
        return self._engine.indices.stats(self._prepare_params({"index": index_name}))

    def termvectors(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        return self._engine.termvectors(self._prepare_params(params))

    def _lookup_mapping(self, index_alias: str) -> MappingLookup:
        try:
            mapping = self._engine.indices.get_mapping(self._prepare_params({"index": index_alias}))
        except Exception as e:
            if not is_not_found(e):
                raise
            return MappingLookup(found=False)

        return MappingLookup(found=True, mapping=dict(mapping))

    def _prepare_params(self, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Merge request parameters with the timeout parameters.

        The timeout parameters always win over caller supplied keys.
        Each request gets its own copy of the cached timeout mapping.
        """
        return {**(params or {}), CLIENT_PARAMS_KEY: dict(self._client_params)}


def get_client(config: Config, builder: Optional[EngineBuilder] = None) -> SearchClient:
    """Create and return a search client facade backed by Elasticsearch."""
    return SearchClient(config, builder if builder is not None else ClientBuilder())
