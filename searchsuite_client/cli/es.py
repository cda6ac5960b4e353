"""Elasticsearch CLI commands.

Usage:
    searchsuite_info
    searchsuite_ping
    searchsuite_create_index --index products --settings /path/to/settings.json
    searchsuite_delete_index --index products --force
    searchsuite_refresh_index --index products
    searchsuite_force_merge --index products
    searchsuite_alias_indices --alias products
    searchsuite_update_aliases --actions /path/to/actions.json
    searchsuite_bulk --file /path/to/bulk.ndjson
    searchsuite_search --index products --query /path/to/query.json
    searchsuite_index_stats --index products
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from searchsuite_client.config import Config, get_config
from searchsuite_client.es.client import get_client
from searchsuite_client.logging.logger import (log_debug, log_error, log_info,
                                               log_warn, run_logger)

SECRET_FIELDS = {"es_password", "es_api_key"}

# === Common ===


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--es-hosts",
        help="Comma separated Elasticsearch URLs (default: env SEARCHSUITE_CLIENT_ES_HOSTS or http://localhost:9200)",
        default=None,
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode",
    )


def _build_config(parsed: argparse.Namespace) -> Config:
    # 優先順位: コマンドライン引数 > 環境変数 > デフォルト値 (config.py)
    config = get_config()
    update: Dict[str, Any] = {}
    if parsed.es_hosts is not None:
        update["es_hosts"] = [host.strip() for host in parsed.es_hosts.split(",") if host.strip()]
    if parsed.debug:
        update["debug"] = True

    return config.model_copy(update=update) if update else config


def _load_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def parse_simple_args(args: List[str], description: str) -> Config:
    parser = argparse.ArgumentParser(description=description)
    _add_common_args(parser)

    return _build_config(parser.parse_args(args))


def parse_index_args(args: List[str], description: str) -> Tuple[Config, str]:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--index", required=True, help="Index name")
    _add_common_args(parser)

    parsed = parser.parse_args(args)

    return _build_config(parsed), parsed.index


# === Info / Ping ===


def main_info() -> None:
    config = parse_simple_args(sys.argv[1:], "Show Elasticsearch cluster information.")
    with run_logger(config=config):
        log_debug("config loaded", config=config.model_dump(mode="json", exclude=SECRET_FIELDS))
        try:
            _print_json(get_client(config).info())
        except Exception as e:
            log_error("failed to get cluster information", error=e)
            sys.exit(1)


def main_ping() -> None:
    config = parse_simple_args(sys.argv[1:], "Check that Elasticsearch is reachable.")
    with run_logger(config=config):
        log_debug("config loaded", config=config.model_dump(mode="json", exclude=SECRET_FIELDS))
        try:
            reachable = get_client(config).ping()
        except Exception as e:
            log_error("failed to ping elasticsearch", error=e, hosts=config.es_hosts)
            sys.exit(1)

        if reachable:
            log_info("elasticsearch is reachable", hosts=config.es_hosts)
        else:
            log_error("elasticsearch is not reachable", hosts=config.es_hosts)
            sys.exit(1)


# === Create / Delete Index ===


def parse_create_index_args(args: List[str]) -> Tuple[Config, str, Optional[Path]]:
    parser = argparse.ArgumentParser(description="Create an Elasticsearch index.")
    parser.add_argument("--index", required=True, help="Index name to create")
    parser.add_argument(
        "--settings",
        help="JSON file with the index settings and mappings (default: empty body)",
        default=None,
    )
    _add_common_args(parser)

    parsed = parser.parse_args(args)
    settings_file = Path(parsed.settings) if parsed.settings else None

    return _build_config(parsed), parsed.index, settings_file


def main_create_index() -> None:
    config, index, settings_file = parse_create_index_args(sys.argv[1:])
    with run_logger(config=config):
        log_debug("config loaded", config=config.model_dump(mode="json", exclude=SECRET_FIELDS))
        try:
            client = get_client(config)
            if client.index_exists(index):
                log_error("index already exists", index=index)
                sys.exit(1)
            index_settings = _load_json(settings_file) if settings_file else {}
            client.create_index(index, index_settings)
            log_info("created index", index=index)
        except Exception as e:
            log_error("failed to create index", error=e, index=index)
            sys.exit(1)


def parse_delete_index_args(args: List[str]) -> Tuple[Config, str, bool]:
    parser = argparse.ArgumentParser(description="Delete an Elasticsearch index.")
    parser.add_argument("--index", required=True, help="Index name to delete")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Delete without confirmation",
    )
    _add_common_args(parser)

    parsed = parser.parse_args(args)

    return _build_config(parsed), parsed.index, parsed.force


def main_delete_index() -> None:
    config, index, force = parse_delete_index_args(sys.argv[1:])
    with run_logger(config=config):
        log_debug("config loaded", config=config.model_dump(mode="json", exclude=SECRET_FIELDS))

        if not force:
            confirm = input(f"Are you sure you want to delete index '{index}'? [y/N]: ")
            if confirm.lower() != "y":
                log_info("operation cancelled")
                return

        try:
            get_client(config).delete_index(index)
            log_info("deleted index", index=index)
        except Exception as e:
            log_error("failed to delete index", error=e, index=index)
            sys.exit(1)


# === Refresh / Force Merge / Stats ===


def main_refresh_index() -> None:
    config, index = parse_index_args(sys.argv[1:], "Refresh an Elasticsearch index.")
    with run_logger(config=config):
        try:
            get_client(config).refresh_index(index)
            log_info("refreshed index", index=index)
        except Exception as e:
            log_error("failed to refresh index", error=e, index=index)
            sys.exit(1)


def main_force_merge() -> None:
    config, index = parse_index_args(sys.argv[1:], "Force merge the segments of an Elasticsearch index.")
    with run_logger(config=config):
        try:
            get_client(config).force_merge(index)
            log_info("force merged index", index=index)
        except Exception as e:
            log_error("failed to force merge index", error=e, index=index)
            sys.exit(1)


def _primary_doc_count(stats: Dict[str, Any]) -> int:
    # "_all.primaries" is empty when the index pattern matches no index
    return int(stats.get("_all", {}).get("primaries", {}).get("docs", {}).get("count", 0))


def main_index_stats() -> None:
    config, index = parse_index_args(sys.argv[1:], "Show statistics of an Elasticsearch index.")
    with run_logger(config=config):
        try:
            stats = get_client(config).index_stats(index)
        except Exception as e:
            log_error("failed to get index statistics", error=e, index=index)
            sys.exit(1)

        log_info("index statistics", index=index, count=_primary_doc_count(stats))
        _print_json(stats)


# === Aliases ===


def parse_alias_indices_args(args: List[str]) -> Tuple[Config, str]:
    parser = argparse.ArgumentParser(description="List the indices an alias points to.")
    parser.add_argument("--alias", required=True, help="Alias name")
    _add_common_args(parser)

    parsed = parser.parse_args(args)

    return _build_config(parsed), parsed.alias


def main_alias_indices() -> None:
    config, alias = parse_alias_indices_args(sys.argv[1:])
    with run_logger(config=config):
        try:
            indices = get_client(config).get_indices_name_by_alias(alias)
        except Exception as e:
            log_error("failed to resolve alias", error=e, alias=alias)
            sys.exit(1)

        if not indices:
            log_warn("alias points to no index", alias=alias)
        for index in indices:
            print(index)


def parse_update_aliases_args(args: List[str]) -> Tuple[Config, Path]:
    parser = argparse.ArgumentParser(description="Apply alias actions atomically.")
    parser.add_argument(
        "--actions",
        required=True,
        help='JSON file with a list of alias actions, e.g. [{"add": {"index": "products_2", "alias": "products"}}]',
    )
    _add_common_args(parser)

    parsed = parser.parse_args(args)

    return _build_config(parsed), Path(parsed.actions)


def main_update_aliases() -> None:
    config, actions_file = parse_update_aliases_args(sys.argv[1:])
    with run_logger(config=config):
        try:
            actions = _load_json(actions_file)
            if not isinstance(actions, list):
                raise ValueError(f"Alias actions in '{actions_file}' must be a JSON list.")
            get_client(config).update_aliases(actions)
            log_info("updated aliases", file=actions_file, count=len(actions))
        except Exception as e:
            log_error("failed to update aliases", error=e, file=actions_file)
            sys.exit(1)


# === Bulk ===


def parse_bulk_args(args: List[str]) -> Tuple[Config, Path, Optional[str], bool]:
    parser = argparse.ArgumentParser(description="Send an NDJSON bulk request to Elasticsearch.")
    parser.add_argument(
        "--file",
        required=True,
        help="NDJSON file with action and source lines",
    )
    parser.add_argument(
        "--index",
        default=None,
        help="Default index for actions without _index",
    )
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="Refresh the affected shards after the request",
    )
    _add_common_args(parser)

    parsed = parser.parse_args(args)

    return _build_config(parsed), Path(parsed.file), parsed.index, parsed.refresh


def load_bulk_operations(ndjson_file: Path) -> List[Dict[str, Any]]:
    """Read the action and source lines of an NDJSON bulk file, skipping blank lines."""
    operations: List[Dict[str, Any]] = []
    with ndjson_file.open("r", encoding="utf-8") as f:
        for raw_line in f:
            line = raw_line.strip()
            if not line:
                continue
            operations.append(json.loads(line))

    return operations


def main_bulk() -> None:
    config, ndjson_file, index, refresh = parse_bulk_args(sys.argv[1:])
    with run_logger(config=config):
        try:
            bulk_params: Dict[str, Any] = {"body": load_bulk_operations(ndjson_file)}
            if index is not None:
                bulk_params["index"] = index
            if refresh:
                bulk_params["refresh"] = True
            response = get_client(config).bulk(bulk_params)
        except Exception as e:
            log_error("failed to send bulk request", error=e, file=ndjson_file)
            sys.exit(1)

        items = response.get("items", [])
        failed = [item for item in items if any("error" in result for result in item.values())]
        log_info("bulk request completed", file=ndjson_file, count=len(items))
        if response.get("errors") or failed:
            log_error("some bulk actions failed", count=len(failed), errors=failed[:10])
            sys.exit(1)


# === Search ===


def parse_search_args(args: List[str]) -> Tuple[Config, str, Optional[Path]]:
    parser = argparse.ArgumentParser(description="Run a search request against Elasticsearch.")
    parser.add_argument("--index", required=True, help="Index or alias to search")
    parser.add_argument(
        "--query",
        default=None,
        help="JSON file with the search body (default: match_all)",
    )
    _add_common_args(parser)

    parsed = parser.parse_args(args)
    query_file = Path(parsed.query) if parsed.query else None

    return _build_config(parsed), parsed.index, query_file


def main_search() -> None:
    config, index, query_file = parse_search_args(sys.argv[1:])
    with run_logger(config=config):
        try:
            body = _load_json(query_file) if query_file else {"query": {"match_all": {}}}
            response = get_client(config).search({"index": index, "body": body})
            _print_json(response)
        except Exception as e:
            log_error("failed to search", error=e, index=index)
            sys.exit(1)
