"""Elasticsearch client settings.

This module centralizes the client-side defaults with documentation on their
purpose. Values can be overridden through environment variables (see config.py)
or command line arguments.
"""

from typing import Any, Dict, List

# === Connection Settings ===

DEFAULT_HOSTS: List[str] = ["http://localhost:9200"]

CONNECTION_SETTINGS: Dict[str, Any] = {
    # Verify TLS certificates when connecting over https.
    "verify_certs": True,

    # Maximum retries performed by the transport on connection errors.
    # Retries are handled inside elasticsearch-py, never by the facade.
    "max_retries": 3,
}


# === Timeout Settings ===
# Merged into every request sent through the facade.

TIMEOUT_SETTINGS: Dict[str, float] = {
    # Total time budget in seconds for a single request.
    # Forwarded to elasticsearch-py as the per-request "request_timeout".
    "timeout": 30.0,

    # Time budget in seconds to establish the connection to a node.
    "connection_timeout": 5.0,
}


# Reserved request parameter key carrying the timeout settings.
CLIENT_PARAMS_KEY = "client"


def get_connection_settings() -> Dict[str, Any]:
    """Get connection settings.

    Returns a copy to prevent accidental modification.
    """
    return CONNECTION_SETTINGS.copy()


def get_timeout_settings() -> Dict[str, float]:
    """Get timeout settings.

    Returns a copy to prevent accidental modification.
    """
    return TIMEOUT_SETTINGS.copy()
