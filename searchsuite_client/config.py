import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field, model_validator

from searchsuite_client.es.settings import (DEFAULT_HOSTS,
                                            get_connection_settings,
                                            get_timeout_settings)

RESULT_DIR = Path.cwd().joinpath("searchsuite_client_results")  # Path to dump logs
DATE_FORMAT = "%Y%m%d"
LOCAL_TZ = ZoneInfo("UTC")
TODAY = datetime.now(LOCAL_TZ).date()
TODAY_STR = TODAY.strftime(DATE_FORMAT)

LOG_DIR_NAME = "logs"

_connection = get_connection_settings()
_timeouts = get_timeout_settings()


class Config(BaseModel):
    """Client configuration. Immutable once built."""
    model_config = ConfigDict(frozen=True)

    debug: bool = False
    result_dir: Path = RESULT_DIR
    es_hosts: List[str] = Field(default_factory=lambda: list(DEFAULT_HOSTS))
    es_user: Optional[str] = None
    es_password: Optional[str] = None
    es_api_key: Optional[str] = None
    verify_certs: bool = _connection["verify_certs"]
    ca_certs: Optional[Path] = None
    max_retries: int = Field(default=_connection["max_retries"], ge=0)
    timeout: float = Field(default=_timeouts["timeout"], gt=0)  # seconds
    connection_timeout: float = Field(default=_timeouts["connection_timeout"], gt=0)  # seconds

    @model_validator(mode="after")
    def check_credentials(self) -> "Config":
        if self.es_password is not None and self.es_user is None:
            raise ValueError("es_password is set without es_user")
        return self

    def get_options(self) -> Dict[str, Any]:
        """Options handed to the engine client builder."""
        options: Dict[str, Any] = {
            "hosts": list(self.es_hosts),
            "verify_certs": self.verify_certs,
            "max_retries": self.max_retries,
        }
        if self.es_user is not None:
            options["basic_auth"] = (self.es_user, self.es_password or "")
        if self.es_api_key is not None:
            options["api_key"] = self.es_api_key
        if self.ca_certs is not None:
            options["ca_certs"] = str(self.ca_certs)

        return options


default_config = Config()
ENV_PREFIX = "SEARCHSUITE_CLIENT"


def _split_hosts(value: str) -> List[str]:
    return [host.strip() for host in value.split(",") if host.strip()]


def get_config() -> Config:
    hosts = os.environ.get(f"{ENV_PREFIX}_ES_HOSTS")
    ca_certs = os.environ.get(f"{ENV_PREFIX}_CA_CERTS")

    return Config(
        debug=os.environ.get(f"{ENV_PREFIX}_DEBUG", default_config.debug),
        result_dir=Path(os.environ.get(f"{ENV_PREFIX}_RESULT_DIR", default_config.result_dir)),
        es_hosts=_split_hosts(hosts) if hosts else default_config.es_hosts,
        es_user=os.environ.get(f"{ENV_PREFIX}_ES_USER", default_config.es_user),
        es_password=os.environ.get(f"{ENV_PREFIX}_ES_PASSWORD", default_config.es_password),
        es_api_key=os.environ.get(f"{ENV_PREFIX}_ES_API_KEY", default_config.es_api_key),
        verify_certs=os.environ.get(f"{ENV_PREFIX}_VERIFY_CERTS", default_config.verify_certs),
        ca_certs=Path(ca_certs) if ca_certs else default_config.ca_certs,
        max_retries=os.environ.get(f"{ENV_PREFIX}_MAX_RETRIES", default_config.max_retries),
        timeout=os.environ.get(f"{ENV_PREFIX}_TIMEOUT", default_config.timeout),
        connection_timeout=os.environ.get(f"{ENV_PREFIX}_CONNECTION_TIMEOUT", default_config.connection_timeout),
    )
