"""Runtime settings for the risk upload proxy.

Every value can be overridden through an environment variable so a
deployment can point at a different scoring backend without a rebuild.
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel


class ProxySettings(BaseModel):
    """Upstream endpoint and response-handling settings."""
    upstream_base_url: str = "http://52.172.102.172:8000"
    upstream_path: str = "/risk/batch-excel"
    upstream_timeout_seconds: float = 60.0
    preview_length: int = 200  # Characters of an unexpected body echoed back
    log_level: str = "INFO"


# Environment variable -> settings field
ENV_VARS = {
    "RISK_UPSTREAM_BASE_URL": "upstream_base_url",
    "RISK_UPSTREAM_PATH": "upstream_path",
    "RISK_UPSTREAM_TIMEOUT": "upstream_timeout_seconds",
    "RISK_PREVIEW_LENGTH": "preview_length",
    "RISK_LOG_LEVEL": "log_level",
}


def load_settings(environ: Optional[Mapping[str, str]] = None) -> ProxySettings:
    """Build settings from the environment, falling back to the defaults.

    Values are validated (and coerced) by pydantic, so a malformed number
    fails loudly at startup instead of on the first request.
    """
    if environ is None:
        environ = os.environ

    overrides = {
        field: environ[var]
        for var, field in ENV_VARS.items()
        if environ.get(var)
    }
    return ProxySettings(**overrides)
