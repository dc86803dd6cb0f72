from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from cex.kraken.api.errors import ConfigurationError

API_HOST_ENV = "API_HOST"
PUBLIC_KEY_ENV = "PUBLIC_KEY"
PRIVATE_KEY_ENV = "PRIVATE_KEY"


@dataclass(frozen=True)
class KrakenConfig:
    """Connection configuration for the scenario run.

    Built once at process start and handed to the client. `private_key` is the
    base64 API secret; it is kept out of `repr` and must never be logged.
    """

    api_host: str
    public_key: Optional[str] = None
    private_key: Optional[str] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "api_host", self.api_host.rstrip("/"))

    @property
    def has_credentials(self) -> bool:
        return bool(self.public_key and self.private_key)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        require_credentials: bool = True,
    ) -> "KrakenConfig":
        """Read API_HOST, PUBLIC_KEY and PRIVATE_KEY.

        All missing variables are reported in a single ConfigurationError.
        With `require_credentials=False` only API_HOST is mandatory (public
        endpoints).
        """
        env = os.environ if environ is None else environ

        def _get(name: str) -> Optional[str]:
            value = env.get(name)
            if value is None or not value.strip():
                return None
            return value.strip()

        api_host = _get(API_HOST_ENV)
        public_key = _get(PUBLIC_KEY_ENV)
        private_key = _get(PRIVATE_KEY_ENV)

        required = [(API_HOST_ENV, api_host)]
        if require_credentials:
            required += [(PUBLIC_KEY_ENV, public_key), (PRIVATE_KEY_ENV, private_key)]
        missing = [name for name, value in required if value is None]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variable(s): {', '.join(missing)}",
                missing=missing,
            )

        return cls(api_host=api_host, public_key=public_key, private_key=private_key)
