"""Process-wide configuration, built once from the environment at startup."""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from .errors import ConfigurationError

DEFAULT_BASE_URL = "https://bika.ai/api/openapi/bika"

TOKEN_ENV = "BIKA_API_TOKEN"
BASE_URL_ENV = "BIKA_API_BASE_URL"
SPACE_ID_ENV = "BIKA_SPACE_ID"


class BikaConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_token: str
    base_url: str = DEFAULT_BASE_URL
    default_space_id: Optional[str] = None

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BikaConfig":
        """
        Build the config from environment variables.

        Empty values are treated as unset. Raises ConfigurationError when the
        API token is missing.
        """
        env = os.environ if environ is None else environ
        token = (env.get(TOKEN_ENV) or "").strip()
        if not token:
            raise ConfigurationError(
                f"{TOKEN_ENV} environment variable is required. "
                f"Set {TOKEN_ENV} in your .env file or environment."
            )
        return cls(
            api_token=token,
            base_url=(env.get(BASE_URL_ENV) or "").strip() or DEFAULT_BASE_URL,
            default_space_id=(env.get(SPACE_ID_ENV) or "").strip() or None,
        )
