"""
Configuration for SpecTree suites and runs.

`SuiteConfig` controls how much detail errors carry and how examples are
scheduled. Values can be given directly or read from `SPECTREE_*`
environment variables.
"""

import os
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

from spectree.exceptions import ErrorLevel

ENV_PREFIX = "SPECTREE_"


class SuiteConfig(BaseModel):
    """Settings shared by a suite's declaration and run phases.

    Params:
        error_level: Detail level for error messages (USER or DEVELOPER)
        max_workers: Number of worker threads running examples; 1 runs them
            sequentially in declaration order
        fail_fast: Stop running further examples after the first failure or
            error (sequential runs only)
    """

    model_config = ConfigDict(frozen=True)

    error_level: ErrorLevel = ErrorLevel.USER
    max_workers: int = Field(default=1, ge=1)
    fail_fast: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SuiteConfig":
        """
        Build a configuration from environment variables.

        Reads SPECTREE_ERROR_LEVEL, SPECTREE_MAX_WORKERS and SPECTREE_FAIL_FAST;
        unset variables keep their defaults.

        Params:
            environ: Mapping to read from, defaults to `os.environ`

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw.strip():
                values[name] = raw.strip().lower() if name == "error_level" else raw.strip()
        return cls.model_validate(values)
