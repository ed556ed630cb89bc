"""Run options and configuration files."""

from .schema import (
    KMedoidOptions,
    RunConfig,
    parse_options,
    load_config,
    validate_config,
    to_run_config,
)
