"""
Loads the library config and its validation rules at import time, then sets up
logging from the loaded values
"""

# Standard
import os

# First Party
import aconfig
import alog

# Local
from ..exceptions import assert_config
from ..log_format import AppControllerJsonFormatter
from .validation import get_invalid_params

CONFIG_DIR = os.path.dirname(__file__)


def _load_yaml(file_name: str, allow_env: bool) -> aconfig.Config:
    return aconfig.Config.from_yaml(
        os.path.join(CONFIG_DIR, file_name),
        override_env_vars=allow_env,
    )


# Defaults may be overridden with env vars (e.g. NAMESPACE=foo), the
# validation rules may not
library_config = _load_yaml("config.yaml", allow_env=True)
validation_config = _load_yaml("config_validation.yaml", allow_env=False)

invalid_params = get_invalid_params(library_config, validation_config)
assert_config(
    not invalid_params,
    f"Invalid appcontroller configuration for keys: {invalid_params}",
)

alog.configure(
    default_level=library_config.log_level,
    filters=library_config.log_filters,
    formatter=(
        AppControllerJsonFormatter(namespace=library_config.namespace)
        if library_config.log_json
        else "pretty"
    ),
    thread_id=library_config.log_thread_id,
)
