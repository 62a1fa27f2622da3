# Module Metadata
__author__ = "Koushik Sinha"
__version__ = "1.1.0"
__modified_by__ = "Koushik Sinha"

from .logging_utils import configure_logger
from .get_ssm import (
    get_values_from_ssm,
    get_environment_prefix,
    get_config,
    get_setting,
)
from .get_secret import get_secret
from .lambda_response import lambda_response
from .error_utils import error_response
from .event_utils import is_proxy_event, parse_event_body

__all__ = [
    "get_values_from_ssm",
    "get_environment_prefix",
    "get_config",
    "get_setting",
    "get_secret",
    "configure_logger",
    "lambda_response",
    "error_response",
    "parse_event_body",
    "is_proxy_event",
]
