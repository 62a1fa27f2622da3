"""Shared helpers for retrieving SSM parameters and environment config."""

import logging
import os
from typing import Optional
import boto3

__author__ = "Koushik Sinha"
__version__ = "1.1.0"
__modified_by__ = "Koushik Sinha"

logger = logging.getLogger(__name__)
_ssm_client = None

# Simple in-memory cache so functions within a single Lambda container
# don't repeatedly hit SSM
_SSM_CACHE: dict[str, str] = {}


def _client():
    global _ssm_client
    if _ssm_client is None:
        _ssm_client = boto3.client("ssm")
    return _ssm_client


def get_values_from_ssm(name: str, decrypt: bool = False) -> Optional[str]:
    """Retrieve a parameter value from SSM with optional decryption."""
    if name in _SSM_CACHE:
        return _SSM_CACHE[name]
    client = _client()
    try:
        resp = client.get_parameter(Name=name, WithDecryption=decrypt)
        value = resp["Parameter"]["Value"]
        _SSM_CACHE[name] = value
        logger.info("Loaded parameter %s", name)
        return value
    except client.exceptions.ParameterNotFound:
        logger.debug("Parameter %s not found", name)
        return None
    except Exception as exc:
        logger.error("Error retrieving parameter %s: %s", name, exc)
        raise


def get_environment_prefix() -> Optional[str]:
    """Return the SSM prefix for the current environment, if configured."""
    prefix = os.environ.get("SSM_PARAMETER_PREFIX")
    if not prefix:
        return None
    return prefix.rstrip("/")


def get_config(name: str, decrypt: bool = False) -> Optional[str]:
    """Return configuration ``name`` from SSM.

    The parameter is read from ``{SSM_PARAMETER_PREFIX}/{name}``. When no
    prefix is configured, SSM is not consulted and ``None`` is returned.
    """

    prefix = get_environment_prefix()
    if prefix is None:
        return None
    return get_values_from_ssm(f"{prefix}/{name}", decrypt)


def get_setting(name: str, default: Optional[str] = None, decrypt: bool = False) -> Optional[str]:
    """Return ``name`` from the environment, then SSM, then ``default``."""

    value = os.environ.get(name)
    if value:
        return value
    return get_config(name, decrypt) or default
