"""HTTP helper for the Maven Central search API.

Network failures end the CLI run with CONNECTION_ERROR; answers that are not
usable JSON come back as None so the caller can report "no match".
"""
from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Optional

import requests

from constants import Constants, ExitCodes
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


def get_json(url: str, *, context: str, **kwargs: Any) -> Optional[Dict[str, Any]]:
    """GET ``url`` and decode a JSON object body.

    Args:
        url: Target URL.
        context: Short label used in log messages (e.g. "maven").
        **kwargs: Passed through to ``requests.get``.

    Returns:
        The decoded object, or None for a non-200 status or a body that is
        not a JSON object.
    """
    safe_target = safe_url(url)
    headers = {"Accept": "application/json"}
    headers.update(kwargs.pop("headers", None) or {})

    with Timer() as t:
        try:
            res = requests.get(url, timeout=Constants.REQUEST_TIMEOUT, headers=headers, **kwargs)
        except requests.Timeout:
            logger.error(
                "%s request timed out after %s seconds",
                context,
                Constants.REQUEST_TIMEOUT,
            )
            sys.exit(ExitCodes.CONNECTION_ERROR.value)
        except requests.RequestException as exc:  # includes ConnectionError
            logger.error("%s connection error: %s", context, exc)
            sys.exit(ExitCodes.CONNECTION_ERROR.value)

    if is_debug_enabled(logger):
        logger.debug("HTTP response", extra=extra_context(
            event="http_response", component="http_client", action="GET",
            status_code=res.status_code, duration_ms=t.duration_ms(),
            target=safe_target, context=context
        ))

    if res.status_code != 200:
        logger.warning("%s returned HTTP %s for %s", context, res.status_code, safe_target)
        return None
    try:
        data = res.json()
    except ValueError as exc:
        logger.error("%s returned a non-JSON body: %s", context, exc)
        return None
    if not isinstance(data, dict):
        logger.error("%s returned unexpected JSON: %s", context, type(data).__name__)
        return None
    return data
