"""Decoding of response bodies into JSON values."""

import json
from typing import Any, Optional

from ghfetch.domain.exceptions import ResponseDecodeError
from ghfetch.domain.models.response import CachedResponse

def decode(response: Optional[CachedResponse]) -> Any:
    """Decodes a response body as JSON.

    A missing response or an empty body decodes to an empty list.

    Raises:
        ResponseDecodeError: If the body is not valid JSON.
    """
    if response is None or not response.body:
        return []
    try:
        return json.loads(response.body)
    except (ValueError, UnicodeDecodeError) as e:
        raise ResponseDecodeError(response.base_uri, str(e)) from e
