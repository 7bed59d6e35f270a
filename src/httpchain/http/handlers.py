"""Built-in response handlers."""

import logging
from typing import Optional

from ..models.message import HttpResponse

logger = logging.getLogger(__name__)


class EntityContentHandler:
    """Returns the entity content of any response, or None without an entity."""

    def on_response(self, response: HttpResponse) -> Optional[bytes]:
        if response.entity is None:
            return None
        return response.entity.content


class SuccessfulResponseHandler:
    """
    Returns the entity content of 2xx responses and rejects everything else.

    Example:
        body = client.execute_and_handle_response(request, SuccessfulResponseHandler())
    """

    def on_response(self, response: HttpResponse) -> Optional[bytes]:
        if not response.is_success:
            message = f"Unexpected HTTP {response.status_code} response"
            if response.entity is not None and response.entity.content:
                message += f": {response.entity.text[:200]}"
            logger.debug(message)
            raise RuntimeError(message)

        if response.entity is None:
            return None
        return response.entity.content
