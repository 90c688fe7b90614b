"""Small helpers shared by the services."""

import uuid
from typing import Union

from enotebook.exceptions import InvalidIdError


def parse_id(raw_id: Union[str, uuid.UUID], resource: str) -> uuid.UUID:
    """
    Convert a path identifier into a UUID.

    Raises:
        InvalidIdError: The value is not a well-formed UUID.
    """
    if isinstance(raw_id, uuid.UUID):
        return raw_id
    try:
        return uuid.UUID(str(raw_id))
    except ValueError:
        raise InvalidIdError(resource=resource, raw_id=str(raw_id))
