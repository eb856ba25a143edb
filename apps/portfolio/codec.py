"""
Tech-stack codec.

The tech stack is stored as a JSON-encoded string in a TEXT column and
handled everywhere else as an ordered list of strings.
"""
import json
import logging
from typing import Iterable, Optional, Union

logger = logging.getLogger(__name__)


def encode_tech_stack(items: Optional[Iterable[str]]) -> str:
    """Serialize a tech stack for storage. None encodes as an empty list."""
    return json.dumps([str(item) for item in (items or [])])


def decode_tech_stack(raw: Union[str, list, None]) -> list[str]:
    """
    Deserialize a stored tech stack.

    Already-decoded lists pass through. None, "" and anything that is not
    a JSON array decode to [] so a bad row never breaks a read.
    """
    if raw is None or raw == "":
        return []
    if isinstance(raw, list):
        return [str(item) for item in raw]

    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning(f"Malformed tech stack value, using empty list: {raw!r}")
        return []

    if not isinstance(value, list):
        logger.warning(f"Tech stack is not a JSON array, using empty list: {raw!r}")
        return []

    return [str(item) for item in value]
