"""Query string encoding for outbound Infino URLs."""

from typing import Optional, Sequence, Tuple
from urllib.parse import quote_plus


def encode_param(value: Optional[str]) -> str:
    """
    Form-encode a single parameter value as UTF-8.

    Spaces become ``+`` and reserved characters are percent-escaped.
    A missing value encodes as the empty string.
    """
    return quote_plus(value or "", safe="*", encoding="utf-8").replace("~", "%7E")


def build_query_string(pairs: Sequence[Tuple[str, Optional[str]]]) -> str:
    """
    Build ``k1=v1&k2=v2`` keeping the caller's key order.

    Args:
        pairs: Ordered key/value pairs

    Returns:
        Encoded query string without a leading ``?``
    """
    return "&".join(f"{key}={encode_param(value)}" for key, value in pairs)
