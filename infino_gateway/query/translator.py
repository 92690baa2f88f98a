"""
Command translation.

Turns a ParsedRequest into the OutboundCommand understood by the Infino
server. Translation is driven by a decision table keyed by
(method, action, index type); ``None`` in a key matches any value.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Dict, NamedTuple, Optional, Tuple

from infino_gateway.config import DEFAULT_INFINO_ENDPOINT, DEFAULT_SEARCH_WINDOW_DAYS
from infino_gateway.core.errors import (
    InvalidMethodError,
    InvalidRequestPathError,
    UnsupportedIndexTypeError,
)
from infino_gateway.core.models import (
    IndexType,
    OutboundCommand,
    ParsedRequest,
    RestMethod,
    TimeWindow,
)
from infino_gateway.query.encoder import build_query_string
from infino_gateway.query.time_range import resolve_time_window

logger = logging.getLogger(__name__)


class Action(str, Enum):
    """Read actions recognised at the end of a GET path."""

    PING = "_ping"
    SEARCH = "_search"
    SUMMARIZE = "_summarize"


class CommandTemplate(NamedTuple):
    path: str  # formatted with the index name
    query_keys: Tuple[str, ...] = ()


CommandKey = Tuple[RestMethod, Optional[Action], Optional[IndexType]]

COMMAND_TABLE: Dict[CommandKey, CommandTemplate] = {
    (RestMethod.GET, Action.PING, None): CommandTemplate("/ping"),
    (RestMethod.GET, Action.SEARCH, IndexType.LOGS): CommandTemplate(
        "/{index}/search_logs", ("text", "start_time", "end_time")
    ),
    (RestMethod.GET, Action.SEARCH, IndexType.METRICS): CommandTemplate(
        "/{index}/search_metrics", ("name", "value", "start_time", "end_time")
    ),
    (RestMethod.GET, Action.SUMMARIZE, IndexType.LOGS): CommandTemplate(
        "/{index}/summarize", ("text", "start_time", "end_time")
    ),
    (RestMethod.POST, None, IndexType.LOGS): CommandTemplate("/{index}/append_log"),
    (RestMethod.POST, None, IndexType.METRICS): CommandTemplate("/{index}/append_metric"),
    (RestMethod.PUT, None, None): CommandTemplate("/:{index}"),
    (RestMethod.DELETE, None, None): CommandTemplate("/:{index}"),
}

_TIME_KEYS = {"start_time", "end_time"}


def classify_action(suffix: Optional[str]) -> Optional[Action]:
    """Return the read action a path suffix ends with, if any."""
    if suffix is None:
        return None
    for action in Action:
        if suffix.endswith(action.value):
            return action
    return None


class CommandTranslator:
    """
    Translates parsed requests into Infino commands.

    Pure apart from reading the clock when a search window has to be
    defaulted; safe to share between threads.
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_INFINO_ENDPOINT,
        default_window_days: int = DEFAULT_SEARCH_WINDOW_DAYS,
    ):
        """
        Initialize command translator.

        Args:
            endpoint: Base URL of the Infino server
            default_window_days: Default search window length in days
        """
        self.endpoint = endpoint
        self.default_window_days = default_window_days

    def resolve_key(self, request: ParsedRequest) -> CommandKey:
        """
        Find the decision table entry for a request.

        HEAD probes the resource the caller names: the GET branch when a
        path is given, the index lifecycle branch otherwise.
        """
        method = request.method
        error = f"Error constructing Infino URL for: {self.endpoint}/{request.index_name}/{request.path_suffix}"

        if method is None:
            raise InvalidMethodError("Request method must be specified")

        if method is RestMethod.HEAD:
            method = RestMethod.GET if request.path_suffix is not None else RestMethod.PUT

        if method is RestMethod.GET:
            if request.path_suffix is None:
                raise InvalidRequestPathError(error)
            action = classify_action(request.path_suffix)
            if action is None:
                raise InvalidRequestPathError(error)
            for key in ((method, action, request.index_type), (method, action, None)):
                if key in COMMAND_TABLE:
                    return key
            raise UnsupportedIndexTypeError(
                f"{error}: {action.value} is not supported for {request.index_type.value} indexes"
            )

        if method is RestMethod.POST:
            key = (method, None, request.index_type)
            if key in COMMAND_TABLE:
                return key
            raise UnsupportedIndexTypeError(
                f"{error}: appending requires a logs or metrics index"
            )

        if method in (RestMethod.PUT, RestMethod.DELETE):
            return (method, None, None)

        raise InvalidMethodError(f"Unsupported request method: {method}")

    def translate(
        self,
        request: ParsedRequest,
        window: Optional[TimeWindow] = None,
        now: Optional[datetime] = None,
    ) -> OutboundCommand:
        """
        Build the outbound command for a request.

        Args:
            request: Parsed inbound call
            window: Search window to use. Resolved from the request
                    parameters when omitted and the command needs one.
            now: Instant used for default time boundaries

        Returns:
            OutboundCommand with the method of the inbound call

        Raises:
            GatewayError: If no command exists for the request
        """
        key = self.resolve_key(request)
        template = COMMAND_TABLE[key]

        url = self.endpoint + template.path.format(index=request.index_name)

        if template.query_keys:
            if window is None and _TIME_KEYS.intersection(template.query_keys):
                window = resolve_time_window(
                    request.params, now=now, window_days=self.default_window_days
                )
            values = {
                "start_time": window.start_time if window else None,
                "end_time": window.end_time if window else None,
            }
            pairs = [
                (name, values[name] if name in values else request.params.get(name))
                for name in template.query_keys
            ]
            url = f"{url}?{build_query_string(pairs)}"

        logger.info("Serialized REST request for Infino to: %s %s", request.method.value, url)
        return OutboundCommand(url=url, method=request.method)
