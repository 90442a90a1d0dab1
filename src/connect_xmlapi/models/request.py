"""Request descriptor handed to the transport."""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class ApiRequest:
    """One XML API call.

    Attributes:
        action: API action name, e.g. ``sco-info``
        query: Pre-encoded parameters (``name=value`` pairs joined with ``&``)
        requires_session: Whether the session parameter is sent in parameter mode

    Example:
        >>> ApiRequest("sco-info", "sco-id=1001").with_session("abc").query
        'session=abc&sco-id=1001'
    """

    action: str
    query: str = ""
    requires_session: bool = True

    def __post_init__(self) -> None:
        if not self.action:
            raise ValueError("action must not be empty")
        # Encoder output starts with '&'; the transport adds its own separator
        object.__setattr__(self, "query", self.query.lstrip("&"))

    def with_session(self, token: str) -> "ApiRequest":
        """Return a copy carrying ``session=<token>`` ahead of the other parameters."""
        query = f"session={token}&{self.query}" if self.query else f"session={token}"
        return replace(self, query=query)
