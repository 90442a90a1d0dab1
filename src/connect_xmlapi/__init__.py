"""Client for the Adobe Connect style XML-over-HTTP administrative API."""

__version__ = "0.1.0"

from connect_xmlapi.api.client import ConnectXmlAPI  # noqa: E402
from connect_xmlapi.models.enums import StatusCode, SubCode  # noqa: E402
from connect_xmlapi.models.status import ApiStatus, ResultStatus  # noqa: E402

__all__ = [
    "__version__",
    "ConnectXmlAPI",
    "ApiStatus",
    "ResultStatus",
    "StatusCode",
    "SubCode",
]
