"""Status envelope returned by every API call.

The envelope is always produced: transport and parse failures leave ``code``
at NOT_SET and carry the exception in ``error``; server-reported failures
carry the server's code and sub-code with no exception.
"""

from dataclasses import dataclass, fields
from typing import Generic, Optional, TypeVar

from lxml import etree

from connect_xmlapi.models.enums import StatusCode, SubCode
from connect_xmlapi.utils.exceptions import ValidationError

T = TypeVar("T")


@dataclass
class ApiStatus:
    """Outcome of one API call.

    Attributes:
        code: Top-level status code reported by the server
        sub_code: Detail code from the ``invalid`` element
        invalid_field: Name of the offending field from the ``invalid`` element
        exception_text: Text of the ``exception`` element, if any
        session_info: Session token in effect (parameter mode only)
        error: Client-side failure (transport, parse, validation, decode)
        secondary_error: Failure of a compensating action
        result_document: Elements that followed ``status``, under ``<resultroot>``

    Example:
        >>> status = ApiStatus(code=StatusCode.OK)
        >>> status.is_ok
        True
    """

    code: StatusCode = StatusCode.NOT_SET
    sub_code: SubCode = SubCode.NOT_SET
    invalid_field: Optional[str] = None
    exception_text: Optional[str] = None
    session_info: Optional[str] = None
    error: Optional[Exception] = None
    secondary_error: Optional[Exception] = None
    result_document: Optional[etree._Element] = None

    @property
    def is_ok(self) -> bool:
        """Check if the server reported ``ok`` and no client-side error occurred."""
        return self.code == StatusCode.OK and self.error is None

    @property
    def has_payload(self) -> bool:
        return self.result_document is not None and len(self.result_document) > 0

    @classmethod
    def from_error(cls, error: Exception) -> "ApiStatus":
        """Build an envelope for a transport or parse failure."""
        return cls(error=error)

    @classmethod
    def missing_argument(cls, field_name: str) -> "ApiStatus":
        """Build the envelope returned when a required argument is absent.

        No request is sent in this case.
        """
        return cls(
            code=StatusCode.INVALID,
            sub_code=SubCode.MISSING,
            invalid_field=field_name,
            error=ValidationError(f"{field_name} is required", field=field_name),
        )

    def with_result(self, result: Optional[T]) -> "ResultStatus[T]":
        """Copy this envelope into a typed result."""
        values = {f.name: getattr(self, f.name) for f in fields(ApiStatus)}
        return ResultStatus(result=result, **values)

    def summary(self) -> str:
        """One-line description suitable for logs and CLI output."""
        parts = [f"code={self.code.wire_name}"]
        if self.sub_code != SubCode.NOT_SET:
            parts.append(f"subcode={self.sub_code.wire_name}")
        if self.invalid_field:
            parts.append(f"field={self.invalid_field}")
        if self.exception_text:
            parts.append(f"exception={self.exception_text}")
        if self.error is not None:
            parts.append(f"error={type(self.error).__name__}: {self.error}")
        if self.secondary_error is not None:
            parts.append(f"secondary_error={self.secondary_error}")
        return " ".join(parts)


@dataclass
class ResultStatus(ApiStatus, Generic[T]):
    """Status envelope plus a typed result."""

    result: Optional[T] = None
