"""
Typed HTTP status codes.

A StatusCode is both a value and an error. Status assertions return it on
mismatch, so callers can branch on the received status the same way they
branch on any other failure:

    err = stack.io(GET(...), recv.status.ok)
    if err == status.NOT_FOUND:
        ...
    elif isinstance(err, StatusCode):
        ...  # any other HTTP status
    elif err is not None:
        ...  # transport or decode failure
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Optional, Union

from ..errors import NoMatch

# Static lookup table code -> reason phrase for the IANA registry
STATUS_TEXT: dict[int, str] = {s.value: s.phrase for s in HTTPStatus}


def status_text(code: int) -> str:
    """Reason phrase for a status code, empty for unregistered codes."""
    return STATUS_TEXT.get(code, "")


class StatusCode(NoMatch):
    """
    HTTP status code, optionally annotated with the code that was required.

    Equality and hashing consider only the actual code, so
    ``StatusCode(404, required=200) == NOT_FOUND`` holds.
    """

    def __init__(self, value: int, required: Optional[Union[int, "StatusCode"]] = None) -> None:
        value = int(value)
        required_value = int(required) if required is not None else 0
        diff = ""
        if required_value:
            diff = f"+ Status Code: {value}\n- Status Code: {required_value}"
        super().__init__(
            id="http.Code",
            diff=diff,
            protocol="StatusCode",
            expect=required_value or None,
            actual=value,
        )
        self.value = value
        self.required = required_value
        self.args = (value, required_value or None)

    def is_(self, other: object) -> bool:
        """Compare the actual code only, ignoring any required annotation."""
        if isinstance(other, StatusCode):
            return self.value == other.value
        if isinstance(other, int) and not isinstance(other, bool):
            return self.value == other
        return False

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (StatusCode, int)) and not isinstance(other, bool):
            return self.is_(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        if self.required:
            return f"StatusCode({self.value}, required={self.required})"
        return f"StatusCode({self.value})"

    def __str__(self) -> str:
        if self.required:
            return (
                f"HTTP Status `{self.value} {status_text(self.value)}`, "
                f"required `{self.required} {status_text(self.required)}`."
            )
        return f"HTTP {self.value} {status_text(self.value)}"

    @property
    def text(self) -> str:
        return status_text(self.value)


# 1xx
CONTINUE = StatusCode(100)
SWITCHING_PROTOCOLS = StatusCode(101)
PROCESSING = StatusCode(102)
EARLY_HINTS = StatusCode(103)

# 2xx
OK = StatusCode(200)
CREATED = StatusCode(201)
ACCEPTED = StatusCode(202)
NON_AUTHORITATIVE_INFO = StatusCode(203)
NO_CONTENT = StatusCode(204)
RESET_CONTENT = StatusCode(205)
PARTIAL_CONTENT = StatusCode(206)
MULTI_STATUS = StatusCode(207)
ALREADY_REPORTED = StatusCode(208)
IM_USED = StatusCode(226)

# 3xx
MULTIPLE_CHOICES = StatusCode(300)
MOVED_PERMANENTLY = StatusCode(301)
FOUND = StatusCode(302)
SEE_OTHER = StatusCode(303)
NOT_MODIFIED = StatusCode(304)
USE_PROXY = StatusCode(305)
TEMPORARY_REDIRECT = StatusCode(307)
PERMANENT_REDIRECT = StatusCode(308)

# 4xx
BAD_REQUEST = StatusCode(400)
UNAUTHORIZED = StatusCode(401)
PAYMENT_REQUIRED = StatusCode(402)
FORBIDDEN = StatusCode(403)
NOT_FOUND = StatusCode(404)
METHOD_NOT_ALLOWED = StatusCode(405)
NOT_ACCEPTABLE = StatusCode(406)
PROXY_AUTH_REQUIRED = StatusCode(407)
REQUEST_TIMEOUT = StatusCode(408)
CONFLICT = StatusCode(409)
GONE = StatusCode(410)
LENGTH_REQUIRED = StatusCode(411)
PRECONDITION_FAILED = StatusCode(412)
REQUEST_ENTITY_TOO_LARGE = StatusCode(413)
REQUEST_URI_TOO_LONG = StatusCode(414)
UNSUPPORTED_MEDIA_TYPE = StatusCode(415)
REQUESTED_RANGE_NOT_SATISFIABLE = StatusCode(416)
EXPECTATION_FAILED = StatusCode(417)
TEAPOT = StatusCode(418)
MISDIRECTED_REQUEST = StatusCode(421)
UNPROCESSABLE_ENTITY = StatusCode(422)
LOCKED = StatusCode(423)
FAILED_DEPENDENCY = StatusCode(424)
TOO_EARLY = StatusCode(425)
UPGRADE_REQUIRED = StatusCode(426)
PRECONDITION_REQUIRED = StatusCode(428)
TOO_MANY_REQUESTS = StatusCode(429)
REQUEST_HEADER_FIELDS_TOO_LARGE = StatusCode(431)
UNAVAILABLE_FOR_LEGAL_REASONS = StatusCode(451)

# 5xx
INTERNAL_SERVER_ERROR = StatusCode(500)
NOT_IMPLEMENTED = StatusCode(501)
BAD_GATEWAY = StatusCode(502)
SERVICE_UNAVAILABLE = StatusCode(503)
GATEWAY_TIMEOUT = StatusCode(504)
HTTP_VERSION_NOT_SUPPORTED = StatusCode(505)
VARIANT_ALSO_NEGOTIATES = StatusCode(506)
INSUFFICIENT_STORAGE = StatusCode(507)
LOOP_DETECTED = StatusCode(508)
NOT_EXTENDED = StatusCode(510)
NETWORK_AUTHENTICATION_REQUIRED = StatusCode(511)
