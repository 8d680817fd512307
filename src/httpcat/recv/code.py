"""Status code assertions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Union

from ..http import status as codes
from ..http.status import StatusCode
from ..pipeline.base import Arrow

if TYPE_CHECKING:
    from ..http.context import Context


def _eval(ctx: "Context", required: list[int]) -> Optional[Exception]:
    err = ctx.unsafe()
    if err is not None:
        return err

    actual = ctx.response.status_code
    if actual in required:
        return None
    return StatusCode(actual, required=required[0])


def code(*expect: Union[int, StatusCode]) -> Arrow:
    """
    Require one of the given status codes.

    On mismatch the StatusCode of the response is returned, annotated with
    the first acceptable code.

    Raises:
        ValueError: If no code is given
    """
    if not expect:
        raise ValueError("code() requires at least one status code")
    required = [int(c) for c in expect]

    def arrow(ctx: "Context") -> Optional[Exception]:
        return _eval(ctx, required)

    return arrow


class Status:
    """
    Named status assertions, each one is an arrow.

        GET(
            send.uri("https://example.com"),
            recv.status.ok,
        )
    """

    def _eval(self, ctx: "Context", expect: StatusCode) -> Optional[Exception]:
        return _eval(ctx, [expect.value])

    def is_(self, *expect: Union[int, StatusCode]) -> Arrow:
        return code(*expect)

    # 1xx
    def continue_(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.CONTINUE)

    def switching_protocols(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.SWITCHING_PROTOCOLS)

    def processing(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.PROCESSING)

    def early_hints(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.EARLY_HINTS)

    # 2xx
    def ok(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.OK)

    def created(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.CREATED)

    def accepted(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.ACCEPTED)

    def non_authoritative_info(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.NON_AUTHORITATIVE_INFO)

    def no_content(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.NO_CONTENT)

    def reset_content(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.RESET_CONTENT)

    def partial_content(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.PARTIAL_CONTENT)

    # 3xx
    def multiple_choices(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.MULTIPLE_CHOICES)

    def moved_permanently(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.MOVED_PERMANENTLY)

    def found(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.FOUND)

    def see_other(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.SEE_OTHER)

    def not_modified(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.NOT_MODIFIED)

    def use_proxy(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.USE_PROXY)

    def temporary_redirect(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.TEMPORARY_REDIRECT)

    def permanent_redirect(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.PERMANENT_REDIRECT)

    # 4xx
    def bad_request(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.BAD_REQUEST)

    def unauthorized(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.UNAUTHORIZED)

    def payment_required(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.PAYMENT_REQUIRED)

    def forbidden(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.FORBIDDEN)

    def not_found(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.NOT_FOUND)

    def method_not_allowed(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.METHOD_NOT_ALLOWED)

    def not_acceptable(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.NOT_ACCEPTABLE)

    def proxy_auth_required(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.PROXY_AUTH_REQUIRED)

    def request_timeout(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.REQUEST_TIMEOUT)

    def conflict(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.CONFLICT)

    def gone(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.GONE)

    def length_required(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.LENGTH_REQUIRED)

    def precondition_failed(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.PRECONDITION_FAILED)

    def request_entity_too_large(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.REQUEST_ENTITY_TOO_LARGE)

    def request_uri_too_long(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.REQUEST_URI_TOO_LONG)

    def unsupported_media_type(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.UNSUPPORTED_MEDIA_TYPE)

    def teapot(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.TEAPOT)

    def unprocessable_entity(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.UNPROCESSABLE_ENTITY)

    def precondition_required(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.PRECONDITION_REQUIRED)

    def too_many_requests(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.TOO_MANY_REQUESTS)

    # 5xx
    def internal_server_error(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.INTERNAL_SERVER_ERROR)

    def not_implemented(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.NOT_IMPLEMENTED)

    def bad_gateway(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.BAD_GATEWAY)

    def service_unavailable(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.SERVICE_UNAVAILABLE)

    def gateway_timeout(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.GATEWAY_TIMEOUT)

    def http_version_not_supported(self, ctx: "Context") -> Optional[Exception]:
        return self._eval(ctx, codes.HTTP_VERSION_NOT_SUPPORTED)


status = Status()
