"""
Stores RequestContext.

A context is created for every request and thrown away once the handler returns. Handlers read the request through it
and respond through it, so they never have to remember that headers go before the status line, and the status line
goes before the body.
"""
import json
import logging

import typing
from werkzeug.wrappers import Request

from beeweb.request import RequestSource, WerkzeugRequestSource
from beeweb.response import ResponseSink
from beeweb.util import encode_json

logger = logging.getLogger("Bee.context")

#: Shorthand for building JSON objects, e.g ``ctx.respond_json(200, H(name="bee"))``.
H = dict


class RequestContext(object):
    """
    The context passed to the handler of every request.

    .. code-block:: python

        def hello(ctx: RequestContext):
            ctx.respond_text(200, "hello %s, you're at %s", ctx.query("name"), ctx.path)

    :ivar request: The :class:`~.RequestSource` this context reads from.
    :ivar sink: The :class:`~.ResponseSink` this context writes to.
    :ivar status_code: The last status code passed to :meth:`status`, or 0.
    :ivar app: The :class:`~.Bee` handling this request, if any.
    :ivar json_encoder: The encoder class used by :meth:`respond_json`.
    """

    def __init__(self, request: typing.Union[RequestSource, Request], sink: ResponseSink, *,
                 json_encoder: typing.Type[json.JSONEncoder] = None):
        if isinstance(request, Request):
            request = WerkzeugRequestSource(request)

        self.request = request
        self.sink = sink

        self._path = request.path
        self._method = request.method

        self.status_code = 0

        # Filled in by the app.
        self.app = None  # type: 'beeweb.Bee'

        self.json_encoder = json_encoder

    # These are copied when the context is created.
    @property
    def path(self) -> str:
        return self._path

    @property
    def method(self) -> str:
        return self._method

    def post_form(self, key: str) -> str:
        """
        :return: The form value for ``key`` (falling back to the query string), or an empty string.
        """
        return self.request.form_value(key)

    def query(self, key: str) -> str:
        """
        :return: The query string value for ``key``, or an empty string.
        """
        return self.request.query_value(key)

    def set_header(self, key: str, value: str):
        """
        Sets a response header. This must happen before :meth:`status`.
        """
        self.sink.set_header(key, value)

    def status(self, code: int):
        """
        Writes the status line. Headers can no longer be changed after this.
        """
        self.status_code = code
        self.sink.write_status(code)

    def respond_text(self, code: int, fmt: str, *values):
        """
        Responds with ``text/plain``.

        If ``fmt`` and ``values`` don't match, the response is still sent: the body is ``fmt`` followed by the
        values' reprs in a ``%!(...)`` marker.

        :param code: The status code of the response.
        :param fmt: A printf-style format string. It is written as-is if there are no ``values``.
        :param values: The values to interpolate into ``fmt``.
        """
        if not values:
            body = fmt
        else:
            try:
                body = fmt % values
            except (TypeError, ValueError) as e:
                logger.warning("Bad format for text response to {} {}: {}".format(self.method, self.path, e))
                body = "{}%!({})".format(fmt, ", ".join(repr(v) for v in values))

        self.set_header("Content-Type", "text/plain")
        self.status(code)
        self.sink.write(body.encode("utf-8"))

    def respond_json(self, code: int, obj: typing.Any):
        """
        Responds with ``application/json``.

        The object is encoded before anything is written. If it can't be encoded, a plain text 500 carrying the
        encoder's error is sent instead, and ``code`` is never written.

        :param code: The status code of the response.
        :param obj: The object to encode.
        """
        result = encode_json(obj, json_encoder=self.json_encoder)
        if not result.ok:
            logger.error("Failed to encode JSON response for {} {}: {}".format(self.method, self.path, result.error))
            self.error(500, result.error)
            return

        self.set_header("Content-Type", "application/json")
        self.status(code)
        self.sink.write(result.data + b"\n")

    def respond_bytes(self, code: int, data: bytes):
        """
        Responds with raw bytes. No ``Content-Type`` is set; use :meth:`set_header` first if one is needed.
        """
        self.status(code)
        self.sink.write(data)

    def respond_html(self, code: int, html: str):
        """
        Responds with ``text/html``.
        """
        self.set_header("Content-Type", "text/html")
        self.status(code)
        self.sink.write(html.encode("utf-8"))

    def error(self, code: int, message: str):
        """
        Responds with a plain text error message.

        :param code: The status code of the response.
        :param message: The error message. A newline is appended.
        """
        self.set_header("Content-Type", "text/plain; charset=utf-8")
        self.set_header("X-Content-Type-Options", "nosniff")
        self.status(code)
        self.sink.write((message + "\n").encode("utf-8"))

    def __repr__(self):
        return "<RequestContext {} {} status={}>".format(self.method, self.path, self.status_code)
