"""
Response sinks.

A sink is the outgoing half of a request: something that headers, a status line and body bytes can be written to,
in that order. The :class:`~.RequestContext` only ever talks to a :class:`ResponseSink`, so it never has to know
which transport is actually delivering the bytes.
"""
import abc
import logging
from io import BytesIO

import typing
from werkzeug.datastructures import Headers
from werkzeug.wrappers import Response as _WerkzeugResponse

logger = logging.getLogger("Bee.response")


class Response(_WerkzeugResponse):
    """
    A :class:`werkzeug.wrappers.Response` that does not invent a ``Content-Type``.

    Responses built from raw bytes only carry the content type the handler set, if any.
    """
    default_mimetype = None


class ResponseSink(object, metaclass=abc.ABCMeta):
    """
    The outgoing response channel for a single request.
    """

    @abc.abstractmethod
    def set_header(self, key: str, value: str):
        """
        Sets a response header, replacing any previous value for ``key``.
        """

    @abc.abstractmethod
    def write_status(self, code: int):
        """
        Emits the status line. Headers set after this are not honoured.
        """

    @abc.abstractmethod
    def write(self, data: bytes):
        """
        Appends ``data`` to the response body.
        """


class BufferedResponseSink(ResponseSink):
    """
    An in-memory sink that behaves like a real HTTP/1.1 response writer.

    - The headers are frozen the moment the status line is written.
    - Only the first status write counts; later ones are logged and dropped.
    - Writing body data without a status commits a ``200``.

    :ivar headers: The mutable :class:`werkzeug.datastructures.Headers` for the response.
    :ivar status: The committed status code, or None if no status has been written.
    :ivar written_headers: The headers as they were when the status was written.
    """

    def __init__(self):
        self.headers = Headers()
        self.status = None  # type: int
        self.written_headers = None  # type: Headers

        self._body = BytesIO()

    @property
    def committed(self) -> bool:
        """
        :return: If the status line has been written.
        """
        return self.status is not None

    @property
    def body(self) -> bytes:
        """
        :return: Everything written to the body so far.
        """
        return self._body.getvalue()

    def set_header(self, key: str, value: str):
        self.headers.set(key, value)

    def write_status(self, code: int):
        if self.committed:
            logger.warning("Superfluous status write ({} after {}), ignoring.".format(code, self.status))
            return

        self.status = code
        self.written_headers = self.headers.copy()

    def write(self, data: bytes):
        if not self.committed:
            self.write_status(200)

        self._body.write(data)

    def to_response(self, response_class: typing.Type[_WerkzeugResponse] = Response) -> _WerkzeugResponse:
        """
        Builds a werkzeug response out of what has been written to this sink.

        :param response_class: The response class to instantiate.
        :return: A new response. A sink that was never written to produces an empty ``200``.
        """
        if not self.committed:
            self.write_status(200)

        return response_class(self.body, status=self.status, headers=self.written_headers)
