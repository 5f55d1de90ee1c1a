"""
Utilities for building fake WSGI environments and flattening werkzeug responses back into raw HTTP, so that a
:class:`~.Bee` app can be driven without a socket.
"""
import sys
from io import BytesIO
from urllib.parse import urlsplit

import typing
from werkzeug.wrappers import Response


class InlineWSGIWrapper(object):
    """
    Captures what a Bee response hands to ``start_response`` and its body iterable, so tests can compare the
    response against the exact bytes a client would receive.
    """
    def __init__(self):
        self.headers = []
        self.real_body = b""

        self.status = None

    def start_response(self, status, headers: typing.List[tuple], exc_info=None):
        """
        Records the status line and header list of the response.
        """
        self.status = status
        self.headers = headers

    def consume(self, i: typing.Iterable[bytes]):
        """
        Drains the response body, closing the iterable afterwards as WSGI servers must.
        """
        for part in i:
            self.real_body += part

        if hasattr(i, "close"):
            i.close()

    def format(self) -> bytes:
        """
        :return: The captured response as HTTP/1.1 wire bytes.
        """
        base = "HTTP/1.1 {status}\r\n{headers}\r\n"

        headers_fmt = ""
        for name, val in self.headers:
            headers_fmt += "{}: {}\r\n".format(name, val)

        x = base.format(status=self.status, headers=headers_fmt).encode()
        x += self.real_body

        return x


def to_wsgi_environment(headers: typing.Union[dict, list], method: str, path: str,
                        http_version: str = "1.1", body: BytesIO = None) -> dict:
    """
    Produces a new WSGI environment from a set of data that is passed in.

    This will return a dictionary that is directly compatible with Werkzeug's Request wrapper.

    .. code-block:: python

        d = to_wsgi_environment([("Host", "127.0.0.1")], "GET", "/?name=bee")
        request = werkzeug.wrappers.Request(d)

    :param headers: The headers of the HTTP request.
    :param method: The HTTP method of this request, e.g GET or POST.
    :param path: The HTTP path to get, in raw form, including the query string.
    :param http_version: The HTTP version to use.
    :param body: A :class:`BytesIO` representing the body of the request, or None if there is no request body.

    :return: A new dict containing the fake WSGI environment.
    """
    if isinstance(headers, dict):
        headers = headers.items()

    sp_path = urlsplit(path)

    if body is None:
        body = BytesIO()

    environ = {
        "PATH_INFO": sp_path.path,
        "QUERY_STRING": sp_path.query,
        "SERVER_PROTOCOL": "HTTP/%s" % http_version,
        "REQUEST_METHOD": method,
        "SERVER_NAME": "localhost",
        "SERVER_PORT": "80",
        "CONTENT_LENGTH": str(len(body.getvalue())),
        "wsgi.version": (1, 0),
        "wsgi.errors": sys.stderr,
        "wsgi.url_scheme": "http",
        "wsgi.input": body,
        "wsgi.input_terminated": True,
        "wsgi.multithread": True,
        "wsgi.multiprocess": False,
        "wsgi.run_once": False
    }

    for header, value in headers:
        name = header.upper().replace("-", "_")
        if name not in ("CONTENT_TYPE", "CONTENT_LENGTH"):
            name = "HTTP_{}".format(name)

        environ[name] = value

    return environ


def get_formatted_response(response: Response, environment: dict) -> bytes:
    """
    Transform a Werkzeug response into a HTTP response that can be sent back down the wire.

    :param response: The response object to transform.
    :param environment: The WSGI environment of the request.
    :return: Bytes of text that can be sent to a client.
    """
    wrapper = InlineWSGIWrapper()
    iterator = response(environment, wrapper.start_response)
    wrapper.consume(iterator)

    return wrapper.format()
