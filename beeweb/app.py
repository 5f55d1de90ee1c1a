import logging

import typing
from werkzeug.exceptions import HTTPException, InternalServerError, NotFound
from werkzeug.wrappers import Request

from beeweb.context import RequestContext
from beeweb.response import BufferedResponseSink, Response

__version__ = "0.2.0"


class Bee(object):
    """
    The Bee type turns a single handler function into a WSGI application. For every request it creates a
    :class:`~.RequestContext` around the request and a fresh in-memory response sink, calls the handler, and turns
    whatever the handler wrote into a response.

    Bee does no routing; the handler receives every request and is free to dispatch on ``ctx.method`` and
    ``ctx.path`` however it likes.

    .. code:: python

        from beeweb import Bee

        app = Bee("my_app")

        @app.handler
        def index(ctx):
            ctx.respond_html(200, "<h1>Hello Bee</h1>")

        app.run("127.0.0.1", 9999)

    :param application_name: The name of the application that is being created.
    :param handler: The handler to call for every request. This can also be set with :meth:`handler`.

    :param server_name: Keyword-only. The server name to pass to werkzeug's development server.
    :param request_class: Keyword-only. The custom request class to instantiate requests with.
    :param response_class: Keyword-only. The custom response class to build responses with.
    :param context_class: Keyword-only. The custom context class to pass to the handler.
    :param json_encoder: Keyword-only. The :class:`json.JSONEncoder` subclass used by ``respond_json``.
    """

    # The class of request to spawn every request.
    # This should be a subclass of :class:`werkzeug.wrappers.Request`.
    request_class = Request

    # The class of response to build from the sink.
    # This should be a subclass of :class:`werkzeug.wrappers.Response`.
    response_class = Response

    # The class of context to create for every request.
    context_class = RequestContext

    def __init__(self,
                 application_name: str,
                 handler: typing.Callable[[RequestContext], None] = None,
                 *,
                 server_name: str = None,
                 **kwargs):
        self.name = application_name
        self.server_name = server_name

        self.logger = logging.getLogger("Bee")  # type: logging.Logger

        self._handler = handler

        self.request_class = kwargs.pop("request_class", self.request_class)
        self.response_class = kwargs.pop("response_class", self.response_class)
        self.context_class = kwargs.pop("context_class", self.context_class)

        # Any extra config.
        self.config = kwargs

    def handler(self, func: typing.Callable[[RequestContext], None]):
        """
        Decorator that sets the handler for this app.
        """
        self._handler = func
        return func

    def log_route(self, request: Request, code: int):
        """
        Logs a request.

        :param request: The request produced.
        :param code: The response code.
        """
        fmtted = "{} {} - {}".format(request.method, request.path, code)
        self.logger.info(fmtted)

    def create_context(self, request: Request, sink: BufferedResponseSink) -> RequestContext:
        """
        Creates the context for a request.
        """
        ctx = self.context_class(request, sink, json_encoder=self.config.get("json_encoder"))
        ctx.app = self
        return ctx

    def process_request(self, request: Request) -> Response:
        """
        Processes a Request and returns a Response object.

        :param request: The :class:`werkzeug.wrappers.Request` object to process.
        :return: A :class:`werkzeug.wrappers.Response` object that can be written to the client.
        """
        sink = BufferedResponseSink()
        ctx = self.create_context(request, sink)

        try:
            if self._handler is None:
                raise NotFound()
            self._handler(ctx)
        except HTTPException as e:
            result = e.get_response(request.environ)
        except Exception as e:
            self.logger.error("Unhandled exception in handler")
            self.logger.exception(e)
            new_e = InternalServerError()
            new_e.__cause__ = e
            result = new_e.get_response(request.environ)
        else:
            result = sink.to_response(self.response_class)

        result.headers["Server"] = "Bee/{}".format(__version__)
        self.log_route(request, result.status_code)

        return result

    def __call__(self, environ: dict, start_response: typing.Callable) -> typing.Iterable[bytes]:
        request = self.request_class(environ)
        response = self.process_request(request)
        return response(environ, start_response)

    def run(self, ip: str = "127.0.0.1", port: int = 4444, **kwargs):  # pragma: no cover
        """
        Runs the app on werkzeug's development server.

        :param ip: The IP to bind to.
        :param port: The port to bind to.
        :param kwargs: Passed on to :func:`werkzeug.serving.run_simple`.
        """
        from werkzeug.serving import run_simple

        self.logger.info("Bee serving on {}:{}.".format(self.server_name or ip, port))
        run_simple(ip, port, self, **kwargs)
