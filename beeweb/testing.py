"""
Testing helpers for Bee.
"""
from io import BytesIO

import typing
from werkzeug.wrappers import Response

from beeweb.app import Bee
from beeweb.wsgi import to_wsgi_environment


class TestBee(Bee):
    """
    A special subclass that allows you to easily test your Bee-based app.
    """
    __test__ = False

    @classmethod
    def wrap_existing_app(cls, other_app: Bee) -> 'TestBee':
        """
        Wraps an existing app in a test frame.

        .. code:: python

            # main.py
            app = Bee("my_app", index)

            # test.py
            testing = TestBee.wrap_existing_app(app)
            # use testing as you would normally

        The new object shares the handler and the config of the wrapped app.

        :param other_app: The application object to wrap.
        """
        new_object = cls("test_app", other_app._handler, request_class=other_app.request_class,
                         response_class=other_app.response_class, context_class=other_app.context_class,
                         **other_app.config)
        new_object.original_app = other_app

        return new_object

    def inject_request(self, headers: typing.Union[dict, list], url: str, method: str = "GET",
                       body: typing.Union[str, bytes] = None) -> Response:
        """
        Injects a request into the test app.

        This will automatically create the correct context.

        :param headers: The headers to use.
        :param url: The URL to use, including the query string.
        :param method: The method to use.
        :param body: The body to use.
        :return: The result.
        """
        if isinstance(body, str):
            body = body.encode()

        if body is not None:
            body = BytesIO(body)

        e = to_wsgi_environment(headers, method, url, http_version="1.1", body=body)
        r = self.request_class(e)

        return self.process_request(r)
