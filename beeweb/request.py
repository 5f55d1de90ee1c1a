"""
Request sources.

A request source is the read-only half of a request, as far as a :class:`~.RequestContext` is concerned: the method,
the path, and form and query lookups.
"""
import abc
import logging

from werkzeug.exceptions import HTTPException
from werkzeug.wrappers import Request

logger = logging.getLogger("Bee.request")


class RequestSource(object, metaclass=abc.ABCMeta):
    """
    The incoming request for a single request handling flow.
    """

    @property
    @abc.abstractmethod
    def method(self) -> str:
        """
        :return: The HTTP method, e.g GET or POST.
        """

    @property
    @abc.abstractmethod
    def path(self) -> str:
        """
        :return: The target path, without the query string.
        """

    @abc.abstractmethod
    def form_value(self, key: str) -> str:
        """
        :return: The form value for ``key``, or an empty string.
        """

    @abc.abstractmethod
    def query_value(self, key: str) -> str:
        """
        :return: The query string value for ``key``, or an empty string.
        """


class WerkzeugRequestSource(RequestSource):
    """
    Adapts a :class:`werkzeug.wrappers.Request`.

    :ivar request: The wrapped werkzeug request.
    """

    def __init__(self, request: Request):
        self.request = request

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def path(self) -> str:
        return self.request.path

    def form_value(self, key: str) -> str:
        """
        Looks ``key`` up in the request body first, then in the query string.

        A body that cannot be parsed counts as an empty form.
        """
        try:
            value = self.request.form.get(key)
        except (HTTPException, ValueError) as e:
            logger.debug("Could not parse form data for {} {}: {}".format(self.method, self.path, e))
            value = None

        if value is None:
            return self.query_value(key)

        return value

    def query_value(self, key: str) -> str:
        return self.request.args.get(key, "")

    def __repr__(self):
        return "<WerkzeugRequestSource {} {}>".format(self.method, self.path)
