"""
Bee is a tiny WSGI web framework built around a per-request context.

.. currentmodule:: beeweb

.. autosummary::
    :toctree: beeweb

    app
    context
    request
    response
    testing
    util
    wsgi
"""
from beeweb.app import Bee, __version__
from beeweb.context import H, RequestContext
from beeweb.request import RequestSource, WerkzeugRequestSource
from beeweb.response import BufferedResponseSink, Response, ResponseSink
from beeweb.testing import TestBee


__all__ = ("Bee", "H", "RequestContext", "RequestSource", "WerkzeugRequestSource", "ResponseSink",
           "BufferedResponseSink", "Response", "TestBee")
