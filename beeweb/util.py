"""
Misc utilities for usage inside the framework.
"""
import json

import typing


class JSONResult(typing.NamedTuple):
    """
    The outcome of :func:`encode_json`. Exactly one of ``data`` and ``error`` is set.
    """
    data: typing.Optional[bytes]
    error: typing.Optional[str]

    @property
    def ok(self) -> bool:
        return self.error is None


def encode_json(obj: typing.Any, *, json_encoder: typing.Type[json.JSONEncoder] = None) -> JSONResult:
    """
    Encodes an object to JSON without raising.

    .. code-block:: python

        result = encode_json({"response": "yes"})
        if not result.ok:
            print(result.error)

    :param obj: The object to encode.
    :param json_encoder: The encoder class to use to encode.
    :return: A :class:`JSONResult` holding either the UTF-8 encoded document or the encoder's error description.
    """
    try:
        dumped = json.dumps(obj, cls=json_encoder, allow_nan=False)
    except (TypeError, ValueError, RecursionError) as e:
        return JSONResult(None, str(e))

    return JSONResult(dumped.encode("utf-8"), None)
