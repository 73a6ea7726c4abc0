import json
from unittest.mock import MagicMock

import requests

ACS_HEADER = ["NAME", "B19013_001E", "DP03_0005PE", "state"]
POP_HEADER = ["POP_2023", "NAME", "state"]


def make_response(payload=None, status_code=200, reason="OK"):
    """Build a mock requests.Response"""
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = reason
    response.json.return_value = payload
    response.text = json.dumps(payload)
    return response


def route_by_url(routes):
    """side_effect for requests.get dispatching on a substring of the URL.

    A route value may be a payload, a response mock or an exception instance.
    """
    def fake_get(url, *args, **kwargs):
        for fragment, result in routes.items():
            if fragment in url:
                if isinstance(result, BaseException):
                    raise result
                if isinstance(result, MagicMock):
                    return result
                return make_response(result)
        raise requests.ConnectionError(f"unexpected URL {url}")
    return fake_get
