"""Exceptions raised by the Roam backend client."""

from typing import Any

import requests


class RoamApiError(requests.exceptions.HTTPError):
    """The Roam backend answered with a status other than 200.

    Subclasses ``requests.exceptions.HTTPError`` so that callers already handling
    ``requests`` failures catch API errors too.

    Attributes:
        status_code: The HTTP status of the failed response.
        response: The response object returned by the transport.
    """

    def __init__(self, message: str, status_code: int, response: Any = None) -> None:
        super().__init__(message, response=response)
        self.status_code = status_code


class RoamBadRequestError(RoamApiError):
    """HTTP 400: the backend rejected the request body."""


class RoamServerError(RoamApiError):
    """HTTP 500: the backend failed while handling the request."""


class RoamUnauthorizedError(RoamApiError):
    """HTTP 401: the token is invalid or lacks privileges for the graph."""


class RoamGraphNotReadyError(RoamApiError):
    """HTTP 503: the graph is still loading on the backend.

    No retry is attempted; callers may retry after a few seconds.
    """
