"""Request building, dispatch and response decoding."""
from .request_builder import (
    HttpRequest,
    RequestBuilder,
    API_REGISTER,
    API_LOGIN,
    API_AUTH,
)
from .response_handler import (
    ResponseDecoder,
    DecodeOutcome,
    DecodedPayload,
    Decoded,
    Malformed,
    SUCCESS_STATUSES,
)
from .dispatcher import RequestDispatcher, TransportOutcome, Continuation

__all__ = [
    'HttpRequest',
    'RequestBuilder',
    'API_REGISTER',
    'API_LOGIN',
    'API_AUTH',
    'ResponseDecoder',
    'DecodeOutcome',
    'DecodedPayload',
    'Decoded',
    'Malformed',
    'SUCCESS_STATUSES',
    'RequestDispatcher',
    'TransportOutcome',
    'Continuation',
]
