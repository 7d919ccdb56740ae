"""Response decoding for account API responses."""
import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from ..models import UserRecord
from ...logging import get_logger

SUCCESS_STATUSES = frozenset({200, 201})


@dataclass(frozen=True)
class DecodedPayload:
    """
    Fields extracted from a well-formed response body.
    
    For success statuses ``user``, ``token`` and ``message`` are filled.
    For any other status ``error`` and ``message`` carry the server's
    failure description and ``user`` is the default record.
    """
    status: int
    user: UserRecord = field(default_factory=UserRecord)
    token: Optional[str] = field(default=None, repr=False)
    message: str = ''
    error: str = ''
    
    @property
    def is_success(self) -> bool:
        return self.status in SUCCESS_STATUSES


@dataclass(frozen=True)
class Decoded:
    payload: DecodedPayload


@dataclass(frozen=True)
class Malformed:
    """Body could not be read as a JSON object."""
    status: int
    reason: str


DecodeOutcome = Union[Decoded, Malformed]


class ResponseDecoder:
    """Turns raw response bytes into a DecodeOutcome. Never raises."""
    
    def __init__(self):
        self._logger = get_logger('accountpy.decoder')
    
    def decode(self, body: bytes, status: int) -> DecodeOutcome:
        """
        Decode a response body.
        
        Args:
            body: Raw response bytes
            status: HTTP status code
            
        Returns:
            Decoded with the extracted payload, or Malformed
        """
        document = self.parse_json(body)
        if isinstance(document, Malformed):
            self._logger.warning(f"Malformed response (HTTP {status}): {document.reason}")
            return Malformed(status=status, reason=document.reason)
        
        if status in SUCCESS_STATUSES:
            return Decoded(self._decode_success(document, status))
        return Decoded(self._decode_error(document, status))
    
    @staticmethod
    def parse_json(body: bytes) -> Union[Mapping[str, Any], Malformed]:
        """Parses a JSON object, returning Malformed instead of raising."""
        try:
            text = body.decode('utf-8') if isinstance(body, (bytes, bytearray)) else str(body)
        except UnicodeDecodeError as e:
            return Malformed(status=0, reason=f"invalid UTF-8: {e}")
        
        try:
            document = json.loads(text)
        except ValueError as e:
            return Malformed(status=0, reason=f"invalid JSON: {e}")
        
        if not isinstance(document, dict):
            return Malformed(status=0, reason=f"expected JSON object, got {type(document).__name__}")
        
        return document
    
    @staticmethod
    def parse_user(document: Mapping[str, Any]) -> UserRecord:
        """
        Extract the user from a success body.
        
        The canonical shape nests the user under ``user``. A flat body with
        ``user_name``/``user_id`` at the top level is accepted when there is
        no ``user`` object.
        """
        nested = document.get('user')
        if isinstance(nested, Mapping):
            return UserRecord.from_json(nested)
        if 'user_name' in document or 'user_id' in document:
            return UserRecord.from_json(document)
        return UserRecord()
    
    @staticmethod
    def _string_field(document: Mapping[str, Any], name: str) -> str:
        value = document.get(name)
        return value if isinstance(value, str) else ''
    
    def _decode_success(self, document: Mapping[str, Any], status: int) -> DecodedPayload:
        token = self._string_field(document, 'token')
        return DecodedPayload(
            status=status,
            user=self.parse_user(document),
            token=token or None,
            message=self._string_field(document, 'message')
        )
    
    def _decode_error(self, document: Mapping[str, Any], status: int) -> DecodedPayload:
        return DecodedPayload(
            status=status,
            message=self._string_field(document, 'message'),
            error=self._string_field(document, 'error')
        )
