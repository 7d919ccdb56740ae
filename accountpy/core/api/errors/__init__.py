"""Account error taxonomy and classifier."""
from .error_kinds import ErrorKind, ServerErrorCodes, classify, describe

__all__ = [
    'ErrorKind',
    'ServerErrorCodes',
    'classify',
    'describe',
]
