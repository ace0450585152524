from .client import RestClient
from .config_types import ClientConfig
from .errors import HttpStatusError, NetworkError, PreconditionError, RestHttpError, SourceFileNotFound

__all__ = [
    "RestClient",
    "ClientConfig",
    "RestHttpError",
    "HttpStatusError",
    "NetworkError",
    "PreconditionError",
    "SourceFileNotFound",
]
