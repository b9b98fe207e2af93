"""Service layer: configuration, logging, errors and game data sources."""

from .cache import ArrayCacheStore, CacheStore
from .config import ConfigurationService, ValidationResult
from .errors import (
    AppError,
    ConfigurationError,
    DataSourceError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    NetworkError,
    UserFriendlyError,
    ValidationError,
    get_error_service,
    handle_error,
)
from .http_client import HttpClientService
from .repository import CatalogRepository, GameCardDataService, GameLookupService, HashListService
from .urls import UrlBuilder
from .web_api import WebApiRepository

__all__ = [
    "AppError",
    "ArrayCacheStore",
    "CacheStore",
    "CatalogRepository",
    "ConfigurationError",
    "ConfigurationService",
    "DataSourceError",
    "ErrorCategory",
    "ErrorHandlingService",
    "ErrorSeverity",
    "GameCardDataService",
    "GameLookupService",
    "HashListService",
    "HttpClientService",
    "NetworkError",
    "UrlBuilder",
    "UserFriendlyError",
    "ValidationError",
    "ValidationResult",
    "WebApiRepository",
    "get_error_service",
    "handle_error",
]
