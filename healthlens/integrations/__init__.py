"""HealthLens external service integrations"""

from .healthlens_client import (
    HealthLensClient,
    HealthLensError,
    HealthLensNotConfiguredError,
    HealthLensConnectionError,
    HealthLensTimeoutError,
    HealthLensAPIError,
    HealthLensNotFoundError,
    HealthLensPayloadError,
)

__all__ = [
    "HealthLensClient",
    "HealthLensError",
    "HealthLensNotConfiguredError",
    "HealthLensConnectionError",
    "HealthLensTimeoutError",
    "HealthLensAPIError",
    "HealthLensNotFoundError",
    "HealthLensPayloadError",
]
