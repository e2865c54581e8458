"""
Registration: single registrant client, batch orchestration, service facade.
"""
from .client import RegistrationClient, DEFAULT_API_BASE_URL, failure_message, registrants_path
from .batch import BatchOrchestrator, EMPTY_BATCH_MESSAGE
from .service import RegistrationService, create_registration_service

__all__ = [
    "RegistrationClient",
    "BatchOrchestrator",
    "RegistrationService",
    "create_registration_service",
    "DEFAULT_API_BASE_URL",
    "EMPTY_BATCH_MESSAGE",
    "failure_message",
    "registrants_path",
]
