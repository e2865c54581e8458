"""
Batch registration with per-item failure isolation.
"""
import logging
from typing import Sequence

from ..types import (
    AccountCredential,
    BatchReport,
    RegistrationRequest,
    ResourceKind,
    ServiceEnvelope,
)
from .client import RegistrationClient, failure_message

logger = logging.getLogger(__name__)

EMPTY_BATCH_MESSAGE = "Batch registration requires at least one registrant"

UNKNOWN_ERROR_MESSAGE = "Unknown error"

BATCH_FAILURE_MESSAGES = {
    "meeting": "Failed to process batch registration",
    "webinar": "Failed to process batch webinar registration",
}


class BatchOrchestrator:
    """
    Registers an ordered list of registrants one at a time.

    Guarantees:
    - report.registrants has one entry per input registrant, in input order
    - successful_count + failed_count == len(registrants)
    - one item's failure (reported or raised) never skips later items
    - overall success is true when at least one item succeeded

    Items run sequentially so the report order matches the input and the
    provider sees one request at a time.
    """

    def __init__(self, registration_client: RegistrationClient):
        self._client = registration_client

    async def register_batch(
        self,
        kind: ResourceKind,
        resource_id: str,
        registrants: Sequence[RegistrationRequest],
        credential: AccountCredential,
    ) -> ServiceEnvelope[BatchReport]:
        """Register every registrant and fold the outcomes into a BatchReport."""
        if not registrants:
            logger.warning(f"BatchOrchestrator.register_batch: Empty batch for {kind} {resource_id}")
            return ServiceEnvelope.fail(EMPTY_BATCH_MESSAGE, 400)

        logger.info(
            f"BatchOrchestrator.register_batch: Processing {len(registrants)} registrants "
            f"for {kind} {resource_id} (account={credential.name})"
        )

        try:
            report = BatchReport()
            for index, registrant in enumerate(registrants):
                await self._register_one(kind, resource_id, registrant, credential, report, index)
        except Exception:
            logger.exception(
                f"BatchOrchestrator.register_batch: Error during batch {kind} registration for {resource_id}"
            )
            return ServiceEnvelope.fail(BATCH_FAILURE_MESSAGES.get(kind, BATCH_FAILURE_MESSAGES["meeting"]), 500)

        overall_success = report.successful_count > 0
        logger.info(
            f"BatchOrchestrator.register_batch: Finished {kind} {resource_id} "
            f"successful={report.successful_count} failed={report.failed_count}"
        )
        return ServiceEnvelope(
            success=overall_success,
            status_code=200 if overall_success else 400,
            data=report,
        )

    async def _register_one(
        self,
        kind: ResourceKind,
        resource_id: str,
        registrant: RegistrationRequest,
        credential: AccountCredential,
        report: BatchReport,
        index: int,
    ) -> None:
        try:
            envelope = await self._client.register(kind, resource_id, registrant, credential)
        except Exception as e:
            # Isolate the item: record it as failed and keep going
            logger.exception(
                f"BatchOrchestrator._register_one: Item {index} ({registrant.email}) raised"
            )
            report.add_failure(registrant.email, str(e) or failure_message(kind))
            return

        if envelope.success and envelope.data is not None:
            report.add_success(registrant.email, envelope.data)
        else:
            logger.debug(
                f"BatchOrchestrator._register_one: Item {index} ({registrant.email}) failed: "
                f"status={envelope.status_code} error={envelope.error}"
            )
            report.add_failure(registrant.email, envelope.error or UNKNOWN_ERROR_MESSAGE)
