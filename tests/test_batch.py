"""
Tests for registration/batch.py
Logic testing: Decision/Branch, Boundary, Error isolation
"""
import pytest
from unittest.mock import AsyncMock, MagicMock

from zoom_registration.registration.batch import EMPTY_BATCH_MESSAGE, BatchOrchestrator
from zoom_registration.registration.client import RegistrationClient
from zoom_registration.types import RegistrationRequest, RegistrationResult, ServiceEnvelope


def _requests(*emails):
    return [RegistrationRequest(email=email, first_name="F", last_name="L") for email in emails]


class TestBatchWithProvider:
    """BatchOrchestrator over a real RegistrationClient and a mock transport."""

    @pytest.fixture
    def orchestrator(self, registration_client):
        return BatchOrchestrator(registration_client)

    # Happy Path: one approved, one already registered
    @pytest.mark.asyncio
    async def test_mixed_outcomes(self, orchestrator, mock_httpx_async_client, token_response, make_response,
                                  registrant_body, primary_credential):
        mock_httpx_async_client.request = AsyncMock(
            side_effect=[
                token_response,
                make_response(201, registrant_body("a@x.com")),
                token_response,
                make_response(400, {"code": 3027, "message": "Registrant already registered"}, "Bad Request"),
            ]
        )

        envelope = await orchestrator.register_batch(
            "meeting", "abcd1234", _requests("a@x.com", "b@x.com"), primary_credential
        )

        assert envelope.success is True
        assert envelope.status_code == 200
        report = envelope.data
        assert report.successful_count == 1
        assert report.failed_count == 1
        assert [item.email for item in report.registrants] == ["a@x.com", "b@x.com"]
        assert report.registrants[0].result.status == "approved"
        assert report.registrants[1].result is None
        assert report.registrants[1].error == "Registrant already registered"

    # Decision: every item failed
    @pytest.mark.asyncio
    async def test_all_failed(self, orchestrator, mock_httpx_async_client, make_response, primary_credential):
        mock_httpx_async_client.request = AsyncMock(
            return_value=make_response(401, {"reason": "Invalid client_id or client_secret"}, "Unauthorized")
        )

        envelope = await orchestrator.register_batch(
            "webinar", "w-1", _requests("a@x.com", "b@x.com", "c@x.com"), primary_credential
        )

        assert envelope.success is False
        assert envelope.status_code == 400
        assert envelope.data.failed_count == 3
        assert envelope.data.successful_count == 0
        # One token attempt per item and no registration calls
        assert mock_httpx_async_client.request.await_count == 3

    # Boundary: empty batch makes no calls
    @pytest.mark.asyncio
    async def test_empty_batch(self, orchestrator, mock_httpx_async_client, primary_credential):
        envelope = await orchestrator.register_batch("meeting", "abcd1234", [], primary_credential)

        assert envelope.success is False
        assert envelope.status_code == 400
        assert envelope.error == EMPTY_BATCH_MESSAGE
        mock_httpx_async_client.request.assert_not_called()


class TestBatchIsolation:
    """BatchOrchestrator over a mock RegistrationClient."""

    @pytest.fixture
    def mock_client(self):
        client = MagicMock(spec=RegistrationClient)
        client.register = AsyncMock()
        return client

    # Boundary: report length and order always match the input
    @pytest.mark.asyncio
    @pytest.mark.parametrize("size", [1, 2, 5])
    async def test_report_matches_input(self, mock_client, primary_credential, size):
        emails = [f"user{i}@x.com" for i in range(size)]
        mock_client.register.side_effect = [
            ServiceEnvelope.ok(RegistrationResult.from_dict({"id": str(i), "status": "approved"}), 201)
            if i % 2 == 0
            else ServiceEnvelope.fail("Registrant already registered", 400)
            for i in range(size)
        ]

        envelope = await BatchOrchestrator(mock_client).register_batch(
            "meeting", "m-1", _requests(*emails), primary_credential
        )

        report = envelope.data
        assert len(report.registrants) == size
        assert [item.email for item in report.registrants] == emails
        assert report.successful_count + report.failed_count == size
        assert report.successful_count == (size + 1) // 2

    # Error Path: a raised exception is recorded and later items still run
    @pytest.mark.asyncio
    async def test_exception_isolated(self, mock_client, primary_credential):
        mock_client.register.side_effect = [
            RuntimeError("socket closed"),
            ServiceEnvelope.ok(RegistrationResult.from_dict({"id": "2", "status": "pending"}), 201),
        ]

        envelope = await BatchOrchestrator(mock_client).register_batch(
            "meeting", "m-1", _requests("a@x.com", "b@x.com"), primary_credential
        )

        assert envelope.success is True
        assert mock_client.register.await_count == 2
        assert envelope.data.registrants[0].error == "socket closed"
        assert envelope.data.registrants[1].result.status == "pending"

    # Decision: exception without text uses the kind default
    @pytest.mark.asyncio
    async def test_exception_without_message(self, mock_client, primary_credential):
        mock_client.register.side_effect = [RuntimeError()]

        envelope = await BatchOrchestrator(mock_client).register_batch(
            "webinar", "w-1", _requests("a@x.com"), primary_credential
        )

        assert envelope.data.registrants[0].error == "Failed to register webinar participant"

    # Decision: failed envelope without error text
    @pytest.mark.asyncio
    async def test_failure_without_error(self, mock_client, primary_credential):
        mock_client.register.side_effect = [ServiceEnvelope(success=False, status_code=500)]

        envelope = await BatchOrchestrator(mock_client).register_batch(
            "meeting", "m-1", _requests("a@x.com"), primary_credential
        )

        assert envelope.success is False
        assert envelope.data.registrants[0].error == "Unknown error"
