"""Tests for contract notices endpoint."""

import pytest
import json
from datetime import date
from unittest.mock import AsyncMock, patch

from api.notices.contract_notices import handler
from src.models.notice import NoticeItem, NoticeStatus, NoticeSummary
from src.utils.errors import NoticeError, NotFoundError, SupabaseError
from tests.utils.assertions import assert_valid_response
from tests.utils.helpers import create_request


def _summary() -> NoticeSummary:
    return NoticeSummary(
        overdue=[NoticeItem(
            property_id="prop-1",
            property_name="Jane Seller",
            property_address="123 Main St",
            notice_type="deposit-received",
            label="Deposit Received",
            due_date=date(2025, 1, 13),
            overdue=True,
            days_until=-7,
        )],
        upcoming=[NoticeItem(
            property_id="prop-1",
            notice_type="title-commitment-received",
            label="Title Commitment Received",
            due_date=date(2025, 1, 20),
            days_until=0,
        )],
    )


@pytest.mark.unit
def test_get_all_notices():
    """Test listing notices across contract properties."""
    with patch('api.notices.contract_notices.get_contract_notices',
               new=AsyncMock(return_value=_summary())):
        response = handler(create_request(method="GET", path="/api/notices/contract_notices"))

    assert_valid_response(response, 200)
    body = json.loads(response["body"])
    assert body["count"] == 2
    assert body["overdue"][0]["due_date"] == "2025-01-13"
    assert body["overdue"][0]["badge"] == "7d overdue"
    assert body["upcoming"][0]["badge"] == "Today"


@pytest.mark.unit
def test_get_property_notices():
    """Test listing notices for one property."""
    with patch('api.notices.contract_notices.get_property_notices',
               new=AsyncMock(return_value=NoticeSummary())) as mock_notices:
        response = handler(create_request(method="GET", query={"property_id": "prop-1"}))

    assert_valid_response(response, 200)
    assert json.loads(response["body"])["count"] == 0
    mock_notices.assert_awaited_once_with("prop-1")


@pytest.mark.unit
def test_get_unknown_property():
    with patch('api.notices.contract_notices.get_property_notices',
               new=AsyncMock(side_effect=NotFoundError("Property not found: nope"))):
        response = handler(create_request(method="GET", query={"property_id": "nope"}))

    assert_valid_response(response, 404)


@pytest.mark.unit
def test_get_store_failure():
    """Test 500 when the store is unavailable."""
    with patch('api.notices.contract_notices.get_contract_notices',
               new=AsyncMock(side_effect=SupabaseError("Failed to list contract properties: timeout"))):
        response = handler(create_request(method="GET"))

    assert_valid_response(response, 500)


@pytest.mark.unit
def test_post_marks_complete():
    """Test marking a notice complete."""
    stored = NoticeStatus(property_id="prop-1", notice_type="clear-to-close", completed=True)

    with patch('api.notices.contract_notices.mark_notice_complete',
               new=AsyncMock(return_value=stored)) as mock_mark:
        response = handler(create_request(body={"property_id": "prop-1", "notice_type": "clear-to-close"}))

    assert_valid_response(response, 200)
    assert json.loads(response["body"])["status"]["completed"] is True
    mock_mark.assert_awaited_once_with("prop-1", "clear-to-close", True)


@pytest.mark.unit
def test_post_marks_incomplete():
    """Test un-marking a notice with a numeric property ID."""
    stored = NoticeStatus(property_id="42", notice_type="clear-to-close", completed=False)

    with patch('api.notices.contract_notices.mark_notice_complete',
               new=AsyncMock(return_value=stored)) as mock_mark:
        response = handler(create_request(body={
            "property_id": 42,
            "notice_type": "clear-to-close",
            "completed": False,
        }))

    assert_valid_response(response, 200)
    mock_mark.assert_awaited_once_with("42", "clear-to-close", False)


@pytest.mark.unit
@pytest.mark.parametrize("body", [
    {"notice_type": "clear-to-close"},
    {"property_id": "prop-1"},
    {},
])
def test_post_missing_fields(body):
    """Test that property_id and notice_type are required."""
    response = handler(create_request(body=body))

    assert_valid_response(response, 400)


@pytest.mark.unit
@pytest.mark.parametrize("raw_body", ["{not json", "[1, 2]"])
def test_post_invalid_json(raw_body):
    """Test rejection of a body that isn't a JSON object."""
    response = handler(create_request(body=raw_body))

    assert_valid_response(response, 400)
    assert json.loads(response["body"])["error"] == "Invalid JSON body"


@pytest.mark.unit
def test_post_unknown_notice_type():
    """Test 400 for a notice type outside the milestone set."""
    with patch('api.notices.contract_notices.mark_notice_complete',
               new=AsyncMock(side_effect=NoticeError("Unknown notice type: walk-through"))):
        response = handler(create_request(body={"property_id": "prop-1", "notice_type": "walk-through"}))

    assert_valid_response(response, 400)
    assert "walk-through" in json.loads(response["body"])["error"]


@pytest.mark.unit
@pytest.mark.parametrize("completed,expected", [
    ("false", False),
    ("no", False),
    ("0", False),
    ("true", True),
    (0, False),
])
def test_post_completed_text_flag(completed, expected):
    """Test that a string completion flag is read by its meaning."""
    stored = NoticeStatus(property_id="prop-1", notice_type="clear-to-close", completed=expected)

    with patch('api.notices.contract_notices.mark_notice_complete',
               new=AsyncMock(return_value=stored)) as mock_mark:
        response = handler(create_request(body={
            "property_id": "prop-1",
            "notice_type": "clear-to-close",
            "completed": completed,
        }))

    assert_valid_response(response, 200)
    mock_mark.assert_awaited_once_with("prop-1", "clear-to-close", expected)


@pytest.mark.unit
def test_get_unexpected_error():
    """Test that an unexpected failure still returns a JSON 500."""
    with patch('api.notices.contract_notices.get_contract_notices',
               new=AsyncMock(side_effect=RuntimeError("event loop closed"))):
        response = handler(create_request(method="GET"))

    assert_valid_response(response, 500)
    assert json.loads(response["body"])["error"] == "event loop closed"


@pytest.mark.unit
def test_post_unexpected_error():
    """Test that an unexpected failure while updating a notice returns a JSON 500."""
    with patch('api.notices.contract_notices.mark_notice_complete',
               new=AsyncMock(side_effect=RuntimeError("connection reset"))):
        response = handler(create_request(body={"property_id": "prop-1", "notice_type": "clear-to-close"}))

    assert_valid_response(response, 500)
    assert json.loads(response["body"])["error"] == "connection reset"
