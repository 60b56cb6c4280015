import json
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import Mock, call

import pytest

from servicenest.handling import DEFAULT_LIMIT, DEFAULT_OFFSET, Request
from servicenest.householder_controller import HouseholderController


def make_request(body=None, query=None, path_params=None, role="Householder", user_id="hh-1"):
    if isinstance(body, dict):
        body = json.dumps(body)
    return Request(
        body=body,
        query=query or {},
        path_params=path_params or {},
        context={"role": role, "userID": user_id},
    )


def make_controller():
    service = Mock()
    return HouseholderController(service), service


def provider(pid, approve=0):
    return SimpleNamespace(
        service_provider_id=pid,
        name="Provider " + pid,
        contact="contact",
        address="456 Provider St",
        price="100",
        rating=4.5,
        approve=approve,
    )


def service_request(rid, status="Pending", approve_status=False, providers=None, name="carpenter"):
    return SimpleNamespace(
        id=rid,
        service_name=name,
        service_id="svc-1",
        requested_time=datetime(2024, 9, 1, 12, 0, tzinfo=timezone.utc),
        scheduled_time=datetime(2024, 9, 2, 14, 0, tzinfo=timezone.utc),
        status=status,
        approve_status=approve_status,
        provider_details=providers,
    )


REQUEST_BODY = {
    "service_name": "Cleaning",
    "category": "Home",
    "description": "House cleaning",
    "scheduled_time": "2024-09-02 14:00",
}


def test_available_services_without_category_uses_pagination():
    controller, service = make_controller()
    service.get_available_services.return_value = ["a", "b"]
    resp = controller.get_available_services(make_request())
    assert resp.status == 200
    assert resp.payload["data"] == ["a", "b"]
    assert resp.payload["message"] == "Available services"
    assert service.get_available_services.call_args == call(DEFAULT_LIMIT, DEFAULT_OFFSET)
    assert not service.get_services_by_category.called


def test_available_services_by_category():
    controller, service = make_controller()
    service.get_services_by_category.return_value = ["x"]
    resp = controller.get_available_services(make_request(query={"category": "Home"}))
    assert resp.payload["data"] == ["x"]
    assert service.get_services_by_category.call_args == call("Home")


@pytest.mark.parametrize(
    "query, method, message",
    [
        ({}, "get_available_services", "internal server error"),
        ({"category": "Home"}, "get_services_by_category", "error fetching services"),
    ],
)
def test_available_services_errors(query, method, message):
    controller, service = make_controller()
    getattr(service, method).side_effect = RuntimeError("boom")
    resp = controller.get_available_services(make_request(query=query))
    assert resp.status == 500
    assert resp.payload["message"] == message
    assert resp.payload["error_code"] == 1006


def test_request_service_success():
    controller, service = make_controller()
    service.request_service.return_value = "req-9"
    resp = controller.request_service(make_request(REQUEST_BODY))
    assert resp.status == 201
    assert resp.payload["data"] == {"request_id": "req-9"}
    assert resp.payload["message"] == "Service request successfully"
    assert service.request_service.call_args == call(
        "hh-1", "Cleaning", "Home", "House cleaning",
        datetime(2024, 9, 2, 14, 0, tzinfo=timezone.utc),
    )


def test_request_service_admin_uses_query_user():
    controller, service = make_controller()
    service.request_service.return_value = "req-1"
    req = make_request(REQUEST_BODY, query={"user_id": "hh-7"}, role="Admin")
    resp = controller.request_service(req)
    assert resp.status == 201
    assert service.request_service.call_args[0][0] == "hh-7"


def test_request_service_admin_without_user_id():
    controller, service = make_controller()
    resp = controller.request_service(make_request(REQUEST_BODY, role="Admin"))
    assert resp.status == 400
    assert resp.payload["message"] == "user ID is required"
    assert resp.payload["error_code"] == 2001
    assert not service.request_service.called


def test_request_service_invalid_role():
    controller, _ = make_controller()
    resp = controller.request_service(make_request(REQUEST_BODY, role="ServiceProvider"))
    assert resp.status == 400
    assert resp.payload["message"] == "Invalid role"
    assert resp.payload["error_code"] == 1007


@pytest.mark.parametrize("when", ["2024/09/02 14:00", "2024-09-02T14:00", "2024-9-2 14:00"])
def test_request_service_bad_time(when):
    controller, service = make_controller()
    resp = controller.request_service(make_request({**REQUEST_BODY, "scheduled_time": when}))
    assert resp.status == 400
    assert resp.payload["message"] == "Invalid time format"
    assert not service.request_service.called


def test_request_service_malformed_json():
    controller, _ = make_controller()
    resp = controller.request_service(make_request('{"service_name" "x"}'))
    assert resp.status == 400
    assert resp.payload["message"] == "Invalid input"


def test_request_service_missing_field():
    controller, service = make_controller()
    resp = controller.request_service(make_request({**REQUEST_BODY, "category": ""}))
    assert resp.status == 400
    assert resp.payload["message"] == "Invalid request body"
    assert not service.request_service.called


def test_request_service_service_error():
    controller, service = make_controller()
    service.request_service.side_effect = RuntimeError("db down")
    resp = controller.request_service(make_request(REQUEST_BODY))
    assert resp.status == 500
    assert resp.payload["message"] == "error requesting service"


def test_cancel_missing_request_id():
    controller, _ = make_controller()
    resp = controller.cancel_service_request(make_request())
    assert resp.status == 400
    assert resp.payload["error_code"] == 2002


def test_cancel_success_and_error():
    controller, service = make_controller()
    req = make_request(path_params={"request_id": "req-1"})
    resp = controller.cancel_service_request(req)
    assert resp.payload["message"] == "Request cancelled successfully"
    assert service.cancel_service_request.call_args == call("req-1", "hh-1")

    service.cancel_service_request.side_effect = RuntimeError("request is already cancelled")
    resp = controller.cancel_service_request(req)
    assert resp.status == 500
    assert resp.payload["message"] == "request is already cancelled"
    assert resp.payload["error_code"] == 1006


def test_reschedule_success():
    controller, service = make_controller()
    body = {"id": "req-1", "scheduled_time": "2024-09-02 14:00"}
    resp = controller.reschedule_service_request(make_request(body))
    assert resp.status == 200
    assert resp.payload["message"] == "service request has been successfully rescheduled"
    assert service.reschedule_service_request.call_args == call(
        "req-1", datetime(2024, 9, 2, 14, 0, tzinfo=timezone.utc), "hh-1"
    )


def test_reschedule_error_code():
    controller, service = make_controller()
    service.reschedule_service_request.side_effect = RuntimeError("only pending request rescheduled")
    body = {"id": "req-1", "scheduled_time": "2024-09-02 14:00"}
    resp = controller.reschedule_service_request(make_request(body))
    assert resp.status == 500
    assert resp.payload["message"] == "only pending request rescheduled"
    assert resp.payload["error_code"] == 1008


def test_booking_history_empty():
    controller, service = make_controller()
    service.view_status.return_value = []
    resp = controller.view_booking_history(make_request(query={"status": "Pending"}))
    assert resp.payload["message"] == "No service request found"
    assert "data" not in resp.payload
    assert service.view_status.call_args == call("hh-1", DEFAULT_LIMIT, DEFAULT_OFFSET, "Pending")


def test_booking_history_lists_providers_only_for_open_accepted():
    controller, service = make_controller()
    service.view_status.return_value = [
        service_request("r1", status="Accepted", providers=[provider("p1")]),
        service_request("r2", status="Accepted", approve_status=True, providers=[provider("p2")]),
        service_request("r3", status="Pending", providers=[provider("p3")], name=""),
    ]
    resp = controller.view_booking_history(make_request())
    data = resp.payload["data"]
    assert resp.payload["message"] == "Service Request fetched successfully"
    assert [d["request_id"] for d in data] == ["r1", "r2", "r3"]
    assert [p["service_provider_id"] for p in data[0]["provider_details"]] == ["p1"]
    assert "provider_details" not in data[1]
    assert "provider_details" not in data[2]
    assert "service_name" not in data[2]
    assert all(d["approve_status"] is False for d in data)


def test_booking_history_error():
    controller, service = make_controller()
    service.view_status.side_effect = RuntimeError("x")
    resp = controller.view_booking_history(make_request())
    assert resp.status == 500
    assert resp.payload["message"] == "Failed to fetch service requests"
    assert resp.payload["error_code"] == 1003


@pytest.mark.parametrize(
    "order, expected",
    [("New to Old", "DESC"), ("Old to New", "ASC"), ("", ""), ("random", "")],
)
def test_approved_request_sort_order(order, expected):
    controller, service = make_controller()
    service.view_approved_requests.return_value = []
    resp = controller.view_approved_request(make_request(query={"order": order}))
    assert resp.payload["message"] == "No approved service requests found"
    assert service.view_approved_requests.call_args == call(
        "hh-1", DEFAULT_LIMIT, DEFAULT_OFFSET, expected
    )


def test_approved_request_filters():
    controller, service = make_controller()
    service.view_approved_requests.return_value = [
        service_request("r1", status="Approved", approve_status=True,
                        providers=[provider("p1", approve=1), provider("p2", approve=0)]),
        service_request("r2", status="Accepted", approve_status=False, providers=[provider("p3", 1)]),
    ]
    resp = controller.view_approved_request(make_request())
    data = resp.payload["data"]
    assert resp.payload["message"] == "Approved requests fetched"
    assert [d["request_id"] for d in data] == ["r1"]
    assert [p["service_provider_id"] for p in data[0]["provider_details"]] == ["p1"]
    encoded = json.loads(resp.json())
    assert encoded["data"][0]["scheduled_time"] == "2024-09-02T14:00:00Z"


def test_approved_request_error():
    controller, service = make_controller()
    service.view_approved_requests.side_effect = RuntimeError("no approve request found")
    resp = controller.view_approved_request(make_request())
    assert resp.status == 500
    assert resp.payload["message"] == "no approve request found"


def test_approve_request_success_and_error():
    controller, service = make_controller()
    req = make_request({"request_id": "r1", "provider_id": "p1"})
    resp = controller.approve_request(req)
    assert resp.payload["message"] == "Request approve successfully"
    assert service.approve_service_request.call_args == call("r1", "p1", "hh-1")

    service.approve_service_request.side_effect = RuntimeError("request is already approved")
    resp = controller.approve_request(req)
    assert resp.status == 500
    assert resp.payload["message"] == "Internal server error"


REVIEW = {"service_id": "s1", "provider_id": "p1", "review_text": "Great", "rating": 4}


@pytest.mark.parametrize("rating", [0.5, 5.5, -2])
def test_leave_review_rating_out_of_range(rating):
    controller, service = make_controller()
    resp = controller.leave_review(make_request({**REVIEW, "rating": rating}))
    assert resp.status == 400
    assert resp.payload["message"] == "Rating should be between 1 and 5"
    assert not service.add_review.called


def test_leave_review_success():
    controller, service = make_controller()
    resp = controller.leave_review(make_request(REVIEW))
    assert resp.payload["message"] == "Review added successfully"
    assert service.add_review.call_args == call("p1", "hh-1", "s1", "Great", 4.0)


def test_leave_review_decode_and_service_errors():
    controller, service = make_controller()
    resp = controller.leave_review(make_request("not json"))
    assert resp.payload["message"] == "Error decoding review request"

    service.add_review.side_effect = RuntimeError("review exists")
    resp = controller.leave_review(make_request(REVIEW))
    assert resp.status == 500
    assert resp.payload["message"] == "review exists"


def test_get_all_service_categories():
    controller, service = make_controller()
    service.get_all_service_category.return_value = [{"name": "Home"}]
    resp = controller.get_all_service_categories(make_request())
    assert resp.payload["data"] == [{"name": "Home"}]
    assert resp.payload["message"] == "Categories retrieved successfully"

    service.get_all_service_category.side_effect = RuntimeError("x")
    resp = controller.get_all_service_categories(make_request())
    assert resp.status == 500
    assert resp.payload["message"] == "Failed to fetch service categories"