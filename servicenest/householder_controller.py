"""HTTP handlers for householders booking and managing services."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any

from servicenest.handling import (
    Request,
    Response,
    ValidationError,
    decode_body,
    error_response,
    get_filter_param,
    get_pagination_params,
    success_response,
)

logger = logging.getLogger(__name__)

_REQUEST_FIELDS = {
    "service_name": str,
    "category": str,
    "description": str,
    "scheduled_time": str,
}
_RESCHEDULE_FIELDS = {"id": str, "scheduled_time": str}
_APPROVE_FIELDS = {"request_id": str, "provider_id": str}
_REVIEW_FIELDS = {
    "service_id": str,
    "provider_id": str,
    "review_text": str,
    "rating": float,
}
_SORT_ORDERS = {"New to Old": "DESC", "Old to New": "ASC"}
_SCHEDULE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}")
_SCHEDULE_FORMAT = "%Y-%m-%d %H:%M"


def _parse_schedule(text: str) -> datetime:
    """Parse ``YYYY-MM-DD HH:MM`` as a UTC timestamp."""
    if not _SCHEDULE_PATTERN.fullmatch(text):
        raise ValueError(f"invalid time {text!r}")
    return datetime.strptime(text, _SCHEDULE_FORMAT).replace(tzinfo=timezone.utc)


def _householder_id(request: Request) -> str | Response:
    """Resolve whose requests are handled: an admin names the user, a householder is the user."""
    role = request.context["role"]
    if role == "Admin":
        user_id = request.query.get("user_id", "")
        if not user_id:
            logger.error("No query param")
            return error_response(HTTPStatus.BAD_REQUEST, "user ID is required", 2001)
        return user_id
    if role == "Householder":
        return request.context["userID"]
    logger.error("Invalid role")
    return error_response(HTTPStatus.BAD_REQUEST, "Invalid role", 1007)


def _decode(request: Request, fields: dict[str, type], invalid_input: str) -> dict[str, Any] | Response:
    try:
        return decode_body(request, fields)
    except ValidationError:
        logger.error("Invalid request body")
        return error_response(HTTPStatus.BAD_REQUEST, "Invalid request body", 1001)
    except ValueError:
        logger.error("Invalid input")
        return error_response(HTTPStatus.BAD_REQUEST, invalid_input, 1001)


def _provider_detail(provider: Any) -> dict[str, Any]:
    return {
        "service_provider_id": provider.service_provider_id,
        "name": provider.name,
        "contact": provider.contact,
        "address": provider.address,
        "price": provider.price,
        "rating": provider.rating,
    }


def _request_summary(item: Any) -> dict[str, Any]:
    summary: dict[str, Any] = {"request_id": item.id}
    if item.service_name:
        summary["service_name"] = item.service_name
    summary.update(
        service_id=item.service_id,
        requested_time=item.requested_time,
        scheduled_time=item.scheduled_time,
        status=item.status,
    )
    return summary


class HouseholderController:
    """Handlers a householder (or an admin on their behalf) uses to book services."""

    def __init__(self, householder_service: Any) -> None:
        self.householder_service = householder_service

    def get_available_services(self, request: Request) -> Response:
        category = request.query.get("category", "")
        limit, offset = get_pagination_params(request)
        if not category:
            try:
                services = self.householder_service.get_available_services(limit, offset)
            except Exception:
                logger.error("error fetching all service")
                return error_response(
                    HTTPStatus.INTERNAL_SERVER_ERROR, "internal server error", 1006
                )
        else:
            try:
                services = self.householder_service.get_services_by_category(category)
            except Exception as exc:
                logger.error(str(exc))
                return error_response(
                    HTTPStatus.INTERNAL_SERVER_ERROR, "error fetching services", 1006
                )
        return success_response(services, "Available services", HTTPStatus.OK)

    def request_service(self, request: Request) -> Response:
        body = _decode(request, _REQUEST_FIELDS, "Invalid input")
        if isinstance(body, Response):
            return body
        householder_id = _householder_id(request)
        if isinstance(householder_id, Response):
            return householder_id
        try:
            schedule_time = _parse_schedule(body["scheduled_time"])
        except ValueError:
            logger.error("Invalid request body")
            return error_response(HTTPStatus.BAD_REQUEST, "Invalid time format", 1001)
        try:
            request_id = self.householder_service.request_service(
                householder_id,
                body["service_name"],
                body["category"],
                body["description"],
                schedule_time,
            )
        except Exception as exc:
            logger.error(str(exc))
            return error_response(
                HTTPStatus.INTERNAL_SERVER_ERROR, "error requesting service", 1006
            )
        logger.info("Service request successfully")
        return success_response(
            {"request_id": request_id}, "Service request successfully", HTTPStatus.CREATED
        )

    def cancel_service_request(self, request: Request) -> Response:
        request_id = request.path_params.get("request_id")
        if request_id is None:
            logger.error("Missing request Id in params")
            return error_response(
                HTTPStatus.BAD_REQUEST, "Missing request Id in params", 2002
            )
        householder_id = _householder_id(request)
        if isinstance(householder_id, Response):
            return householder_id
        try:
            self.householder_service.cancel_service_request(request_id, householder_id)
        except Exception as exc:
            logger.error("Error cancelling request %s", exc)
            return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc), 1006)
        logger.info("Request cancelled successfully")
        return success_response(None, "Request cancelled successfully", HTTPStatus.OK)

    def reschedule_service_request(self, request: Request) -> Response:
        body = _decode(request, _RESCHEDULE_FIELDS, "Invalid input")
        if isinstance(body, Response):
            return body
        try:
            new_time = _parse_schedule(body["scheduled_time"])
        except ValueError:
            logger.error("Invalid request body")
            return error_response(HTTPStatus.BAD_REQUEST, "Invalid time format", 1001)
        householder_id = _householder_id(request)
        if isinstance(householder_id, Response):
            return householder_id
        try:
            self.householder_service.reschedule_service_request(
                body["id"], new_time, householder_id
            )
        except Exception as exc:
            logger.error("Error rescheduling service %s", exc)
            return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc), 1008)
        logger.info("Successfully rescheduled service request")
        return success_response(
            None, "service request has been successfully rescheduled", HTTPStatus.OK
        )

    def view_booking_history(self, request: Request) -> Response:
        householder_id = _householder_id(request)
        if isinstance(householder_id, Response):
            return householder_id
        limit, offset = get_pagination_params(request)
        status = get_filter_param(request, "status")
        try:
            service_requests = self.householder_service.view_status(
                householder_id, limit, offset, status
            )
        except Exception as exc:
            logger.error("Failed to fetch service requests for %s: %s", householder_id, exc)
            return error_response(
                HTTPStatus.INTERNAL_SERVER_ERROR, "Failed to fetch service requests", 1003
            )
        if not service_requests:
            logger.info("No service requests found for householder %s", householder_id)
            return success_response(None, "No service request found", HTTPStatus.OK)

        history = []
        for item in service_requests:
            summary = _request_summary(item)
            summary["approve_status"] = False
            if (
                item.status == "Accepted"
                and item.provider_details is not None
                and not item.approve_status
            ):
                details = [_provider_detail(p) for p in item.provider_details]
                if details:
                    summary["provider_details"] = details
            history.append(summary)
        logger.info("Service requests fetched for householder %s", householder_id)
        return success_response(
            history, "Service Request fetched successfully", HTTPStatus.OK
        )

    def view_approved_request(self, request: Request) -> Response:
        householder_id = _householder_id(request)
        if isinstance(householder_id, Response):
            return householder_id
        limit, offset = get_pagination_params(request)
        sort_order = _SORT_ORDERS.get(get_filter_param(request, "order"), "")
        try:
            approved = self.householder_service.view_approved_requests(
                householder_id, limit, offset, sort_order
            )
        except Exception as exc:
            logger.error(str(exc))
            return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc), 1008)
        if not approved:
            logger.info("No approve service requests")
            return success_response(
                None, "No approved service requests found", HTTPStatus.OK
            )

        body = []
        for item in approved:
            if not item.approve_status:
                continue
            summary = _request_summary(item)
            details = [
                _provider_detail(p) for p in item.provider_details or () if p.approve == 1
            ]
            if details:
                summary["provider_details"] = details
            body.append(summary)
        logger.info("approved request fetched")
        return success_response(body, "Approved requests fetched", HTTPStatus.OK)

    def approve_request(self, request: Request) -> Response:
        body = _decode(request, _APPROVE_FIELDS, "Invalid input")
        if isinstance(body, Response):
            return body
        householder_id = _householder_id(request)
        if isinstance(householder_id, Response):
            return householder_id
        try:
            self.householder_service.approve_service_request(
                body["request_id"], body["provider_id"], householder_id
            )
        except Exception as exc:
            logger.error(str(exc))
            return error_response(
                HTTPStatus.INTERNAL_SERVER_ERROR, "Internal server error", 1006
            )
        logger.info("Request approve successfully")
        return success_response(None, "Request approve successfully", HTTPStatus.OK)

    def leave_review(self, request: Request) -> Response:
        body = _decode(request, _REVIEW_FIELDS, "Error decoding review request")
        if isinstance(body, Response):
            return body
        user_id = request.context["userID"]
        rating = body["rating"]
        if rating < 1 or rating > 5:
            return error_response(
                HTTPStatus.BAD_REQUEST, "Rating should be between 1 and 5", 1001
            )
        try:
            self.householder_service.add_review(
                body["provider_id"], user_id, body["service_id"], body["review_text"], rating
            )
        except Exception as exc:
            logger.error("Error adding review %s", exc)
            return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc), 1006)
        logger.info("Review added successfully")
        return success_response(None, "Review added successfully", HTTPStatus.OK)

    def get_all_service_categories(self, request: Request) -> Response:
        try:
            categories = self.householder_service.get_all_service_category()
        except Exception as exc:
            logger.error("Error fetching categories: %s", exc)
            return error_response(
                HTTPStatus.INTERNAL_SERVER_ERROR, "Failed to fetch service categories", 1006
            )
        logger.info("Categories retrieved successfully")
        return success_response(
            categories, "Categories retrieved successfully", HTTPStatus.OK
        )