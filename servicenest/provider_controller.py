"""HTTP handlers for service providers."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from servicenest.errors import ErrorMessage
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

_SERVICE_FIELDS = {"name": str, "description": str, "price": float, "category": str}
_ACCEPT_FIELDS = {"request_id": str, "price": str}
_SORT_ORDERS = {"New to Old": "DESC", "Old to New": "ASC"}


def _without_empty_name(item: dict[str, Any]) -> dict[str, Any]:
    if not item.get("service_name"):
        item.pop("service_name", None)
    return item


class ServiceProviderController:
    """Handlers a service provider uses to manage offers and requests."""

    def __init__(self, service_provider_service: Any) -> None:
        self.service_provider_service = service_provider_service

    def _service_body(self, request: Request) -> dict[str, Any] | Response:
        try:
            return decode_body(request, _SERVICE_FIELDS)
        except ValidationError:
            logger.error("Invalid request body")
            return error_response(HTTPStatus.BAD_REQUEST, "Invalid request body", 1001)
        except ValueError:
            logger.error("Invalid input")
            return error_response(HTTPStatus.BAD_REQUEST, "Invalid input", 1001)

    def add_service(self, request: Request) -> Response:
        body = self._service_body(request)
        if isinstance(body, Response):
            return body
        provider_id = request.context["userID"]
        new_service = {**body, "provider_id": provider_id}
        try:
            service_id = self.service_provider_service.add_service(provider_id, new_service)
        except Exception as exc:
            logger.error(str(exc))
            return error_response(
                HTTPStatus.INTERNAL_SERVER_ERROR, "error adding services", 1003
            )
        return success_response(
            {"service_id": service_id}, "Service added successfully", HTTPStatus.OK
        )

    def view_services(self, request: Request) -> Response:
        provider_id = request.context["userID"]
        try:
            services = self.service_provider_service.view_services(provider_id)
        except Exception as exc:
            logger.error(str(exc))
            return error_response(
                HTTPStatus.INTERNAL_SERVER_ERROR, "Error fetching services", 1006
            )
        if not services:
            return success_response(None, "Don't have a service offered", HTTPStatus.OK)
        logger.info("Service fetched successfully")
        return success_response(services, "service fetch successfully", HTTPStatus.OK)

    def update_service(self, request: Request) -> Response:
        service_id = request.path_params.get("service_id", "")
        body = self._service_body(request)
        if isinstance(body, Response):
            return body
        provider_id = request.context["userID"]
        updated = {"id": service_id, **body, "provider_id": provider_id}
        try:
            self.service_provider_service.update_service(provider_id, service_id, updated)
        except Exception as exc:
            logger.error("Error updating service")
            return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc), 1003)
        logger.info("update successfully")
        return success_response(None, "Service updated successfully", HTTPStatus.OK)

    def remove_service(self, request: Request) -> Response:
        provider_id = request.context["userID"]
        service_id = request.path_params.get("service_id", "")
        try:
            self.service_provider_service.remove_service(provider_id, service_id)
        except Exception as exc:
            logger.error("Error removing service")
            return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc), 1008)
        return success_response(None, "Service removed successfully", HTTPStatus.OK)

    def view_service_request(self, request: Request) -> Response:
        provider_id = request.context["userID"]
        limit, offset = get_pagination_params(request)
        service_id = get_filter_param(request, "serviceId")
        try:
            service_requests = self.service_provider_service.get_all_service_requests(
                provider_id, service_id, limit, offset
            )
        except Exception as exc:
            logger.error(str(exc))
            return error_response(
                HTTPStatus.INTERNAL_SERVER_ERROR, f"error fetching request {exc}", 1006
            )
        pending = [
            _without_empty_name(
                {
                    "request_id": item.id,
                    "service_name": item.service_name,
                    "service_id": item.service_id,
                    "requested_time": item.requested_time,
                    "scheduled_time": item.scheduled_time,
                    "address": item.householder_address,
                    "description": item.description,
                }
            )
            for item in service_requests
            if not item.approve_status and item.status != "Cancelled"
        ]
        if not pending:
            logger.info("No service requests found")
            return success_response(
                None, "No pending service requests available", HTTPStatus.OK
            )
        logger.info("Service request fetched successfully")
        return success_response(
            pending, "Service request fetched successfully", HTTPStatus.OK
        )

    def accept_service_request(self, request: Request) -> Response:
        try:
            body = decode_body(request, _ACCEPT_FIELDS)
        except ValidationError:
            logger.error("Invalid request body")
            return error_response(HTTPStatus.BAD_REQUEST, "Invalid request body", 1001)
        except ValueError:
            return error_response(HTTPStatus.BAD_REQUEST, "Invalid body", 1001)
        provider_id = request.context["userID"]
        try:
            self.service_provider_service.accept_service_request(
                provider_id, body["request_id"], body["price"]
            )
        except Exception as exc:
            logger.error(str(exc))
            if str(exc) == ErrorMessage.PROVIDER_NOT_FOUND.value:
                return success_response(None, str(exc), HTTPStatus.OK)
            return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc), 1008)
        logger.info("Request accept successfully")
        return success_response(None, "Request accept successfully", HTTPStatus.OK)

    def view_approved_requests(self, request: Request) -> Response:
        provider_id = request.context["userID"]
        limit, offset = get_pagination_params(request)
        sort_order = _SORT_ORDERS.get(get_filter_param(request, "order"), "")
        try:
            approved = self.service_provider_service.view_approved_requests_by_provider(
                provider_id, limit, offset, sort_order
            )
        except Exception as exc:
            logger.error(str(exc))
            return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc), 1008)
        body = [
            _without_empty_name(
                {
                    "request_id": item.id,
                    "service_name": item.service_name,
                    "householder_id": item.householder_id,
                    "householder_name": item.householder_name,
                    "householder_address": item.householder_address,
                    "approve_status": False,
                    "service_id": item.service_id,
                    "requested_time": item.requested_time,
                    "scheduled_time": item.scheduled_time,
                    "householder_contact": item.householder_contact,
                    "status": item.status,
                }
            )
            for item in approved
            if item.approve_status
        ]
        return success_response(
            body, "Approve requests fetched successfully", HTTPStatus.OK
        )

    def view_reviews(self, request: Request) -> Response:
        provider_id = request.context["userID"]
        limit, offset = get_pagination_params(request)
        service_id = get_filter_param(request, "serviceId")
        try:
            reviews = self.service_provider_service.get_reviews(
                provider_id, limit, offset, service_id
            )
        except Exception as exc:
            logger.error(str(exc))
            return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc), 1003)
        return success_response(reviews, "Reviews fetched successfully", HTTPStatus.OK)