"""HTTP handlers for administrator operations."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from servicenest.handling import (
    Request,
    Response,
    ValidationError,
    apply_pagination,
    decode_body,
    error_response,
    get_pagination_params,
    success_response,
)

logger = logging.getLogger(__name__)

_ADD_SERVICE_FIELDS = {"category_name": str, "description": str}


class AdminController:
    """Handlers for managing services, reports and user accounts."""

    def __init__(self, admin_service: Any) -> None:
        self.admin_service = admin_service

    def view_all_service(self, request: Request) -> Response:
        limit, offset = get_pagination_params(request)
        try:
            services = self.admin_service.get_all_service(limit, offset)
        except Exception:
            logger.error("error fetching services")
            return error_response(
                HTTPStatus.INTERNAL_SERVER_ERROR, "error fetching services", 1003
            )
        logger.info("All services fetched successfully")
        return success_response(services, "All available services", HTTPStatus.OK)

    def delete_service(self, request: Request) -> Response:
        service_id = request.path_params.get("serviceID", "")
        try:
            self.admin_service.delete_service(service_id)
        except Exception:
            logger.error("error deleting service")
            return error_response(
                HTTPStatus.INTERNAL_SERVER_ERROR, "Error deleting service", 1006
            )
        return success_response(None, "Service deleted successfully", HTTPStatus.OK)

    def view_reports(self, request: Request) -> Response:
        limit, offset = get_pagination_params(request)
        try:
            reports = self.admin_service.view_reports(limit, offset)
        except Exception:
            logger.error("error fetching reports")
            return error_response(
                HTTPStatus.INTERNAL_SERVER_ERROR, "Error generating reports", 1006
            )
        page = apply_pagination(reports, limit, offset)
        return success_response(page, "Reports fetched successfully", HTTPStatus.OK)

    def deactivate_user_account(self, request: Request) -> Response:
        provider_id = request.path_params.get("providerID", "")
        try:
            self.admin_service.deactivate_account(provider_id)
        except Exception:
            logger.error("error deactivating account")
            return error_response(
                HTTPStatus.INTERNAL_SERVER_ERROR, "Error deactivating account", 1006
            )
        return success_response(None, "Account deactivated successfully", HTTPStatus.OK)

    def add_service(self, request: Request) -> Response:
        try:
            body = decode_body(request, _ADD_SERVICE_FIELDS)
        except ValidationError:
            logger.error("Invalid request body")
            return error_response(HTTPStatus.BAD_REQUEST, "Invalid request body", 1001)
        except ValueError:
            logger.error("Invalid input")
            return error_response(HTTPStatus.BAD_REQUEST, "Invalid input", 1001)
        try:
            self.admin_service.add_service(body["category_name"], body["description"])
        except Exception as exc:
            logger.error("error adding service")
            return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc), 1006)
        return success_response(None, "Service added successfully", HTTPStatus.OK)

    def view_user_detail(self, request: Request) -> Response:
        email = request.path_params.get("userEmail", "")
        try:
            user = self.admin_service.get_user_by_email(email)
        except Exception as exc:
            logger.error("error fetching user")
            return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc), 1003)
        detail = {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "address": user.address,
        }
        logger.info("User fetched successfully")
        return success_response(detail, "User fetch successfully", HTTPStatus.OK)