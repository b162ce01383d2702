"""
NSX Client - API Client

This module provides the transport adapter every NSX object manager funnels
its HTTP calls through.
"""

import base64
import json
import logging
import ssl
from datetime import datetime
from typing import Dict, Optional

import certifi
import httpx

from ..shared.constants import LOGGER_NAME, XML_CONTENT_TYPE
from .exceptions import (
    AuthenticationError,
    AuthorizationError,
    NetworkError,
    RemoteError,
    ResourceNotFoundError,
    ValidationError,
)
from .models import APIResponse, NSXConfig

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE")


class RequestResponseLogger:
    """Framework for logging API requests and responses with sensitive data protection."""

    def __init__(self, logger: logging.Logger):
        """Initialize request/response logger.

        Args:
            logger: Logger instance to use for logging
        """
        self.logger = logger

    def log_request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict] = None,
        body: Optional[str] = None,
        operation: str = "unknown"
    ):
        """Log API request details with sensitive data sanitization.

        Args:
            method: HTTP method
            url: Request URL
            headers: Request headers
            body: Request payload
            operation: Operation name for context
        """
        safe_headers = {}
        if headers:
            for key, value in headers.items():
                if key.lower() == 'authorization':
                    safe_headers[key] = '[REDACTED]'
                else:
                    safe_headers[key] = value

        log_data = {
            "operation": operation,
            "request": {
                "method": method,
                "url": url,
                "headers": safe_headers,
                "has_body": bool(body)
            }
        }

        self.logger.info(f"API Request: {json.dumps(log_data)}")
        if body:
            self.logger.debug(f"Payload is:\n{body}")

    def log_response(
        self,
        status_code: int,
        response_size: Optional[int] = None,
        duration_ms: Optional[float] = None,
        operation: str = "unknown",
        error: Optional[Exception] = None
    ):
        """Log API response details with performance metrics.

        Args:
            status_code: HTTP status code, 0 when no response was received
            response_size: Size of response in bytes
            duration_ms: Request duration in milliseconds
            operation: Operation name for context
            error: Exception if request failed
        """
        log_data = {
            "operation": operation,
            "response": {
                "status_code": status_code,
                "response_size": response_size,
                "duration_ms": duration_ms,
                "success": 200 <= status_code < 300,
                "has_error": bool(error)
            }
        }

        if error:
            log_data["error"] = str(error)

        level = logging.INFO if log_data["response"]["success"] else logging.WARNING
        self.logger.log(level, f"API Response: {json.dumps(log_data)}")


class NSXClient:
    """Client for the NSX manager REST API.

    One request per call: no retries, no backoff and no caching. Usable as a
    context manager to release the underlying connection pool.
    """

    def _create_ssl_context(self, verify_ssl: bool) -> ssl.SSLContext | bool:
        """
        Create SSL context with security hardening.

        Args:
            verify_ssl: Whether to verify SSL certificates

        Returns:
            Configured SSL context, or False when verification is disabled
        """
        if not verify_ssl:
            self.logger.warning(
                "SSL certificate verification is disabled for %s. "
                "Only use this against lab NSX managers with self-signed certificates.",
                self.base_url,
            )
            return False

        context = ssl.create_default_context(cafile=certifi.where())
        context.check_hostname = True
        context.verify_mode = ssl.CERT_REQUIRED
        context.minimum_version = ssl.TLSVersion.TLSv1_2

        self.logger.debug("SSL verification enabled with TLS 1.2+ enforcement")
        return context

    def __init__(
        self,
        config: NSXConfig,
        logger: Optional[logging.Logger] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize NSX API client.

        Args:
            config: Connection configuration
            logger: Logger used by this client and the managers built on it
            transport: Optional httpx transport, e.g. a mock in tests
        """
        self.config = config
        self.base_url = config.url
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        self.request_logger = RequestResponseLogger(self.logger)

        self.client = httpx.Client(
            verify=self._create_ssl_context(config.verify_ssl),
            timeout=httpx.Timeout(config.timeout),
            transport=transport,
        )

        auth_str = f"{config.username}:{config.password}"
        self.auth_header = base64.b64encode(auth_str.encode()).decode()

        self.logger.info(
            f"Initialized NSX client for {self.base_url} "
            f"(SSL verification: {'enabled' if config.verify_ssl else 'DISABLED'})"
        )

    def __enter__(self) -> "NSXClient":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        """Close the httpx client."""
        self.client.close()

    def request(
        self,
        method: str,
        endpoint: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[str] = None,
        operation: str = "api_request",
    ) -> APIResponse:
        """Send one request to the NSX manager.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API path (e.g., "/api/4.0/edges/edge-1/interfaces")
            headers: Extra request headers
            body: XML payload
            operation: Name of operation for logging/error context

        Returns:
            APIResponse unpacking as (status_code, body), headers as attribute

        Raises:
            ValidationError: For an unsupported method or empty endpoint
            AuthenticationError: If authentication fails (401)
            AuthorizationError: If authorization fails (403)
            ResourceNotFoundError: For not found errors (404)
            RemoteError: For any other non-2xx status
            NetworkError: If the manager cannot be reached
        """
        if not method or not endpoint:
            raise ValidationError("Method and endpoint are required",
                                  context={"method": method, "endpoint": endpoint})

        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValidationError(f"Unsupported HTTP method: {method}",
                                  context={"method": method})

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        request_headers = {
            "Authorization": f"Basic {self.auth_header}",
            "Accept": XML_CONTENT_TYPE,
        }
        if body is not None:
            request_headers["Content-Type"] = XML_CONTENT_TYPE
        if headers:
            request_headers.update(headers)

        self.request_logger.log_request(method, url, request_headers, body, operation)
        start_time = datetime.utcnow()

        try:
            response = self.client.request(
                method,
                url,
                headers=request_headers,
                content=body.encode("utf-8") if body is not None else None,
            )
        except httpx.ConnectError as e:
            duration_ms = (datetime.utcnow() - start_time).total_seconds() * 1000
            self.request_logger.log_response(0, 0, duration_ms, operation, e)
            raise NetworkError(f"Cannot connect to NSX manager at {self.base_url}",
                               context={"base_url": self.base_url, "endpoint": endpoint,
                                        "error": str(e)}) from e
        except httpx.RequestError as e:
            duration_ms = (datetime.utcnow() - start_time).total_seconds() * 1000
            self.request_logger.log_response(0, 0, duration_ms, operation, e)
            raise NetworkError(f"Network error: {str(e)}",
                               context={"endpoint": endpoint, "error": str(e)}) from e

        duration_ms = (datetime.utcnow() - start_time).total_seconds() * 1000
        response_size = len(response.content) if response.content else 0
        self.request_logger.log_response(response.status_code, response_size, duration_ms,
                                         operation)

        context = {"status_code": response.status_code, "endpoint": endpoint, "method": method}
        if response.status_code == 401:
            raise AuthenticationError("Authentication failed - invalid NSX credentials",
                                      status_code=401, response_text=response.text,
                                      context=context)
        elif response.status_code == 403:
            raise AuthorizationError("Access denied - insufficient permissions",
                                     status_code=403, response_text=response.text,
                                     context=context)
        elif response.status_code == 404:
            raise ResourceNotFoundError(f"Resource not found: {endpoint}",
                                        status_code=404, response_text=response.text,
                                        context=context)
        elif not (200 <= response.status_code < 300):
            raise RemoteError(f"API error during {operation}: {response.status_code}",
                              status_code=response.status_code,
                              response_text=response.text,
                              context=context)

        return APIResponse(response.status_code, response.text, dict(response.headers))

    def get(self, endpoint: str, operation: str = "get") -> APIResponse:
        return self.request("GET", endpoint, operation=operation)

    def post(self, endpoint: str, body: str, operation: str = "post") -> APIResponse:
        return self.request("POST", endpoint, body=body, operation=operation)

    def put(self, endpoint: str, body: str, operation: str = "put") -> APIResponse:
        return self.request("PUT", endpoint, body=body, operation=operation)

    def delete(self, endpoint: str, operation: str = "delete") -> APIResponse:
        return self.request("DELETE", endpoint, operation=operation)
