"""Tests for the HTTP status catalog and HTTP errors."""

import pytest

from errorkit.taxonomy import ClientError, HttpError, HttpStatus, ServerError, Severity, StatusClass


class TestHttpStatusCatalog:
    def test_lookup_known_code(self):
        assert HttpStatus.lookup(404) is HttpStatus.NOT_FOUND
        assert HttpStatus.from_code(503) is HttpStatus.SERVICE_UNAVAILABLE

    def test_lookup_is_total_over_catalog(self):
        for status in HttpStatus:
            assert HttpStatus.from_code(status.code) is status

    def test_unknown_code(self):
        assert HttpStatus.lookup(299) is None
        with pytest.raises(ValueError):
            HttpStatus.from_code(299)

    def test_str(self):
        assert str(HttpStatus.NOT_FOUND) == "404 Not Found"

    @pytest.mark.parametrize(
        ("status", "status_class"),
        [
            (HttpStatus.CONTINUE, StatusClass.INFORMATIONAL),
            (HttpStatus.OK, StatusClass.SUCCESS),
            (HttpStatus.lookup(301), StatusClass.REDIRECTION),
            (HttpStatus.BAD_REQUEST, StatusClass.CLIENT_ERROR),
            (HttpStatus.INTERNAL_SERVER_ERROR, StatusClass.SERVER_ERROR),
        ],
    )
    def test_status_class(self, status, status_class):
        assert status.status_class is status_class

    def test_predicates(self):
        assert HttpStatus.NOT_FOUND.is_client_error()
        assert HttpStatus.NOT_FOUND.is_error()
        assert not HttpStatus.OK.is_error()
        assert HttpStatus.OK.is_success()
        assert HttpStatus.BAD_GATEWAY.is_server_error()


class TestHttpError:
    def test_message_prefix_and_code(self):
        error = HttpError(HttpStatus.NOT_FOUND, "User missing")
        assert error.message == "[404 Not Found] User missing"
        assert error.raw_message == "User missing"
        assert error.error_code == "HTTP_404_NOT_FOUND"
        assert error.status_code == 404

    def test_message_without_text(self):
        assert HttpError(418).message == "[418 I'm a teapot]"

    def test_code_normalizes_reason(self):
        assert HttpError(418).error_code == "HTTP_418_I_M_A_TEAPOT"

    def test_default_context(self):
        error = HttpError(HttpStatus.SERVICE_UNAVAILABLE)
        assert error.context.get("statusCode") == 503
        assert error.context.get("reasonPhrase") == "Service Unavailable"
        assert error.context.get("statusClass") == "Server Error"
        assert error.context.get_metadata("httpCategory") == "HTTP"
        assert error.context.get_metadata("severity") == "HIGH"

    @pytest.mark.parametrize(
        ("code", "severity"),
        [(400, Severity.MEDIUM), (404, Severity.MEDIUM), (500, Severity.HIGH), (302, Severity.LOW)],
    )
    def test_severity_by_class(self, code, severity):
        assert HttpError(code).severity is severity

    def test_unknown_code_rejected(self):
        with pytest.raises(ValueError):
            HttpError(999)


class TestStatusRangePreconditions:
    @pytest.mark.parametrize("code", [200, 302, 500, 503])
    def test_client_error_rejects_non_4xx(self, code):
        with pytest.raises(ValueError):
            ClientError(code, "nope")

    @pytest.mark.parametrize("code", [200, 400, 404, 429])
    def test_server_error_rejects_non_5xx(self, code):
        with pytest.raises(ValueError):
            ServerError(code, "nope")

    def test_valid_ranges_accepted(self):
        assert ClientError(409, "x").is_client_error()
        assert ServerError(HttpStatus.BAD_GATEWAY, "x").is_server_error()


class TestClientErrorFactories:
    def test_bad_request_with_field(self):
        error = ClientError.bad_request("Invalid age", "age", -1)
        assert error.status is HttpStatus.BAD_REQUEST
        assert error.context.get("invalidField") == "age"
        assert error.context.get("invalidValue") == -1

    def test_bad_request_keeps_default_context_without_field(self):
        error = ClientError.bad_request("Invalid")
        assert error.context.get("statusCode") == 400

    def test_unauthorized(self):
        error = ClientError.unauthorized("Login required", "Bearer")
        assert error.status_code == 401
        assert error.context.get("authScheme") == "Bearer"

    def test_forbidden(self):
        error = ClientError.forbidden("No access", "reports", "reports.read")
        assert error.status_code == 403
        assert error.context.get("requiredPermission") == "reports.read"

    def test_not_found_resource(self):
        error = ClientError.not_found("User", "42")
        assert error.message == "[404 Not Found] User with ID '42' not found"
        assert error.context.get("resourceId") == "42"

    def test_conflict(self):
        assert ClientError.conflict("Duplicate").status is HttpStatus.CONFLICT

    def test_too_many_requests(self):
        error = ClientError.too_many_requests("Slow down", 30)
        assert error.status_code == 429
        assert error.context.get("retryAfterSeconds") == 30


class TestServerErrorFactories:
    def test_internal_server_error_with_cause(self):
        cause = RuntimeError("db down")
        error = ServerError.internal_server_error("Unexpected failure", cause)
        assert error.status_code == 500
        assert error.cause is cause

    def test_internal_server_error_component(self):
        error = ServerError.internal_server_error("checkout", component="billing")
        assert error.context.get("component") == "billing"
        assert "billing" in error.message

    def test_not_implemented(self):
        assert ServerError.not_implemented("export").status_code == 501

    def test_bad_gateway(self):
        error = ServerError.bad_gateway("payments")
        assert error.status_code == 502
        assert error.context.get("upstreamService") == "payments"

    def test_service_unavailable(self):
        error = ServerError.service_unavailable("search", 60)
        assert error.status_code == 503
        assert "retry after 60 seconds" in error.message

    def test_gateway_timeout(self):
        error = ServerError.gateway_timeout("inventory", 5)
        assert error.status_code == 504
        assert error.context.get("timeoutSeconds") == 5

    def test_to_dict_includes_status_code(self):
        assert ServerError(500).to_dict()["status_code"] == 500
