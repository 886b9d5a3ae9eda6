"""Unit tests for OperationResult and OperationStatus."""

import pytest

from calinga.operations import OperationResult, OperationStatus

pytestmark = pytest.mark.unit


class TestOperationResultFactories:
    def test_success_minimal(self):
        result = OperationResult.success()
        assert result.status == OperationStatus.SUCCESS
        assert result.is_success
        assert result.message == "ok"

    def test_success_with_data(self):
        result = OperationResult.success(data={"a": "1"}, message="fetched")
        assert result.data == {"a": "1"}
        assert result.message == "fetched"

    def test_transient_error(self):
        result = OperationResult.transient_error("timeout", error_code="TIMEOUT")
        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "TIMEOUT"
        assert not result.is_success

    def test_permanent_error(self):
        result = OperationResult.permanent_error("bad", error_code="HTTP_400")
        assert result.status == OperationStatus.PERMANENT_ERROR
        assert not result.is_success

    def test_error_with_status(self):
        result = OperationResult.error(
            OperationStatus.NOT_FOUND, "missing", error_code="HTTP_404"
        )
        assert result.status == OperationStatus.NOT_FOUND
        assert result.data is None
