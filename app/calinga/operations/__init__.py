"""Operation result types and status enums."""

from calinga.operations.result import OperationResult
from calinga.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
]
