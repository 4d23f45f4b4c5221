"""
Order services: operation ids, order printing and the test order workflow.
"""

from .operation_ids import OperationIdGenerator
from .printer import OrderPrinter
from .workflow import OrdersWorkflow, WorkflowResult

__all__ = ["OperationIdGenerator", "OrderPrinter", "OrdersWorkflow", "WorkflowResult"]
