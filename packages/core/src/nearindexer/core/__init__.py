"""nearindexer Core -- receipt 规范化

将 receipt 视图分解为六类 append-only 关系行。
"""

from .actions import action_args, encode_action, encode_actions
from .exceptions import AmountConversionError, KindMismatchError, ReceiptError
from .normalizer import (
    build_input_data_rows,
    build_output_data_rows,
    build_receipt_row,
    classify_receipt,
    convert_gas_price,
    extract_receipt_action,
    extract_receipt_data,
    normalize_receipt,
    normalize_receipts,
)

__all__ = [
    "classify_receipt",
    "build_receipt_row",
    "extract_receipt_data",
    "extract_receipt_action",
    "convert_gas_price",
    "action_args",
    "encode_action",
    "encode_actions",
    "build_output_data_rows",
    "build_input_data_rows",
    "normalize_receipt",
    "normalize_receipts",
    "ReceiptError",
    "KindMismatchError",
    "AmountConversionError",
]
