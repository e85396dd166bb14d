"""Receipt 规范化异常体系"""

from typing import Any


class ReceiptError(Exception):
    """nearindexer.core 基础异常"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述
            recoverable: 调用方是否可以跳过该行继续处理
        """
        super().__init__(message)
        self.recoverable = recoverable


class KindMismatchError(ReceiptError):
    """对错误类型的 receipt 调用了按类型提取的函数

    属于调用方的契约错误：规范化流程按分类结果分派，不会触发此异常，
    因此不应暴露给最终用户。
    """

    def __init__(self, receipt_id: bytes, expected: str, actual: str) -> None:
        """
        Args:
            receipt_id: receipt 哈希
            expected: 提取函数要求的类型
            actual: receipt 的实际类型
        """
        super().__init__(
            f"receipt {receipt_id.hex()} 类型为 {actual}，期望 {expected}",
            recoverable=True,
        )
        self.receipt_id = receipt_id
        self.expected = expected
        self.actual = actual


class AmountConversionError(ReceiptError):
    """数额无法无损转换为 u128 十进制表示"""

    def __init__(self, field: str, value: Any) -> None:
        super().__init__(
            f"{field} 超出 u128 范围: {value!r}",
            recoverable=False,
        )
        self.field = field
        self.value = value
