"""nearindexer Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .amounts import U64, U64_MAX, U128, U128_MAX, u64_to_decimal, u128_to_decimal
from .enums import ActionKind, GasPricePolicy, ReceiptKind
from .rows import (
    Receipt,
    ReceiptAction,
    ReceiptActionAction,
    ReceiptActionInputData,
    ReceiptActionOutputData,
    ReceiptData,
    ReceiptRows,
)
from .views import (
    ActionReceiptView,
    ActionView,
    AddKeyAction,
    CreateAccountAction,
    CryptoHash,
    DataBlob,
    DataReceiptView,
    DataReceiverView,
    DeleteAccountAction,
    DeleteKeyAction,
    DeployContractAction,
    FunctionCallAction,
    ObservedReceipt,
    ReceiptView,
    StakeAction,
    TransferAction,
)

__all__ = [
    # 枚举
    "ReceiptKind",
    "ActionKind",
    "GasPricePolicy",
    # 数额
    "U64",
    "U128",
    "U64_MAX",
    "U128_MAX",
    "u64_to_decimal",
    "u128_to_decimal",
    # 输入视图
    "CryptoHash",
    "DataBlob",
    "ReceiptView",
    "ObservedReceipt",
    "ActionReceiptView",
    "DataReceiptView",
    "DataReceiverView",
    "ActionView",
    "CreateAccountAction",
    "DeployContractAction",
    "FunctionCallAction",
    "TransferAction",
    "StakeAction",
    "AddKeyAction",
    "DeleteKeyAction",
    "DeleteAccountAction",
    # 输出行
    "Receipt",
    "ReceiptData",
    "ReceiptAction",
    "ReceiptActionAction",
    "ReceiptActionInputData",
    "ReceiptActionOutputData",
    "ReceiptRows",
]
