"""枚举定义

包含 ReceiptKind、ActionKind 两个封闭枚举（值与 receipt_type / action_type
数据库枚举一致），以及 gas_price 转换失败时的处理策略 GasPricePolicy。
"""

from enum import StrEnum


class ReceiptKind(StrEnum):
    """Receipt 类型 -- 二选一，没有第三种"""

    ACTION = "ACTION"
    DATA = "DATA"


class ActionKind(StrEnum):
    """Action 类型 -- 8 个封闭变体，不提供扩展点"""

    CREATE_ACCOUNT = "CREATE_ACCOUNT"
    DEPLOY_CONTRACT = "DEPLOY_CONTRACT"
    FUNCTION_CALL = "FUNCTION_CALL"
    TRANSFER = "TRANSFER"
    STAKE = "STAKE"
    ADD_KEY = "ADD_KEY"
    DELETE_KEY = "DELETE_KEY"
    DELETE_ACCOUNT = "DELETE_ACCOUNT"


class GasPricePolicy(StrEnum):
    """gas_price 超出 u128 范围时的处理策略

    - zero: 写入 0 并记录 warning（历史行为，结果行语义错误）
    - raise: 抛出 AmountConversionError，由集成方决定
    """

    ZERO = "zero"
    RAISE = "raise"
