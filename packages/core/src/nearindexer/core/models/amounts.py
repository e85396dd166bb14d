"""无符号整数类型与十进制转换

u128 数额（deposit / stake / gas_price）在 Python 中以 int 精确表示，
写入存储前转换为 Decimal；Decimal(int) 构造本身是精确的，不受上下文精度影响。
"""

from decimal import Decimal
from typing import Annotated

from pydantic import Field

from ..exceptions import AmountConversionError

U64_MAX: int = 2**64 - 1
U128_MAX: int = 2**128 - 1

# JSON 中的 u128 通常以十进制字符串传输，pydantic lax 模式可直接解析
U64 = Annotated[int, Field(ge=0, le=U64_MAX)]
U128 = Annotated[int, Field(ge=0, le=U128_MAX)]


def u128_to_decimal(value: int, field: str = "amount") -> Decimal:
    """将 u128 整数转换为 Decimal

    Raises:
        AmountConversionError: 值不是 [0, 2**128) 范围内的整数
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise AmountConversionError(field, value)
    if not 0 <= value <= U128_MAX:
        raise AmountConversionError(field, value)
    return Decimal(value)


def u64_to_decimal(value: int) -> Decimal:
    """block_height 等 u64 值转 Decimal"""
    return Decimal(value)
