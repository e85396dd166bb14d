"""规范化输出行 -- 六张 append-only 表各对应一个行模型

所有行一经生成即不可变（frozen），本包不提供更新或删除路径。
同一 receipt 重复处理必须得到完全相同的行。
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .enums import ActionKind, ReceiptKind
from .views import CryptoHash, DataBlob


class _Row(BaseModel):
    model_config = ConfigDict(frozen=True)


class Receipt(_Row):
    """receipts 表行 -- 其余五张表都通过 receipt_id 引用它"""

    receipt_id: CryptoHash = Field(description="receipt 哈希，全局唯一")
    block_height: Decimal = Field(description="区块高度（任意精度）")
    predecessor_id: str
    receiver_id: str
    receipt_kind: ReceiptKind


class ReceiptData(_Row):
    """receipt_data 表行 -- 仅 DATA 类型 receipt 存在"""

    data_id: CryptoHash
    receipt_id: CryptoHash
    data: DataBlob | None = Field(default=None, description="None 表示未附带数据")


class ReceiptAction(_Row):
    """receipt_actions 表行 -- 仅 ACTION 类型 receipt 存在，每个 receipt 至多一行"""

    receipt_id: CryptoHash
    signer_id: str
    signer_public_key: str
    gas_price: Decimal = Field(description="gas 单价（u128 精度）")


class ReceiptActionAction(_Row):
    """receipt_action_actions 表行

    index 在同一 receipt 内从 0 开始连续递增，与原始 action 顺序一致。
    args 的 key 集合完全由 action_kind 决定。
    """

    receipt_id: CryptoHash
    index: int = Field(ge=0)
    action_kind: ActionKind
    args: dict[str, Any] = Field(default_factory=dict)


class ReceiptActionInputData(_Row):
    """receipt_action_input_data 表行 -- receipt 等待的输入数据"""

    receipt_id: CryptoHash
    data_id: CryptoHash


class ReceiptActionOutputData(_Row):
    """receipt_action_output_data 表行 -- receipt 将产生的输出数据及其接收方"""

    receipt_id: CryptoHash
    data_id: CryptoHash
    receiver_id: str


class ReceiptRows(BaseModel):
    """一批 receipt 的规范化结果，交付给存储层

    各行族之间相互独立、顺序无关；receipt_action_actions 保留
    每个 receipt 内部的 index 顺序。
    """

    receipts: list[Receipt] = Field(default_factory=list)
    receipt_data: list[ReceiptData] = Field(default_factory=list)
    receipt_actions: list[ReceiptAction] = Field(default_factory=list)
    action_actions: list[ReceiptActionAction] = Field(default_factory=list)
    input_data: list[ReceiptActionInputData] = Field(default_factory=list)
    output_data: list[ReceiptActionOutputData] = Field(default_factory=list)

    def extend(self, other: "ReceiptRows") -> None:
        """追加另一批结果（就地修改）"""
        self.receipts.extend(other.receipts)
        self.receipt_data.extend(other.receipt_data)
        self.receipt_actions.extend(other.receipt_actions)
        self.action_actions.extend(other.action_actions)
        self.input_data.extend(other.input_data)
        self.output_data.extend(other.output_data)

    def row_count(self) -> int:
        return (
            len(self.receipts)
            + len(self.receipt_data)
            + len(self.receipt_actions)
            + len(self.action_actions)
            + len(self.input_data)
            + len(self.output_data)
        )
