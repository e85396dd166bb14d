"""Receipt 输入视图 -- 上游流式数据源交付的 receipt 结构

两层封闭 tagged union：
- receipt 体：Action / Data
- Action 列表元素：8 种 action 变体

判别字段统一为 kind。上游 JSON 使用外部标签形式
（"CreateAccount"、{"Transfer": {...}}、{"Action": {...}}），
在字段校验前转换为内部标签形式。
"""

import base64
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
)

from .amounts import U64, U128

HASH_SIZE = 32


def _hash_from_hex(value: Any) -> Any:
    if isinstance(value, str):
        return bytes.fromhex(value)
    return value


def _blob_from_base64(value: Any) -> Any:
    if isinstance(value, str):
        return base64.b64decode(value, validate=True)
    return value


# 32 字节哈希：Python 侧为 bytes，JSON 侧为 hex 字符串
CryptoHash = Annotated[
    bytes,
    Field(min_length=HASH_SIZE, max_length=HASH_SIZE),
    BeforeValidator(_hash_from_hex),
    PlainSerializer(lambda v: v.hex(), return_type=str, when_used="json"),
]

# 不透明字节负载：JSON 侧为 base64 字符串
DataBlob = Annotated[
    bytes,
    BeforeValidator(_blob_from_base64),
    PlainSerializer(
        lambda v: base64.b64encode(v).decode("ascii"),
        return_type=str,
        when_used="json",
    ),
]


class _View(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- Action 变体 ---


class CreateAccountAction(_View):
    kind: Literal["CreateAccount"] = "CreateAccount"


class DeployContractAction(_View):
    kind: Literal["DeployContract"] = "DeployContract"
    code: str = Field(description="合约代码（base64 文本，原样透传）")


class FunctionCallAction(_View):
    kind: Literal["FunctionCall"] = "FunctionCall"
    method_name: str
    args: str = Field(description="调用参数（base64 文本，原样透传）")
    gas: U64
    deposit: U128


class TransferAction(_View):
    kind: Literal["Transfer"] = "Transfer"
    deposit: U128


class StakeAction(_View):
    kind: Literal["Stake"] = "Stake"
    stake: U128
    public_key: str


class AddKeyAction(_View):
    kind: Literal["AddKey"] = "AddKey"
    public_key: str
    access_key: dict[str, Any] = Field(
        description="access key 描述（nonce + permission），结构化透传",
    )


class DeleteKeyAction(_View):
    kind: Literal["DeleteKey"] = "DeleteKey"
    public_key: str


class DeleteAccountAction(_View):
    kind: Literal["DeleteAccount"] = "DeleteAccount"
    beneficiary_id: str


ActionView = Annotated[
    CreateAccountAction
    | DeployContractAction
    | FunctionCallAction
    | TransferAction
    | StakeAction
    | AddKeyAction
    | DeleteKeyAction
    | DeleteAccountAction,
    Field(discriminator="kind"),
]

ACTION_VARIANTS: frozenset[str] = frozenset(
    {
        "CreateAccount",
        "DeployContract",
        "FunctionCall",
        "Transfer",
        "Stake",
        "AddKey",
        "DeleteKey",
        "DeleteAccount",
    }
)

RECEIPT_VARIANTS: frozenset[str] = frozenset({"Action", "Data"})


def untag(value: Any, variants: frozenset[str]) -> Any:
    """外部标签 -> 内部标签

    "CreateAccount"              -> {"kind": "CreateAccount"}
    {"Transfer": {"deposit": 1}} -> {"kind": "Transfer", "deposit": 1}

    无法识别的输入原样返回，交给判别联合校验报错。
    """
    if isinstance(value, str) and value in variants:
        return {"kind": value}
    if isinstance(value, dict) and "kind" not in value and len(value) == 1:
        ((name, body),) = value.items()
        if name in variants:
            if body is None:
                return {"kind": name}
            if isinstance(body, dict):
                return {"kind": name, **body}
    return value


# --- Receipt 体 ---


class DataReceiverView(_View):
    """输出数据接收方：本 receipt 执行后将产生的 data receipt"""

    data_id: CryptoHash
    receiver_id: str


class DataReceiptView(_View):
    kind: Literal["Data"] = "Data"
    data_id: CryptoHash
    # None 表示未附带数据，与空字节 b"" 语义不同
    data: DataBlob | None = None


class ActionReceiptView(_View):
    kind: Literal["Action"] = "Action"
    signer_id: str
    signer_public_key: str
    gas_price: int = Field(
        description="u128 gas 单价；范围在转换为 Decimal 时检查",
    )
    actions: list[ActionView] = Field(default_factory=list)
    output_data_receivers: list[DataReceiverView] = Field(default_factory=list)
    input_data_ids: list[CryptoHash] = Field(default_factory=list)

    @field_validator("actions", mode="before")
    @classmethod
    def _untag_actions(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [untag(item, ACTION_VARIANTS) for item in value]
        return value


class ReceiptView(_View):
    """单个 receipt 的输入视图"""

    receipt_id: CryptoHash
    predecessor_id: str
    receiver_id: str
    receipt: Annotated[
        ActionReceiptView | DataReceiptView,
        Field(discriminator="kind"),
    ]

    @field_validator("receipt", mode="before")
    @classmethod
    def _untag_receipt(cls, value: Any) -> Any:
        return untag(value, RECEIPT_VARIANTS)


class ObservedReceipt(_View):
    """receipt + 外部提供的区块高度（JSONL 输入的一行）"""

    block_height: U64
    receipt: ReceiptView
