"""Receipt 规范化 -- 将单个 receipt 分解为六类关系行

流程：
1. classify_receipt 判定 ACTION / DATA
2. build_receipt_row 总是执行
3. 按类型二选一：
   - DATA:   extract_receipt_data
   - ACTION: extract_receipt_action + encode_actions + 输入/输出数据依赖边

所有函数均为纯函数，不持有跨调用状态，不同 receipt 可任意并行处理。
"""

from collections.abc import Iterable
from decimal import Decimal
from typing import assert_never

import structlog

from .actions import encode_actions
from .exceptions import AmountConversionError, KindMismatchError
from .models.amounts import u64_to_decimal, u128_to_decimal
from .models.enums import GasPricePolicy, ReceiptKind
from .models.rows import (
    Receipt,
    ReceiptAction,
    ReceiptActionInputData,
    ReceiptActionOutputData,
    ReceiptData,
    ReceiptRows,
)
from .models.views import (
    ActionReceiptView,
    DataReceiptView,
    ObservedReceipt,
    ReceiptView,
)

log = structlog.get_logger()


def classify_receipt(view: ReceiptView) -> ReceiptKind:
    """判定 receipt 类型（全函数，不会失败）"""
    match view.receipt:
        case ActionReceiptView():
            return ReceiptKind.ACTION
        case DataReceiptView():
            return ReceiptKind.DATA
        case _:
            assert_never(view.receipt)


def build_receipt_row(view: ReceiptView, block_height: int) -> Receipt:
    """构造 receipts 表行"""
    return Receipt(
        receipt_id=view.receipt_id,
        block_height=u64_to_decimal(block_height),
        predecessor_id=view.predecessor_id,
        receiver_id=view.receiver_id,
        receipt_kind=classify_receipt(view),
    )


def _require_data(view: ReceiptView) -> DataReceiptView:
    if not isinstance(view.receipt, DataReceiptView):
        raise KindMismatchError(
            view.receipt_id,
            expected=ReceiptKind.DATA,
            actual=classify_receipt(view),
        )
    return view.receipt


def _require_action(view: ReceiptView) -> ActionReceiptView:
    if not isinstance(view.receipt, ActionReceiptView):
        raise KindMismatchError(
            view.receipt_id,
            expected=ReceiptKind.ACTION,
            actual=classify_receipt(view),
        )
    return view.receipt


def _data_row(receipt_id: bytes, body: DataReceiptView) -> ReceiptData:
    return ReceiptData(data_id=body.data_id, receipt_id=receipt_id, data=body.data)


def _action_row(
    receipt_id: bytes,
    body: ActionReceiptView,
    gas_price_policy: GasPricePolicy,
) -> ReceiptAction:
    return ReceiptAction(
        receipt_id=receipt_id,
        signer_id=body.signer_id,
        signer_public_key=body.signer_public_key,
        gas_price=convert_gas_price(receipt_id, body.gas_price, gas_price_policy),
    )


def _output_rows(
    receipt_id: bytes,
    body: ActionReceiptView,
) -> list[ReceiptActionOutputData]:
    return [
        ReceiptActionOutputData(
            receipt_id=receipt_id,
            data_id=receiver.data_id,
            receiver_id=receiver.receiver_id,
        )
        for receiver in body.output_data_receivers
    ]


def _input_rows(
    receipt_id: bytes,
    body: ActionReceiptView,
) -> list[ReceiptActionInputData]:
    return [
        ReceiptActionInputData(receipt_id=receipt_id, data_id=data_id)
        for data_id in body.input_data_ids
    ]


def extract_receipt_data(view: ReceiptView) -> ReceiptData:
    """提取 DATA receipt 的数据行

    Raises:
        KindMismatchError: receipt 不是 DATA 类型
    """
    return _data_row(view.receipt_id, _require_data(view))


def convert_gas_price(
    receipt_id: bytes,
    gas_price: int,
    policy: GasPricePolicy = GasPricePolicy.ZERO,
) -> Decimal:
    """gas_price 转 Decimal

    超出 u128 范围时：
    - ZERO: 以 0 代替并记录 warning（得到的行语义错误，保留为历史兼容行为）
    - RAISE: 抛出 AmountConversionError
    """
    try:
        return u128_to_decimal(gas_price, field="gas_price")
    except AmountConversionError:
        if policy is GasPricePolicy.RAISE:
            raise
        log.warning(
            "gas_price_conversion_failed",
            receipt_id=receipt_id.hex(),
            gas_price=str(gas_price),
            substituted="0",
        )
        return Decimal(0)


def extract_receipt_action(
    view: ReceiptView,
    gas_price_policy: GasPricePolicy = GasPricePolicy.ZERO,
) -> ReceiptAction:
    """提取 ACTION receipt 的签名者与 gas 信息

    Raises:
        KindMismatchError: receipt 不是 ACTION 类型
        AmountConversionError: gas_price 越界且策略为 RAISE
    """
    return _action_row(view.receipt_id, _require_action(view), gas_price_policy)


def build_output_data_rows(view: ReceiptView) -> list[ReceiptActionOutputData]:
    """每个输出数据接收方一行"""
    return _output_rows(view.receipt_id, _require_action(view))


def build_input_data_rows(view: ReceiptView) -> list[ReceiptActionInputData]:
    """每个等待中的输入 data_id 一行（数据尚未到达，无 payload）"""
    return _input_rows(view.receipt_id, _require_action(view))


def normalize_receipt(
    view: ReceiptView,
    block_height: int,
    gas_price_policy: GasPricePolicy = GasPricePolicy.ZERO,
) -> ReceiptRows:
    """将单个 receipt 规范化为行集合

    receipts 行中的 receipt_kind 与下面选中的分支来自同一个 receipt 体，
    两者必然一致。
    """
    rows = ReceiptRows(receipts=[build_receipt_row(view, block_height)])
    receipt_id = view.receipt_id

    match view.receipt:
        case DataReceiptView() as body:
            rows.receipt_data.append(_data_row(receipt_id, body))
        case ActionReceiptView() as body:
            rows.receipt_actions.append(_action_row(receipt_id, body, gas_price_policy))
            rows.action_actions.extend(encode_actions(receipt_id, body.actions))
            rows.output_data.extend(_output_rows(receipt_id, body))
            rows.input_data.extend(_input_rows(receipt_id, body))
        case _:
            assert_never(view.receipt)

    return rows


def normalize_receipts(
    items: Iterable[ObservedReceipt],
    gas_price_policy: GasPricePolicy = GasPricePolicy.ZERO,
) -> ReceiptRows:
    """批量规范化，结果合并为一个 ReceiptRows"""
    batch = ReceiptRows()
    receipt_count = 0
    for item in items:
        batch.extend(normalize_receipt(item.receipt, item.block_height, gas_price_policy))
        receipt_count += 1

    log.debug(
        "receipts_normalized",
        receipt_count=receipt_count,
        row_count=batch.row_count(),
    )
    return batch
