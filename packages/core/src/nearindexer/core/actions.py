"""Action 列表编码 -- 每个 action 变体展开为一行 receipt_action_actions

8 个变体各自对应固定的 args key 集合：

    CreateAccount  -> {}
    DeployContract -> {code}
    FunctionCall   -> {method_name, args, gas, deposit}
    Transfer       -> {deposit}
    Stake          -> {stake, public_key}
    AddKey         -> {public_key, access_key}
    DeleteKey      -> {public_key}
    DeleteAccount  -> {beneficiary_id}

deposit / stake 可能超过 JSON 客户端的安全整数范围（2**53），一律编码为
十进制字符串；其余字段原样透传。变体集合封闭，match 穷举，不设兜底分支。
"""

from collections.abc import Sequence
from typing import Any, assert_never

from .models.enums import ActionKind
from .models.rows import ReceiptActionAction
from .models.views import (
    ActionView,
    AddKeyAction,
    CreateAccountAction,
    DeleteAccountAction,
    DeleteKeyAction,
    DeployContractAction,
    FunctionCallAction,
    StakeAction,
    TransferAction,
)


def action_args(action: ActionView) -> tuple[ActionKind, dict[str, Any]]:
    """计算单个 action 的 (action_kind, args)"""
    match action:
        case CreateAccountAction():
            return ActionKind.CREATE_ACCOUNT, {}
        case DeployContractAction(code=code):
            return ActionKind.DEPLOY_CONTRACT, {"code": code}
        case FunctionCallAction(
            method_name=method_name, args=args, gas=gas, deposit=deposit
        ):
            return ActionKind.FUNCTION_CALL, {
                "method_name": method_name,
                "args": args,
                "gas": gas,
                "deposit": str(deposit),
            }
        case TransferAction(deposit=deposit):
            return ActionKind.TRANSFER, {"deposit": str(deposit)}
        case StakeAction(stake=stake, public_key=public_key):
            return ActionKind.STAKE, {
                "stake": str(stake),
                "public_key": public_key,
            }
        case AddKeyAction(public_key=public_key, access_key=access_key):
            return ActionKind.ADD_KEY, {
                "public_key": public_key,
                "access_key": access_key,
            }
        case DeleteKeyAction(public_key=public_key):
            return ActionKind.DELETE_KEY, {"public_key": public_key}
        case DeleteAccountAction(beneficiary_id=beneficiary_id):
            return ActionKind.DELETE_ACCOUNT, {"beneficiary_id": beneficiary_id}
        case _:
            assert_never(action)


def encode_action(
    receipt_id: bytes,
    index: int,
    action: ActionView,
) -> ReceiptActionAction:
    """将单个 action 编码为一行

    Args:
        receipt_id: 所属 receipt 哈希
        index: action 在原列表中的位置（从 0 开始）
        action: action 变体
    """
    action_kind, args = action_args(action)
    return ReceiptActionAction(
        receipt_id=receipt_id,
        index=index,
        action_kind=action_kind,
        args=args,
    )


def encode_actions(
    receipt_id: bytes,
    actions: Sequence[ActionView],
) -> list[ReceiptActionAction]:
    """按原始顺序编码 action 列表，index 取自位置而非完成顺序"""
    return [
        encode_action(receipt_id, index, action)
        for index, action in enumerate(actions)
    ]
