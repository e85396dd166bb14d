"""Action 编码单元测试

测试内容：
1. 8 个变体的 action_kind 与 args key 集合
2. deposit / stake 以十进制字符串编码，u128 最大值无精度损失
3. encode_actions 的 index 连续且保持原始顺序
"""

import json

import pytest
from nearindexer.core.actions import action_args, encode_action, encode_actions
from nearindexer.core.models import (
    U128_MAX,
    ActionKind,
    AddKeyAction,
    CreateAccountAction,
    DeleteAccountAction,
    DeleteKeyAction,
    DeployContractAction,
    FunctionCallAction,
    StakeAction,
    TransferAction,
)

RECEIPT_ID = bytes.fromhex("11" * 32)
ACCESS_KEY = {
    "nonce": 0,
    "permission": {
        "FunctionCall": {
            "allowance": "250000000000000000000000",
            "receiver_id": "app.near",
            "method_names": ["vote"],
        }
    },
}

ALL_VARIANTS = [
    (CreateAccountAction(), ActionKind.CREATE_ACCOUNT, set()),
    (DeployContractAction(code="AGFzbQ=="), ActionKind.DEPLOY_CONTRACT, {"code"}),
    (
        FunctionCallAction(method_name="vote", args="e30=", gas=30, deposit=0),
        ActionKind.FUNCTION_CALL,
        {"method_name", "args", "gas", "deposit"},
    ),
    (TransferAction(deposit=5), ActionKind.TRANSFER, {"deposit"}),
    (
        StakeAction(stake=7, public_key="ed25519:stake"),
        ActionKind.STAKE,
        {"stake", "public_key"},
    ),
    (
        AddKeyAction(public_key="ed25519:new", access_key=ACCESS_KEY),
        ActionKind.ADD_KEY,
        {"public_key", "access_key"},
    ),
    (DeleteKeyAction(public_key="ed25519:old"), ActionKind.DELETE_KEY, {"public_key"}),
    (
        DeleteAccountAction(beneficiary_id="heir.near"),
        ActionKind.DELETE_ACCOUNT,
        {"beneficiary_id"},
    ),
]


class TestActionArgs:
    """变体 -> (action_kind, args) 映射测试"""

    @pytest.mark.parametrize(("action", "kind", "keys"), ALL_VARIANTS)
    def test_kind_and_key_set(self, action, kind, keys):
        action_kind, args = action_args(action)
        assert action_kind == kind
        assert set(args) == keys

    def test_key_sets_are_distinct(self):
        """不同变体的 args key 集合互不相同"""
        key_sets = [frozenset(action_args(action)[1]) for action, _, _ in ALL_VARIANTS]
        assert len(set(key_sets)) == len(ALL_VARIANTS)

    def test_every_action_kind_covered(self):
        assert {kind for _, kind, _ in ALL_VARIANTS} == set(ActionKind)

    def test_function_call_scenario(self):
        """gas 保持数字，deposit 为字符串"""
        action = FunctionCallAction(
            method_name="ft_transfer",
            args="eyJyZWNlaXZlcl9pZCI6ImJvYi5uZWFyIn0=",
            gas=300000000000000,
            deposit=1,
        )
        _, args = action_args(action)
        assert args == {
            "method_name": "ft_transfer",
            "args": "eyJyZWNlaXZlcl9pZCI6ImJvYi5uZWFyIn0=",
            "gas": 300000000000000,
            "deposit": "1",
        }

    def test_transfer_max_u128_exact(self):
        """u128 最大值逐位保留，不经过浮点"""
        _, args = action_args(TransferAction(deposit=U128_MAX))
        assert args == {"deposit": "340282366920938463463374607431768211455"}

    def test_stake_is_string(self):
        _, args = action_args(StakeAction(stake=U128_MAX, public_key="ed25519:k"))
        assert args["stake"] == str(U128_MAX)
        assert args["public_key"] == "ed25519:k"

    def test_access_key_copied_structurally(self):
        _, args = action_args(AddKeyAction(public_key="ed25519:new", access_key=ACCESS_KEY))
        assert args["access_key"] == ACCESS_KEY

    def test_amounts_recoverable_after_json_roundtrip(self):
        """JSON 往返后 deposit / stake 可精确还原为原始整数"""
        actions = [
            FunctionCallAction(method_name="m", args="", gas=1, deposit=U128_MAX),
            TransferAction(deposit=U128_MAX),
            StakeAction(stake=U128_MAX - 1, public_key="ed25519:k"),
        ]
        decoded = [json.loads(json.dumps(action_args(a)[1])) for a in actions]
        assert int(decoded[0]["deposit"]) == U128_MAX
        assert decoded[0]["gas"] == 1
        assert int(decoded[1]["deposit"]) == U128_MAX
        assert int(decoded[2]["stake"]) == U128_MAX - 1

    @pytest.mark.parametrize(("action", "kind", "keys"), ALL_VARIANTS)
    def test_every_variant_rebuilt_from_json_args(self, action, kind, keys):
        """args 经 JSON 往返后可重建出字段相同的 action"""
        decoded = json.loads(json.dumps(action_args(action)[1]))
        for field in ("deposit", "stake"):
            if field in decoded:
                decoded[field] = int(decoded[field])
        assert type(action)(**decoded) == action


class TestEncodeActions:
    """ReceiptActionAction 行构造测试"""

    def test_encode_single_action(self):
        row = encode_action(RECEIPT_ID, 3, DeleteAccountAction(beneficiary_id="heir.near"))
        assert row.receipt_id == RECEIPT_ID
        assert row.index == 3
        assert row.action_kind == ActionKind.DELETE_ACCOUNT
        assert row.args == {"beneficiary_id": "heir.near"}

    def test_indices_contiguous_in_original_order(self):
        actions = [action for action, _, _ in ALL_VARIANTS]
        rows = encode_actions(RECEIPT_ID, actions)
        assert [row.index for row in rows] == list(range(len(actions)))
        assert [row.action_kind for row in rows] == [kind for _, kind, _ in ALL_VARIANTS]
        assert all(row.receipt_id == RECEIPT_ID for row in rows)

    def test_empty_action_list(self):
        assert encode_actions(RECEIPT_ID, []) == []

    def test_duplicate_actions_keep_distinct_indices(self):
        rows = encode_actions(RECEIPT_ID, [TransferAction(deposit=1)] * 3)
        assert [row.index for row in rows] == [0, 1, 2]
        assert rows[0].args == rows[2].args
