"""packages/core 测试配置 -- receipt 视图工厂 fixture"""

from collections.abc import Callable
from typing import Any

import pytest
from nearindexer.core.models import (
    ActionReceiptView,
    DataReceiptView,
    DataReceiverView,
    ReceiptView,
)


def _hash(n: int) -> bytes:
    return n.to_bytes(32, "big")


@pytest.fixture
def make_hash() -> Callable[[int], bytes]:
    """确定性 32 字节哈希：make_hash(1) -> 0x00..01"""
    return _hash


@pytest.fixture
def make_action_receipt() -> Callable[..., ReceiptView]:
    """ACTION receipt 工厂"""

    def _make(
        receipt_no: int = 1,
        actions: list[Any] | None = None,
        output_data_receivers: list[tuple[int, str]] | None = None,
        input_data_ids: list[int] | None = None,
        gas_price: int = 100_000_000,
    ) -> ReceiptView:
        return ReceiptView(
            receipt_id=_hash(receipt_no),
            predecessor_id="alice.near",
            receiver_id="contract.near",
            receipt=ActionReceiptView(
                signer_id="alice.near",
                signer_public_key="ed25519:8hSHprDq2StXwMtNd43wDTXQYsjXcD4MJTXQYsjXcc",
                gas_price=gas_price,
                actions=actions or [],
                output_data_receivers=[
                    DataReceiverView(data_id=_hash(data_no), receiver_id=receiver_id)
                    for data_no, receiver_id in (output_data_receivers or [])
                ],
                input_data_ids=[_hash(n) for n in (input_data_ids or [])],
            ),
        )

    return _make


@pytest.fixture
def make_data_receipt() -> Callable[..., ReceiptView]:
    """DATA receipt 工厂"""

    def _make(
        receipt_no: int = 2,
        data_no: int = 100,
        data: bytes | None = b"result",
    ) -> ReceiptView:
        return ReceiptView(
            receipt_id=_hash(receipt_no),
            predecessor_id="contract.near",
            receiver_id="alice.near",
            receipt=DataReceiptView(data_id=_hash(data_no), data=data),
        )

    return _make
