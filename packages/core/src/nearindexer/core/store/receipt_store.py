"""ReceiptStore SQLite 实现

六张表均 append-only：只插入，不更新或删除。
INSERT OR IGNORE 保证同一 receipt 重复写入幂等（重复处理得到的行完全相同）。
"""

import json
from decimal import Decimal

import aiosqlite

from ..models.enums import ActionKind, ReceiptKind
from ..models.rows import (
    Receipt,
    ReceiptAction,
    ReceiptActionAction,
    ReceiptActionInputData,
    ReceiptActionOutputData,
    ReceiptData,
    ReceiptRows,
)
from .sqlite_init import TABLES


class SqliteReceiptStore:
    """ReceiptSink 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def insert_rows(self, rows: ReceiptRows) -> None:
        """写入一批规范化行

        写入顺序满足外键依赖：receipts -> receipt_actions -> 其余。
        receipt_action_actions 按传入顺序写入，保留每个 receipt 内的 index 顺序。
        注意：此方法不自动提交事务，需由调用方管理事务。
        """
        await self._conn.executemany(
            """
            INSERT OR IGNORE INTO receipts (receipt_id, block_height, predecessor_id,
                                            receiver_id, receipt_kind)
            VALUES (?, ?, ?, ?, ?)
            """,
            [
                (
                    r.receipt_id,
                    str(r.block_height),
                    r.predecessor_id,
                    r.receiver_id,
                    r.receipt_kind.value,
                )
                for r in rows.receipts
            ],
        )
        await self._conn.executemany(
            """
            INSERT OR IGNORE INTO receipt_data (data_id, receipt_id, data)
            VALUES (?, ?, ?)
            """,
            [(r.data_id, r.receipt_id, r.data) for r in rows.receipt_data],
        )
        await self._conn.executemany(
            """
            INSERT OR IGNORE INTO receipt_actions (receipt_id, signer_id,
                                                   signer_public_key, gas_price)
            VALUES (?, ?, ?, ?)
            """,
            [
                (r.receipt_id, r.signer_id, r.signer_public_key, str(r.gas_price))
                for r in rows.receipt_actions
            ],
        )
        await self._conn.executemany(
            """
            INSERT OR IGNORE INTO receipt_action_actions (receipt_id, "index",
                                                          action_kind, args)
            VALUES (?, ?, ?, ?)
            """,
            [
                (
                    r.receipt_id,
                    r.index,
                    r.action_kind.value,
                    json.dumps(r.args, ensure_ascii=False),
                )
                for r in rows.action_actions
            ],
        )
        await self._conn.executemany(
            """
            INSERT OR IGNORE INTO receipt_action_input_data (receipt_id, data_id)
            VALUES (?, ?)
            """,
            [(r.receipt_id, r.data_id) for r in rows.input_data],
        )
        await self._conn.executemany(
            """
            INSERT OR IGNORE INTO receipt_action_output_data (receipt_id, data_id,
                                                              receiver_id)
            VALUES (?, ?, ?)
            """,
            [(r.receipt_id, r.data_id, r.receiver_id) for r in rows.output_data],
        )

    async def get_receipt(self, receipt_id: bytes) -> Receipt | None:
        """根据 receipt_id 查询 receipts 行"""
        cursor = await self._conn.execute(
            """
            SELECT receipt_id, block_height, predecessor_id, receiver_id, receipt_kind
            FROM receipts WHERE receipt_id = ?
            """,
            (receipt_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return Receipt(
            receipt_id=row[0],
            block_height=Decimal(row[1]),
            predecessor_id=row[2],
            receiver_id=row[3],
            receipt_kind=ReceiptKind(row[4]),
        )

    async def get_receipt_data(self, receipt_id: bytes) -> ReceiptData | None:
        cursor = await self._conn.execute(
            "SELECT data_id, receipt_id, data FROM receipt_data WHERE receipt_id = ?",
            (receipt_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return ReceiptData(data_id=row[0], receipt_id=row[1], data=row[2])

    async def get_receipt_action(self, receipt_id: bytes) -> ReceiptAction | None:
        cursor = await self._conn.execute(
            """
            SELECT receipt_id, signer_id, signer_public_key, gas_price
            FROM receipt_actions WHERE receipt_id = ?
            """,
            (receipt_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return ReceiptAction(
            receipt_id=row[0],
            signer_id=row[1],
            signer_public_key=row[2],
            gas_price=Decimal(row[3]),
        )

    async def get_actions_for_receipt(
        self,
        receipt_id: bytes,
    ) -> list[ReceiptActionAction]:
        """查询 receipt 的所有 action 行，按 index 正序"""
        cursor = await self._conn.execute(
            """
            SELECT receipt_id, "index", action_kind, args
            FROM receipt_action_actions
            WHERE receipt_id = ?
            ORDER BY "index" ASC
            """,
            (receipt_id,),
        )
        rows = await cursor.fetchall()
        return [
            ReceiptActionAction(
                receipt_id=row[0],
                index=row[1],
                action_kind=ActionKind(row[2]),
                args=json.loads(row[3]),
            )
            for row in rows
        ]

    async def get_input_data(self, receipt_id: bytes) -> list[ReceiptActionInputData]:
        cursor = await self._conn.execute(
            """
            SELECT receipt_id, data_id FROM receipt_action_input_data
            WHERE receipt_id = ? ORDER BY data_id
            """,
            (receipt_id,),
        )
        rows = await cursor.fetchall()
        return [ReceiptActionInputData(receipt_id=row[0], data_id=row[1]) for row in rows]

    async def get_output_data(self, receipt_id: bytes) -> list[ReceiptActionOutputData]:
        cursor = await self._conn.execute(
            """
            SELECT receipt_id, data_id, receiver_id FROM receipt_action_output_data
            WHERE receipt_id = ? ORDER BY data_id
            """,
            (receipt_id,),
        )
        rows = await cursor.fetchall()
        return [
            ReceiptActionOutputData(receipt_id=row[0], data_id=row[1], receiver_id=row[2])
            for row in rows
        ]

    async def count_rows(self, table: str) -> int:
        """统计指定表的行数"""
        if table not in TABLES:
            raise ValueError(f"未知表: {table}")
        cursor = await self._conn.execute(f"SELECT COUNT(*) FROM {table}")
        row = await cursor.fetchone()
        return row[0] if row else 0
