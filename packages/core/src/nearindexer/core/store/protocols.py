"""Store Protocol 接口定义

存储协作方的抽象接口，使用 Python Protocol 实现结构化子类型（duck typing）。
SqliteReceiptStore 是参考实现；生产环境的批量写入/重试策略由集成方提供。
"""

from typing import Protocol

from ..models.rows import ReceiptRows


class ReceiptSink(Protocol):
    """规范化行的写入接口

    各行族相互独立、顺序无关，唯一要求是同一 receipt 的
    receipt_action_actions 按 index 顺序写入。
    """

    async def insert_rows(self, rows: ReceiptRows) -> None:
        """写入一批行（不提交事务）"""
        ...
