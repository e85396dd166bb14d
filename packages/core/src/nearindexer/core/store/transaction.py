"""批量写入事务封装

一批 receipt 的六类行在同一 SQLite 事务内原子提交，失败则整体回滚。
"""

import aiosqlite

from ..models.rows import ReceiptRows
from .protocols import ReceiptSink


async def store_receipt_rows(
    conn: aiosqlite.Connection,
    sink: ReceiptSink,
    rows: ReceiptRows,
) -> None:
    """在同一事务内写入一批行

    Args:
        conn: 数据库连接（sink 需使用同一连接以保证事务性）
        sink: 行写入实现
        rows: 规范化结果

    Raises:
        Exception: 写入或提交失败时回滚后重新抛出
    """
    try:
        await sink.insert_rows(rows)
        await conn.commit()
    except Exception:
        await conn.rollback()
        raise
