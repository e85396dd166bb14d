"""nearindexer Core Store -- SQLite 参考存储实现

提供工厂函数创建共享数据库连接的 Store 实例组。
"""

from pathlib import Path

import aiosqlite

from .protocols import ReceiptSink
from .receipt_store import SqliteReceiptStore
from .sqlite_init import TABLES, init_db
from .transaction import store_receipt_rows


class StoreGroup:
    """Store 实例组 -- 共享同一个数据库连接"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self.conn = conn
        self.receipt_store = SqliteReceiptStore(conn)


async def create_store_group(db_path: str) -> StoreGroup:
    """创建 Store 实例组

    Args:
        db_path: SQLite 数据库文件路径

    Returns:
        StoreGroup 实例
    """
    # 确保数据库目录存在
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    await init_db(conn)

    return StoreGroup(conn=conn)


__all__ = [
    "StoreGroup",
    "create_store_group",
    "ReceiptSink",
    "SqliteReceiptStore",
    "TABLES",
    "init_db",
    "store_receipt_rows",
]
