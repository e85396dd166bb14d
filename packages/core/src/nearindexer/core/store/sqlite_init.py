"""SQLite 数据库初始化

PRAGMA 配置 + 六张 receipt 表 DDL + 索引创建。
u128 / u64 数值以 TEXT 存储十进制字符串，避免 SQLite 数值类型截断精度。
"""

import aiosqlite

# receipts 表 DDL
_RECEIPTS_DDL = """
CREATE TABLE IF NOT EXISTS receipts (
    receipt_id      BLOB PRIMARY KEY,
    block_height    TEXT NOT NULL,
    predecessor_id  TEXT NOT NULL,
    receiver_id     TEXT NOT NULL,
    receipt_kind    TEXT NOT NULL CHECK (receipt_kind IN ('ACTION', 'DATA'))
);
"""

_RECEIPT_DATA_DDL = """
CREATE TABLE IF NOT EXISTS receipt_data (
    data_id     BLOB PRIMARY KEY,
    receipt_id  BLOB NOT NULL,
    data        BLOB,

    FOREIGN KEY (receipt_id) REFERENCES receipts(receipt_id)
);
"""

_RECEIPT_ACTIONS_DDL = """
CREATE TABLE IF NOT EXISTS receipt_actions (
    receipt_id         BLOB PRIMARY KEY,
    signer_id          TEXT NOT NULL,
    signer_public_key  TEXT NOT NULL,
    gas_price          TEXT NOT NULL,

    FOREIGN KEY (receipt_id) REFERENCES receipts(receipt_id)
);
"""

_RECEIPT_ACTION_ACTIONS_DDL = """
CREATE TABLE IF NOT EXISTS receipt_action_actions (
    receipt_id   BLOB NOT NULL,
    "index"      INTEGER NOT NULL CHECK ("index" >= 0),
    action_kind  TEXT NOT NULL,
    args         TEXT NOT NULL DEFAULT '{}',

    PRIMARY KEY (receipt_id, "index"),
    FOREIGN KEY (receipt_id) REFERENCES receipt_actions(receipt_id)
);
"""

_RECEIPT_ACTION_INPUT_DATA_DDL = """
CREATE TABLE IF NOT EXISTS receipt_action_input_data (
    receipt_id  BLOB NOT NULL,
    data_id     BLOB NOT NULL,

    PRIMARY KEY (receipt_id, data_id),
    FOREIGN KEY (receipt_id) REFERENCES receipt_actions(receipt_id)
);
"""

_RECEIPT_ACTION_OUTPUT_DATA_DDL = """
CREATE TABLE IF NOT EXISTS receipt_action_output_data (
    receipt_id   BLOB NOT NULL,
    data_id      BLOB NOT NULL,
    receiver_id  TEXT NOT NULL,

    PRIMARY KEY (receipt_id, data_id),
    FOREIGN KEY (receipt_id) REFERENCES receipt_actions(receipt_id)
);
"""

_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_receipts_receiver_id ON receipts(receiver_id);",
    "CREATE INDEX IF NOT EXISTS idx_receipts_predecessor_id ON receipts(predecessor_id);",
    "CREATE INDEX IF NOT EXISTS idx_receipt_data_receipt_id ON receipt_data(receipt_id);",
    "CREATE INDEX IF NOT EXISTS idx_receipt_actions_signer_id ON receipt_actions(signer_id);",
    (
        "CREATE INDEX IF NOT EXISTS idx_receipt_action_actions_kind "
        "ON receipt_action_actions(action_kind);"
    ),
    # data receipt 到达后按 data_id 反查等待它的 action receipt
    (
        "CREATE INDEX IF NOT EXISTS idx_receipt_action_input_data_data_id "
        "ON receipt_action_input_data(data_id);"
    ),
    (
        "CREATE INDEX IF NOT EXISTS idx_receipt_action_output_data_receiver_id "
        "ON receipt_action_output_data(receiver_id);"
    ),
]

TABLES: tuple[str, ...] = (
    "receipts",
    "receipt_data",
    "receipt_actions",
    "receipt_action_actions",
    "receipt_action_input_data",
    "receipt_action_output_data",
)


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表 + 创建索引

    Args:
        conn: aiosqlite 数据库连接
    """
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA foreign_keys = ON;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    for ddl in (
        _RECEIPTS_DDL,
        _RECEIPT_DATA_DDL,
        _RECEIPT_ACTIONS_DDL,
        _RECEIPT_ACTION_ACTIONS_DDL,
        _RECEIPT_ACTION_INPUT_DATA_DDL,
        _RECEIPT_ACTION_OUTPUT_DATA_DDL,
    ):
        await conn.execute(ddl)

    for idx_sql in _INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()
