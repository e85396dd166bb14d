"""CLI 入口模块 -- python -m nearindexer.core <command>

支持的命令：
  ingest <receipts.jsonl>  规范化 receipt 并写入 SQLite
"""

import asyncio
import sys
from collections.abc import Iterator
from pathlib import Path

import structlog
from pydantic import ValidationError

from .config import IndexerConfig, load_indexer_config
from .exceptions import AmountConversionError
from .logging_config import setup_logging
from .models.views import ObservedReceipt

log = structlog.get_logger()

USAGE = """用法: python -m nearindexer.core <command>
命令:
  ingest <receipts.jsonl>  规范化 receipt 并写入 SQLite"""


def main(argv: list[str] | None = None) -> None:
    """CLI 主入口"""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print(USAGE)
        sys.exit(1)

    command = args[0]

    if command == "ingest":
        if len(args) < 2:
            print("缺少参数: <receipts.jsonl>")
            print(USAGE)
            sys.exit(1)
        config = load_indexer_config()
        setup_logging(config)
        try:
            asyncio.run(ingest(args[1], config))
        except (ValidationError, AmountConversionError) as exc:
            print(f"导入失败: {exc}")
            sys.exit(1)
    else:
        print(f"未知命令: {command}")
        print("可用命令: ingest")
        sys.exit(1)


def read_batches(path: Path, batch_size: int) -> Iterator[list[ObservedReceipt]]:
    """逐行读取 JSONL，按 batch_size 分批产出（空行跳过）"""
    batch: list[ObservedReceipt] = []
    with path.open(encoding="utf-8") as fp:
        for line_no, line in enumerate(fp, start=1):
            if not line.strip():
                continue
            try:
                batch.append(ObservedReceipt.model_validate_json(line))
            except ValidationError:
                log.error("receipt_parse_failed", path=str(path), line=line_no)
                raise
            if len(batch) >= batch_size:
                yield batch
                batch = []
    if batch:
        yield batch


async def ingest(path: str, config: IndexerConfig | None = None) -> tuple[int, int]:
    """读取 JSONL 文件，规范化后按批写入数据库

    Returns:
        (receipt 数量, 写入行数)
    """
    from .normalizer import normalize_receipts
    from .store import create_store_group, store_receipt_rows

    config = config or load_indexer_config()

    print(f"数据库路径: {config.db_path}")
    print(f"输入文件: {path}")

    store_group = await create_store_group(config.db_path)
    receipt_count = 0
    row_count = 0

    try:
        for batch in read_batches(Path(path), config.batch_size):
            rows = normalize_receipts(batch, config.gas_price_policy)
            await store_receipt_rows(store_group.conn, store_group.receipt_store, rows)
            receipt_count += len(batch)
            row_count += rows.row_count()
            await log.ainfo(
                "receipt_batch_stored",
                receipt_count=len(batch),
                row_count=rows.row_count(),
            )
    finally:
        await store_group.conn.close()

    await log.ainfo("ingest_completed", receipt_count=receipt_count, row_count=row_count)
    print(f"导入完成，处理 {receipt_count} 个 receipt，生成 {row_count} 行")
    return receipt_count, row_count


if __name__ == "__main__":
    main()
