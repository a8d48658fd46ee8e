"""
初始化心情日记数据表的脚本

用法:
    python scripts/init_journal_tables.py          # 创建缺失的表
    python scripts/init_journal_tables.py --reset  # 删除并重建（会清空所有日记）
"""
# 标准库导包
import argparse
import asyncio
import sys
import traceback
from pathlib import Path

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# 项目内部导包
from storage import Base, engine, init_db, cleanup_db
from storage.database import DATABASE_URL
from storage.models.entry import CURRENT_SCHEMA_VERSION


async def reset_tables():
    """删除并重建所有日记表"""
    from storage import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def main(reset: bool = False):
    """主函数"""
    print(f"开始初始化心情日记数据表: {DATABASE_URL}")

    try:
        if reset:
            await reset_tables()
            print("✓ 已删除并重建数据表")
        else:
            await init_db()
            print("✓ 数据表创建成功！")

        print(f"\n日记结构版本: {CURRENT_SCHEMA_VERSION}")
        print("已创建的数据表：")
        for index, table_name in enumerate(sorted(Base.metadata.tables), start=1):
            print(f"  {index}. {table_name}")
    except Exception as e:
        print(f"✗ 初始化数据表失败: {e}")
        traceback.print_exc()
        sys.exit(1)
    finally:
        await cleanup_db()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="初始化心情日记数据表")
    parser.add_argument("--reset", action="store_true", help="删除并重建所有表")
    args = parser.parse_args()
    asyncio.run(main(reset=args.reset))
