#!/usr/bin/env python3
"""
Script to create the chats and message log tables.

Usage:
    python scripts/init_db.py
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.db.sqlite import db


async def main() -> None:
    print(f"Initializing database: {db.url}")
    print("-" * 50)

    await db.init()
    print("✅ Tables created: chats, message_logs")

    await db.close()


if __name__ == "__main__":
    asyncio.run(main())
