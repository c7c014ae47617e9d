#!/usr/bin/env python3
"""
Content reseed

Clears the content table and loads every top-level key of a JSON file
(default: content.json) as one section. Used once when moving a site from
its file-based content to the database.

Usage: python -m scripts.migrate_content [path/to/content.json]
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from portfolio.db.session import AsyncSessionLocal, engine
from portfolio.services.content_store import ContentStore, ContentStoreError

logger = logging.getLogger("migrate_content")


def load_content(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object, got {type(data).__name__}")
    return data


async def migrate(path: Path) -> int:
    try:
        content = load_content(path)
        async with AsyncSessionLocal() as session:
            store = ContentStore(session)
            removed = await store.clear()
            logger.info("Cleared %s existing row(s) from config table.", removed)
            for key in await store.upsert_many(content):
                logger.info("Inserted/Updated key: %s", key)
    finally:
        await engine.dispose()
    logger.info("Content migration complete! %s section(s) loaded.", len(content))
    return len(content)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Reseed the content table from a JSON file.")
    parser.add_argument("path", nargs="?", default="content.json", type=Path)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)-8s | %(message)s")
    try:
        asyncio.run(migrate(args.path))
    except (OSError, ValueError, ContentStoreError) as e:
        logger.error(f"Error during content migration: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
