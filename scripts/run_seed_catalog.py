#!/usr/bin/env python3
"""
One-off script to seed zones, bloom seasons and the starter plant catalog.

Usage (inside the API container):
    python scripts/run_seed_catalog.py
"""
import asyncio
import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s: %(message)s",
    stream=sys.stdout,
)

from plantshelf.tasks.seed_catalog import seed_catalog


async def main() -> None:
    print("Seeding plant catalog...\n")
    await seed_catalog()
    print("\nSeeding finished.")


if __name__ == "__main__":
    asyncio.run(main())
