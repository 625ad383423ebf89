#!/usr/bin/env python3
"""
One-shot helper: create the session and profile tables.
"""
import asyncio
from ares.config import configure_logging
from ares.db import create_db_and_tables

if __name__ == "__main__":
    configure_logging()
    asyncio.run(create_db_and_tables())
    print("DB tables created.")
