#!/usr/bin/env python3
"""
Create a dev profile and chat with the engine:  python scripts/dev_user.py
Prints the structured decisions for every line you type.
"""
import asyncio
from uuid import uuid4
from ares.config import configure_logging
from ares.db import create_db_and_tables, get_db_session
from ares.models import UserProfile
from ares.services.dialogue_engine import DialogueService

async def main():
    configure_logging()
    await create_db_and_tables()
    mode = input("Protocol mode (e.g. natural, enhanced,clinical): ").strip() or None
    async with get_db_session() as db:
        profile = UserProfile(protocol_mode=mode)
        db.add(profile)
        await db.commit()
        await db.refresh(profile)
        print(f"Dev profile {profile.id} created.")

        service = DialogueService(db)
        session_id = str(uuid4())
        while True:
            try:
                text = input("> ").strip()
            except EOFError:
                break
            if not text:
                continue
            result = await service.handle_turn(session_id, profile.id, text)
            print(result.model_dump_json(indent=2, exclude={"state"}))

if __name__ == "__main__":
    asyncio.run(main())
