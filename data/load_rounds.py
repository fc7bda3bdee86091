"""Load rounds from a bulk text file into the database.
    python3 data/load_rounds.py data/rounds.txt

One round per line: date, course, green_fee, caddy_fee, wagers[, score]
"""

import asyncio
import os
import sys

from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database.connection import DatabasePool, PoolSettings
from database.db_manager import DatabaseManager
from llm.round_extractor import UnconfiguredExtractor
from services import RoundService


async def load_data(rounds_path: str, dsn: str = None) -> int:
    with open(rounds_path, encoding="utf-8") as f:
        text = f.read()

    async with DatabasePool(PoolSettings.from_env(dsn)) as pool:
        await pool.initialize_schema()
        db = DatabaseManager(pool.pool)
        service = RoundService(db.rounds, UnconfiguredExtractor())

        parsed = service.parse_bulk(text)
        if not parsed.success:
            print(parsed.error)
            return 1

        drafts = parsed.data.rounds
        print(f"Parsed {parsed.data.count} rounds from {rounds_path}")
        for i, draft in enumerate(drafts, start=1):
            print(f"  R{i}: {draft.date} {draft.course} score {draft.score} wagers {draft.wagers:+.0f}")

        saved = await service.save_many(drafts)
        if not saved.success:
            print(f"Error: {saved.error}")
            return 1
        print(f"\nDone: {saved.data.saved} rounds created")
        return 0


def main():
    if len(sys.argv) < 2:
        print("Usage: python data/load_rounds.py <rounds.txt>")
        print("Example line: 2025-03-01, 牧马山, 400, 50, -200, 88")
        sys.exit(1)

    load_dotenv()
    sys.exit(asyncio.run(load_data(sys.argv[1])))


if __name__ == "__main__":
    main()
