#!/usr/bin/env python3
"""Terminal demo for the research assistant.

Start the server first:

    uvicorn api.app:app --port 8000

Then run:

    python examples/research_demo.py "AI for climate modeling" notes.pdf
"""

import asyncio
import sys
from pathlib import Path

from client.display import StatusEntry
from client.research_client import ResearchClient
from core.log import get_logger, setup_logging
from core.models.api.requests import ConversationMessage
from core.types import MessageRole

setup_logging(level="INFO", use_colors=True)
logger = get_logger(__name__)

SERVER_URL = "http://localhost:8000"


class ResearchDemo:
    """Submits one topic and prints progress and the final report."""

    def __init__(self, base_url: str = SERVER_URL):
        self.client = ResearchClient(base_url=base_url)
        self._seen_status: set[str] = set()

    async def run(self, topic: str, files: list[Path]) -> None:
        logger.info(f"=== Researching: {topic} ===")
        for path in files:
            logger.info(f"Attaching {path} ({path.stat().st_size} bytes)")

        async for entries in self.client.research(topic, files):
            for entry in entries:
                if isinstance(entry, StatusEntry) and entry.id not in self._seen_status:
                    self._seen_status.add(entry.id)
                    logger.info(entry.content)

        report = self._last_assistant_message()
        if report is None:
            logger.warning("No report received")
            return
        print()
        print(report.text)

    def _last_assistant_message(self) -> ConversationMessage | None:
        for message in reversed(self.client.state.messages):
            if message.role == MessageRole.ASSISTANT:
                return message
        return None

    async def close(self) -> None:
        await self.client.aclose()


async def main():
    """Main function to run the demo."""
    if len(sys.argv) < 2:
        print(f"Usage: {sys.argv[0]} TOPIC [FILE ...]")
        sys.exit(1)

    demo = ResearchDemo()
    try:
        await demo.run(sys.argv[1], [Path(arg) for arg in sys.argv[2:]])
    finally:
        await demo.close()


if __name__ == "__main__":
    asyncio.run(main())
