#!/usr/bin/env python
"""Script to run the TaskFlow console client against a running API."""
import asyncio

from taskflow.client import ConfirmationGate, TaskApiClient, TaskListController
from taskflow.client.console import ConsoleApp, ConsolePrompter
from taskflow.config import API_URL, LOG_FILE
from taskflow.logging_setup import setup_logging


async def main() -> None:
    api = TaskApiClient(API_URL)
    controller = TaskListController(api, ConfirmationGate(ConsolePrompter()))
    try:
        await ConsoleApp(controller).run()
    finally:
        await api.aclose()


if __name__ == "__main__":
    # Feedback is printed by the console; keep the log out of the way.
    setup_logging("ERROR", LOG_FILE)
    asyncio.run(main())
