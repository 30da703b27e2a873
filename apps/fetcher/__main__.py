"""
Fetcher Module Entry Point

Allows execution via: python -m apps.fetcher

Delegates to scheduler for all execution modes (RUN_ONCE and scheduled).
"""

import asyncio

from apps.fetcher.scheduler import main

if __name__ == "__main__":
    asyncio.run(main())
