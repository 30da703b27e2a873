"""
Fetcher App - Notion Dashboard Sync

Responsibilities:
- Query the habits, journal, skincare and treatments databases in parallel
- Exhaust cursor pagination for every query
- Flatten Notion property wrappers into stable feed shapes
- Isolate per-feed failures as {"error": message} entries
- Write data/notion-data.json, replacing the previous run's file

Output:
- data/notion-data.json with keys syncedAt, habits, journal, skincare, treatments
"""
