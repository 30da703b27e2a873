"""
Tests Package - Unit Tests

Test structure:
- tests/conftest.py - shared fixtures (fake Notion client, page builders)
- tests/test_properties.py - property extraction and fallback chains
- tests/test_notion.py - cursor pagination
- tests/test_feeds.py - feed normalizers
- tests/test_sync.py - orchestrator and output file
- tests/test_config.py - settings normalisation
- tests/test_scheduler.py - run-once entry point
- tests/test_logging.py - logging setup
"""
