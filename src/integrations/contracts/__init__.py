"""
Contracts (data models).

This folder defines the shapes exchanged with external integrations:
- Telegram channel identity and posts (channels.py)
- Structured completion analysis and its error shape (analysis.py)

Both the real clients and the test fakes produce these contracts.
"""
