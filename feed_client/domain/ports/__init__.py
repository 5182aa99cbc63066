"""
PORTS - Interfaces that infrastructure implements

The domain says: "I need to list and change messages"
Infrastructure implements: "I'll call the feed service over HTTP"

Subfolders:
- repositories/  → Remote message and account stores
"""
