"""
APPLICATION LAYER - Use Cases & Orchestration

This layer contains:
- commands/  → Write operations (login, register, logout, create/edit/remove post)
- queries/   → Read operations (feed, account posts, single post)
- services/  → Session holder and feed synchronizer
- common/    → Shared interfaces (Command, Query base classes)

Rules:
- Depends on Domain layer only
- No httpx/pydantic code here
"""
