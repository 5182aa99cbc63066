"""
DOMAIN LAYER - What a feed is, independent of how it is fetched

This layer contains:
- Entities: Business objects with identity (Message, Account)
- Value Objects: Immutable types (MessageId, AccountId, MutationResult)
- Ports: Interfaces that the HTTP layer implements
- Services: Pure domain logic (ownership, text rules)
- Exceptions: Domain-specific errors

RULES:
1. NO framework imports (no httpx, pydantic, dishka)
2. NO I/O operations
3. Only depends on Python stdlib
"""
