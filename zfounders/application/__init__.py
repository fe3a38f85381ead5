"""
APPLICATION LAYER - Use Cases & Orchestration

This layer contains:
- commands/  → Write operations (CQRS)
- queries/   → Read operations (CQRS)
- services/  → Notification emitter
- dto/       → Data Transfer Objects
- common/    → Shared interfaces and the policy glue (PolicyEngine, enforce)

Rules:
- Depends on Domain layer only
- No HTTP/framework code here
- Every handler opens one unit of work and consults the policy core
"""
