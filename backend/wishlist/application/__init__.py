"""
Application Layer

Orchestrates wishlist commands: explicit input validation, the load,
mutate, and conditional-save cycle, and translation of aggregate state
into API-facing DTOs.

Components:
- validation/: explicit validators returning ValidationResult
- services/: request orchestrator and optimistic concurrency controller
- dtos/: request and response models
- mappers/: aggregate to DTO conversion
"""
