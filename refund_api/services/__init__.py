"""Business logic: authorization policy, update resolution and resource services."""
