"""Entity caches: in-process and Redis-backed tiers."""
