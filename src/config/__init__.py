"""
Configuration loading, coercion and derived values.

Reads defaults, an optional .env override file and the process environment
into an immutable ResolvedConfig, and derives connection URLs and health
payloads from it.
"""
