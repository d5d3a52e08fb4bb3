"""Infrastructure layer — stateful services around the pure Forge Theory core.

Modules:
    asset_cache  Cache-first offline store for the web shell's asset list.
    metrics      Prometheus metrics registry.
"""
