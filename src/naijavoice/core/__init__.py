"""
Core Infrastructure for naijavoice.

    - config.py: YAML settings, defaults and validated service config
    - logging/: Structured logging with numeric levels
    - metrics.py: Prometheus collectors
"""
