"""
Dialect-neutral schema model (the "unified model") and DDL generators.

Typical use:

  from unifiedmodel.rendering.dialects import get_active_dialect

  script = get_active_dialect("cockroachdb").generate_schema(model)
"""
