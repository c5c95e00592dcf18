# ==============================================
# PERSISTENCE (Inferred schemas on disk)
# ==============================================
#
# This package saves and loads inferred schema-description trees
# so a schema can be re-applied without the sample it came from.
#
# Modules:
# --------
# - schema_store.py  → Save/load/list/delete named schema trees
#
# ==============================================

from .schema_store import SchemaStore

__all__ = ["SchemaStore"]
