# ==============================================
# STORAGE (MongoDB)
# ==============================================
#
# This package handles the database side: connecting to MongoDB
# and enforcing inferred schemas as collection validators.
#
# Modules:
# --------
# - mongo_client.py    → MongoDB connection and validator management
#
# ==============================================

from .mongo_client import MongoClient

__all__ = ["MongoClient"]
