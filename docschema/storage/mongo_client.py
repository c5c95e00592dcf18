# ==============================================
# MongoClient
# ==============================================
#
# PURPOSE:
#   Manages the MongoDB connection and applies inferred schemas
#   to collections as `$jsonSchema` validators.
#
# CLASS: MongoClient
# ------------------
#   Stateful — holds connection to MongoDB.
#
#   Constructor:
#   ------------
#   - __init__(host, port, database, user=None, password=None)
#   - from_config(config: MongoConfig)  (classmethod)
#
#   Methods:
#   --------
#   - connect() -> None
#       Establish connection and ping the server.
#
#   - disconnect() -> None
#       Close connection.
#
#   - apply_schema(collection_name, tree, validation_level="strict",
#                  validation_action="error") -> dict
#       Create the collection with the tree's validator, or update
#       an existing collection's validator with collMod.
#       Returns the validator document that was applied.
#
#   - get_validator(collection_name) -> dict | None
#       Read back the validator currently set on a collection.
#
#   Context Manager:
#   ----------------
#   - __enter__ / __exit__ for `with MongoClient(...) as db:` usage.
#
# ==============================================

import logging
from typing import Any, Dict, Optional

from pymongo import MongoClient as PyMongoClient
from pymongo.errors import ConnectionFailure, OperationFailure

from docschema.config import MongoConfig
from docschema.inference.descriptor import SchemaTree
from docschema.schema.json_schema import to_validator

logger = logging.getLogger(__name__)


class MongoClient:
    def __init__(self, host, port, database, user=None, password=None):
        # Store connection params. Don't connect yet.
        self.host = host
        self.port = port
        self.database = database
        self.user = user
        self.password = password
        self.client = None  # Will hold the actual MongoDB client connection

    @classmethod
    def from_config(cls, config: MongoConfig) -> "MongoClient":
        return cls(
            host=config.host,
            port=config.port,
            database=config.database,
            user=config.user,
            password=config.password,
        )

    def connect(self):
        # Establish connection to MongoDB.
        try:
            if self.user and self.password:
                uri = f"mongodb://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"
            else:
                uri = f"mongodb://{self.host}:{self.port}/{self.database}"
            self.client = PyMongoClient(uri)
            # Test connection
            self.client.admin.command('ping')
            logger.info("Connected to MongoDB at %s:%s", self.host, self.port)
        except ConnectionFailure as e:
            logger.error("Could not connect to MongoDB: %s", e)
            raise
        except OperationFailure as e:
            logger.error("Authentication failed: %s", e)
            raise

    def disconnect(self):
        # Close connection.
        if self.client:
            self.client.close()
            logger.info("Disconnected from MongoDB.")
            self.client = None

    def _database(self):
        if not self.client:
            raise RuntimeError("Not connected to MongoDB.")
        return self.client[self.database]

    def apply_schema(
        self,
        collection_name: str,
        tree: SchemaTree,
        validation_level: str = "strict",
        validation_action: str = "error"
    ) -> Dict[str, Any]:
        """
        Enforce an inferred schema on a collection.

        Args:
            collection_name: Target collection
            tree: Schema-description tree from infer_schema()
            validation_level: MongoDB validationLevel ("strict" / "moderate" / "off")
            validation_action: MongoDB validationAction ("error" / "warn")

        Returns:
            The validator document that was applied
        """
        db = self._database()
        validator = to_validator(tree)

        if collection_name in db.list_collection_names():
            db.command(
                "collMod",
                collection_name,
                validator=validator,
                validationLevel=validation_level,
                validationAction=validation_action,
            )
            logger.info("Schema validator updated on collection '%s'.", collection_name)
        else:
            db.create_collection(
                collection_name,
                validator=validator,
                validationLevel=validation_level,
                validationAction=validation_action,
            )
            logger.info("Collection '%s' created with schema validator.", collection_name)

        return validator

    def get_validator(self, collection_name: str) -> Optional[Dict[str, Any]]:
        db = self._database()
        for info in db.list_collections(filter={"name": collection_name}):
            return info.get("options", {}).get("validator")
        return None

    def __enter__(self):
        # For `with MongoClient(...) as db:` usage.
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
        return False
