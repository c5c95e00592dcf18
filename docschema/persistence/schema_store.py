import logging
import re
from pathlib import Path
from typing import Any, Dict, List

from bson import json_util

from docschema.inference.descriptor import SchemaTree, tree_from_dict, tree_to_dict

logger = logging.getLogger(__name__)


# ==============================================
# SchemaStore
# ==============================================
#
# PURPOSE:
#   Persist inferred schema-description trees to disk so they can be
#   reviewed, versioned and re-applied without the original sample.
#
# FILE FORMAT:
#   One MongoDB extended JSON file per schema (bson.json_util), so
#   defaults such as ObjectId, Decimal128 or datetimes round-trip.
#
#   metadata/
#   └── schemas/
#       ├── users.json      → {"name": "users", "version": "1.0", "fields": {...}}
#       └── orders.json
#
# CLASS: SchemaStore
# ------------------
#   Stateful — holds a reference to the storage directory.
#
#   Constructor:
#   ------------
#   - __init__(storage_dir: str = "metadata/")
#       Create storage directory if it doesn't exist.
#
#   Methods:
#   --------
#   - save(name, tree) -> Path
#   - load(name) -> SchemaTree          (FileNotFoundError if missing)
#   - exists(name) -> bool
#   - list_schemas() -> list[str]
#   - delete(name) -> bool
#
class SchemaStore:
    """
    Handles persistence of inferred schemas to disk.
    """

    VERSION = "1.0"
    _NAME_PATTERN = re.compile(r"[A-Za-z0-9_.-]+")

    def __init__(self, storage_dir: str = "metadata/"):
        """
        Initialize the schema store.

        Args:
            storage_dir: Directory to store metadata files
        """
        self.storage_dir = Path(storage_dir)
        self.schemas_dir = self.storage_dir / "schemas"

        # Create directory if it doesn't exist
        self.schemas_dir.mkdir(parents=True, exist_ok=True)

    def _path_for(self, name: str) -> Path:
        if not name or not self._NAME_PATTERN.fullmatch(name) or name.startswith("."):
            raise ValueError(f"Invalid schema name: {name!r}")
        return self.schemas_dir / f"{name}.json"

    def save(self, name: str, tree: SchemaTree) -> Path:
        """
        Save a schema-description tree under a name.

        Args:
            name: Schema name (letters, digits, "_", "-", ".")
            tree: Tree returned by infer_schema()

        Returns:
            Path of the written file
        """
        path = self._path_for(name)
        document: Dict[str, Any] = {
            "name": name,
            "version": self.VERSION,
            "fields": tree_to_dict(tree),
        }

        with open(path, 'w') as f:
            f.write(json_util.dumps(document, indent=2))

        logger.info("Saved schema '%s' (%d fields) to %s", name, len(tree), path)
        return path

    def load(self, name: str) -> SchemaTree:
        """
        Load a previously saved tree.

        Raises:
            FileNotFoundError: if no schema with this name was saved
        """
        path = self._path_for(name)
        if not path.exists():
            raise FileNotFoundError(f"No schema named '{name}' in {self.schemas_dir}")

        with open(path, 'r') as f:
            document = json_util.loads(f.read())

        tree = tree_from_dict(document.get("fields", {}))
        logger.info("Loaded schema '%s' from %s", name, path)
        return tree

    def exists(self, name: str) -> bool:
        return self._path_for(name).exists()

    def list_schemas(self) -> List[str]:
        return sorted(path.stem for path in self.schemas_dir.glob("*.json"))

    def delete(self, name: str) -> bool:
        path = self._path_for(name)
        if not path.exists():
            return False
        path.unlink()
        logger.info("Deleted schema '%s'", name)
        return True
