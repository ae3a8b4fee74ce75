# data/repository.py
from pathlib import Path


class DataRepository:
    """
    Local key-value storage. Each key is one JSON document on disk,
    always read whole and overwritten whole.
    """

    def __init__(self, storage_dir: Path | str = Path("data/storage")):
        # base folder where all JSON data lives
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def _file_path(self, key: str) -> Path:
        return self.storage_dir / f"{key}.json"

    def has_key(self, key: str) -> bool:
        return self._file_path(key).exists()

    def get_item(self, key: str) -> str | None:
        # Raw stored text, or None when the key was never written.
        # Parsing is left to the caller so a corrupt value can be told apart from a missing one.
        path = self._file_path(key)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def set_item(self, key: str, value: str) -> None:
        path = self._file_path(key)
        with open(path, "w", encoding="utf-8") as f:
            f.write(value)
