#collection.py
import logging
from typing import Dict, Iterable, List, Optional

from .errors import LoadError
from .schemas import FileRecord

logger = logging.getLogger(__name__)


class FileCollection:
    """Единственный источник истины о файлах текущей сессии.

    Статистика и отфильтрованный список всегда вычисляются заново из all(),
    здесь ничего производного не хранится.
    """

    def __init__(self):
        self._files: Dict[str, FileRecord] = {}

    def load(self, records: Iterable[FileRecord]) -> None:
        """Полная замена содержимого (snapshot replace, без слияния)"""
        if records is None or isinstance(records, (str, bytes, dict)):
            raise LoadError("Expected a sequence of file records")

        try:
            iterator = iter(records)
        except TypeError as e:
            raise LoadError(f"Expected a sequence of file records, got {type(records).__name__}") from e

        loaded: Dict[str, FileRecord] = {}
        for record in iterator:
            if not isinstance(record, FileRecord):
                raise LoadError(f"Not a file record: {record!r}")
            if record.id in loaded:
                raise LoadError(f"Duplicate file id: {record.id}")
            loaded[record.id] = record

        self._files = loaded
        logger.info(f"Collection loaded with {len(loaded)} files")

    def remove(self, file_id: str) -> bool:
        # Запись могла уже исчезнуть, это не ошибка
        removed = self._files.pop(file_id, None)
        if removed is None:
            logger.warning(f"File not in collection: {file_id}")
            return False
        logger.info(f"File removed from collection: {file_id}")
        return True

    def clear(self) -> None:
        self._files = {}
        logger.info("Collection cleared")

    def all(self) -> List[FileRecord]:
        return list(self._files.values())

    def get(self, file_id: str) -> Optional[FileRecord]:
        return self._files.get(file_id)

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, file_id) -> bool:
        return file_id in self._files
