#dashboard.py
import logging
from typing import Callable, List, Optional, Protocol

from .client import BackendClient
from .collection import FileCollection
from .config import SETTLE_DELAY
from .errors import LoadError
from .mutations import ConfirmationPrompt, MutationController
from .stats import Stats, compute_stats
from .view import Query, ViewRow, apply_query, build_rows

logger = logging.getLogger(__name__)


class RenderSink(Protocol):
    """Всё, что умеет отрисовать строки таблицы и сводку"""

    def render(self, rows: List[ViewRow], stats: Stats) -> None: ...


class Dashboard:
    """Состояние страницы со списком файлов.

    Любое изменение (загрузка, удаление, смена запроса) пересчитывает
    статистику и видимый список из коллекции и передаёт их в sink.
    """

    def __init__(
        self,
        client: BackendClient,
        sink: RenderSink,
        delete_prompt: Optional[ConfirmationPrompt] = None,
        cleanup_prompt: Optional[ConfirmationPrompt] = None,
        settle_delay: float = SETTLE_DELAY,
        navigate: Optional[Callable[[str], object]] = None,
    ):
        self.client = client
        self.sink = sink
        self.navigate = navigate
        self.collection = FileCollection()
        self.query = Query()
        self.last_error: Optional[LoadError] = None
        self.mutations = MutationController(
            collection=self.collection,
            client=client,
            on_change=self.refresh,
            reload=self.load,
            delete_prompt=delete_prompt,
            cleanup_prompt=cleanup_prompt,
            settle_delay=settle_delay,
        )

    async def load(self) -> bool:
        try:
            files = await self.client.fetch_files()
            self.collection.load(files)
        except LoadError as e:
            # Остаётся последнее согласованное состояние
            logger.error(f"Error loading files: {e}")
            self.last_error = e
            return False

        self.last_error = None
        self.refresh()
        return True

    def stats(self) -> Stats:
        return compute_stats(self.collection.all())

    def visible_files(self):
        return apply_query(self.collection.all(), self.query)

    def rows(self) -> List[ViewRow]:
        return build_rows(
            self.visible_files(),
            on_view=self.view_file,
            on_delete=self.mutations.request_delete,
        )

    def refresh(self) -> None:
        self.sink.render(self.rows(), self.stats())

    def update_query(self, **changes) -> None:
        self.query = self.query.update(**changes)
        self.refresh()

    def view_file(self, file_id: str) -> str:
        url = self.client.file_info_url(file_id)
        logger.info(f"Opening file info: {url}")
        if self.navigate:
            self.navigate(url)
        return url
