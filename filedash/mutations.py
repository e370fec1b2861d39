#mutations.py
import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional, Protocol

from .client import BackendClient
from .collection import FileCollection
from .config import SETTLE_DELAY
from .errors import MutationError

logger = logging.getLogger(__name__)


class FlowState(str, Enum):
    IDLE = "idle"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    EXECUTING = "executing"


class ConfirmationPrompt(Protocol):
    """Канал подтверждения с двумя состояниями: показан / скрыт"""

    def show(self) -> None: ...

    def hide(self) -> None: ...


class ConfirmationDialog:
    def __init__(self):
        self.visible = False

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False


class ConfirmationFlow:
    """Конечный автомат одного действия: Idle -> AwaitingConfirmation -> Executing -> Idle.

    Подтверждение и отмена принимаются только в AwaitingConfirmation, поэтому
    повторное подтверждение во время выполнения запроса отклоняется.
    """

    def __init__(self, action: str, prompt: Optional[ConfirmationPrompt] = None):
        self.action = action
        self.prompt = prompt or ConfirmationDialog()
        self.state = FlowState.IDLE
        self.target: Optional[str] = None
        self.last_error: Optional[MutationError] = None

    def request(self, target: Optional[str] = None) -> bool:
        if self.state is FlowState.EXECUTING:
            logger.warning(f"{self.action}: request rejected, previous request still in flight")
            return False
        # Повторный запрос до подтверждения просто перепривязывает цель
        self.target = target
        self.state = FlowState.AWAITING_CONFIRMATION
        self.prompt.show()
        return True

    def cancel(self) -> bool:
        if self.state is not FlowState.AWAITING_CONFIRMATION:
            logger.warning(f"{self.action}: cancel rejected in state {self.state.value}")
            return False
        self.prompt.hide()
        self._reset()
        return True

    def begin(self) -> bool:
        if self.state is not FlowState.AWAITING_CONFIRMATION:
            logger.warning(f"{self.action}: confirm rejected in state {self.state.value}")
            return False
        self.state = FlowState.EXECUTING
        self.last_error = None
        return True

    def finish(self, error: Optional[MutationError] = None) -> None:
        self.last_error = error
        self._reset()

    def _reset(self) -> None:
        self.state = FlowState.IDLE
        self.target = None


class MutationController:
    """Удаление одного файла и очистка всех, каждое через подтверждение"""

    def __init__(
        self,
        collection: FileCollection,
        client: BackendClient,
        on_change: Callable[[], None],
        reload: Callable[[], Awaitable[object]],
        delete_prompt: Optional[ConfirmationPrompt] = None,
        cleanup_prompt: Optional[ConfirmationPrompt] = None,
        settle_delay: float = SETTLE_DELAY,
        on_error: Optional[Callable[[MutationError], None]] = None,
    ):
        self.collection = collection
        self.client = client
        self.on_change = on_change
        self.reload = reload
        self.settle_delay = settle_delay
        self.on_error = on_error
        self.delete_flow = ConfirmationFlow("delete", delete_prompt)
        self.cleanup_flow = ConfirmationFlow("cleanup", cleanup_prompt)

    def request_delete(self, file_id: str) -> bool:
        logger.info(f"Delete requested: {file_id}")
        return self.delete_flow.request(file_id)

    def cancel_delete(self) -> bool:
        return self.delete_flow.cancel()

    async def confirm_delete(self) -> bool:
        flow = self.delete_flow
        if not flow.begin():
            return False
        file_id = flow.target

        try:
            try:
                await self.client.delete_file(file_id)
            except MutationError as e:
                self._fail(flow, e)
                return False

            flow.prompt.hide()
            await asyncio.sleep(self.settle_delay)

            self.collection.remove(file_id)
            self.on_change()
        finally:
            # Автомат возвращается в Idle при любом исходе, в том числе при отмене задачи
            self._release(flow)
        logger.info(f"File deleted: {file_id}")
        return True

    def request_cleanup(self) -> bool:
        logger.info("Cleanup requested")
        return self.cleanup_flow.request()

    def cancel_cleanup(self) -> bool:
        return self.cleanup_flow.cancel()

    async def confirm_cleanup(self) -> bool:
        flow = self.cleanup_flow
        if not flow.begin():
            return False

        try:
            try:
                await self.client.cleanup()
            except MutationError as e:
                self._fail(flow, e)
                return False

            flow.prompt.hide()
            await asyncio.sleep(self.settle_delay)
        finally:
            self._release(flow)

        # Состояние после очистки берётся с бэкенда, а не выводится локально
        logger.info("Cleanup complete, reloading")
        await self.reload()
        return True

    def _release(self, flow: ConfirmationFlow) -> None:
        if flow.state is FlowState.EXECUTING:
            flow.finish()

    def _fail(self, flow: ConfirmationFlow, error: MutationError) -> None:
        logger.error(str(error))
        flow.prompt.hide()
        flow.finish(error)
        if self.on_error:
            self.on_error(error)
