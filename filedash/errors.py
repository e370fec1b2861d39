#errors.py


class DashboardError(Exception):
    """Базовая ошибка дашборда"""


class LoadError(DashboardError):
    """Не удалось получить или разобрать список файлов. Предыдущее состояние сохраняется."""


class MutationError(DashboardError):
    """Запрос удаления или очистки не прошёл. Коллекция не изменяется."""

    def __init__(self, action: str, message: str):
        super().__init__(message)
        self.action = action
