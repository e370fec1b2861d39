#config.py
import os

BACKEND_URL = os.environ.get("FILEDASH_BACKEND_URL", "http://localhost:8000")

# Пауза между закрытием диалога подтверждения и изменением состояния
SETTLE_DELAY = float(os.environ.get("FILEDASH_SETTLE_DELAY", "0.3"))

# Без таймаута по умолчанию: зависший запрос держит действие в Executing
_timeout = os.environ.get("FILEDASH_HTTP_TIMEOUT")
HTTP_TIMEOUT = float(_timeout) if _timeout else None
