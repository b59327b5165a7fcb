"""
HTTP транспорт для клиентов переводчика.

Сессия requests с urllib3 Retry и разбор JSON ответа. Повторы по умолчанию
выключены (MAX_RETRIES = 0): упавший запрос перевода прерывает прогон.
"""

from __future__ import annotations
from typing import Any, Dict, Mapping, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ocr_translate.core.config import BACKOFF_FACTOR, MAX_RETRIES, TIMEOUT

# Статусы, при которых повтор имеет смысл (перегрузка или сбой сервера модели)
RETRY_STATUSES = (429, 500, 502, 503, 504)


def get_http_session(
    total: int = MAX_RETRIES,
    backoff: float = BACKOFF_FACTOR,
) -> requests.Session:
    """
    Создаёт HTTP сессию для запросов к модели.

    Args:
        total: Число повторов (0 - без повторов)
        backoff: Коэффициент экспоненциальной задержки между попытками

    Returns:
        requests.Session с Retry адаптером на http и https
    """
    retry = Retry(
        total=total,
        connect=total,
        read=total,
        backoff_factor=backoff,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=frozenset(["POST"]),
        raise_on_status=False,
    )

    # Запросы идут строго последовательно, одного соединения достаточно
    adapter = HTTPAdapter(max_retries=retry, pool_connections=1, pool_maxsize=1)

    s = requests.Session()
    s.mount("http://", adapter)
    s.mount("https://", adapter)

    return s


HTTP = get_http_session()


def post_json(
    url: str,
    body: Mapping[str, Any],
    headers: Optional[Mapping[str, str]] = None,
    timeout: float = TIMEOUT,
    session: Optional[requests.Session] = None,
) -> Dict[str, Any]:
    """
    Отправляет JSON и возвращает разобранный JSON объект ответа.

    Raises:
        requests.RequestException: Сетевая ошибка или HTTP статус >= 400
        ValueError: Ответ не является JSON объектом
    """
    http = session or HTTP
    resp = http.post(url, headers=dict(headers or {}), json=dict(body), timeout=timeout)
    resp.raise_for_status()

    data = resp.json()
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data
