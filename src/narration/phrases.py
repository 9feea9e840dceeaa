"""
Phrasebooks for spoken and displayed messages.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping

from models.detection import DistanceLevel


@dataclass(frozen=True)
class Phrasebook:
    language: str
    speech_locale: str
    navigation_started: str
    navigation_stopped: str
    status_loading: str
    status_ready: str
    status_scanning: str
    status_stopped: str
    status_not_ready: str
    error_prefix: str
    detected_template: str
    no_objects: str
    count_unit: str
    distance_labels: Mapping[DistanceLevel, str] = field(default_factory=dict)

    def detected(self, count: int) -> str:
        return self.detected_template.format(count=count)

    def error(self, message: str) -> str:
        return f"{self.error_prefix}{message}"


ENGLISH = Phrasebook(
    language="en",
    speech_locale="en-US",
    navigation_started="Navigation activated",
    navigation_stopped="Navigation stopped",
    status_loading="Loading model...",
    status_ready="Ready",
    status_scanning="Scanning...",
    status_stopped="Stopped",
    status_not_ready="Not ready: model or camera unavailable",
    error_prefix="Error: ",
    detected_template="Detected {count} objects",
    no_objects="No objects detected",
    count_unit="pcs",
    distance_labels={
        DistanceLevel.CLOSE: "close",
        DistanceLevel.MEDIUM: "medium distance",
        DistanceLevel.FAR: "far",
    },
)

RUSSIAN = Phrasebook(
    language="ru",
    speech_locale="ru-RU",
    navigation_started="Навигация активирована",
    navigation_stopped="Навигация остановлена",
    status_loading="Загрузка модели...",
    status_ready="Готов к работе",
    status_scanning="Сканирование...",
    status_stopped="Остановлено",
    status_not_ready="Не готов: модель или камера недоступны",
    error_prefix="Ошибка: ",
    detected_template="Обнаружено {count} объектов",
    no_objects="Объекты не обнаружены",
    count_unit="шт",
    distance_labels={
        DistanceLevel.CLOSE: "близко",
        DistanceLevel.MEDIUM: "средняя дистанция",
        DistanceLevel.FAR: "далеко",
    },
)

PHRASEBOOKS: Dict[str, Phrasebook] = {
    ENGLISH.language: ENGLISH,
    RUSSIAN.language: RUSSIAN,
}


def get_phrasebook(language: str) -> Phrasebook:
    """Return the phrasebook for a language code ("en", "ru-RU", ...), English if unknown."""
    key = (language or "en").split("-")[0].split("_")[0].lower()
    book = PHRASEBOOKS.get(key)
    if book is None:
        logging.warning(f"No phrasebook for language '{language}', falling back to English")
        return ENGLISH
    return book
