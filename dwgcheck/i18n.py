"""Message catalogs and the Translator used by rules and property editors.

Messages are keyed by their English text.  Templates use positional
placeholders (``{0}``, ``{1}``) filled with :meth:`str.format`.
"""

from __future__ import annotations

import logging
from typing import Any

from dwgcheck.config import DEFAULT_LOCALE

logger = logging.getLogger(__name__)

CATALOGS: dict[str, dict[str, str]] = {
    "en": {},
    "ru": {
        "No matching objects found": "Не найдены подходящие объекты",
        "Could not find objects matching the filter":
            "Не удалось найти объекты, удовлетворяющие заданному фильтру",
        'Property "{0}" not found': 'Свойство "{0}" не найдено',
        "Could not compute volume": "Не удалось вычислить объем",
        "Could not compute the solid volume. No 3D solids found.":
            "Не удалось вычислить объем тела. 3d тела не найдены.",
        "Invalid volume value. Deviation {0}%": "Неверное значение объема. Отклонение {0}%",
        "Solid volume does not match the declared value":
            "Объем тела не соответствует заданному значению",
        "**Different**": "**Различные**",
        "Field must not be empty": "Поле не может быть пустым",
        "Value must be a number": "Значение должно быть числом",
        "Value must be between 0 and 100": "Значение должно быть в диапазоне от 0 до 100",
        "Select a field": "Выберите поле",
        "Compares the declared layer volume with the volume of its 3D solids":
            "Сравнивает заданный объем слоя с объемом его 3d тел",
    },
}


class Translator:
    """Translate and format messages for one locale."""

    def __init__(self, locale: str = DEFAULT_LOCALE) -> None:
        if locale not in CATALOGS:
            logger.warning("Unknown locale %s, falling back to %s", locale, DEFAULT_LOCALE)
            locale = DEFAULT_LOCALE
        self.locale = locale
        self._catalog = CATALOGS[locale]

    def tr(self, message: str, *args: Any) -> str:
        template = self._catalog.get(message, message)
        if not args:
            return template
        return template.format(*args)

    __call__ = tr
