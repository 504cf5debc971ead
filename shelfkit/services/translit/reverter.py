"""
TransliterationReverter - возврат транслитерированных имён папок в кириллицу.

Calibre и подобные программы присылают книги с транслитом в путях:
- "Briendon Sandierson" → "Брендон Сандерсон"
- "Dozory/" → "Дозоры/"
- "Dжордж Оруелл" → "Джордж Оруелл"

Алгоритм: спецслучаи с граничными условиями, затем жадная замена по
таблице, отсортированной по длине паттерна (один раз при создании).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from ...config import get_settings
from .rules import (
    SPECIAL_CASES,
    TRANSLITERATION_RULES,
    Rule,
    SpecialCase,
    compile_rule_table,
)

logger = logging.getLogger(__name__)

DEFAULT_DIRECTORY_MARKERS: Tuple[str, ...] = ("/", "\\")

# Латиница, оставшаяся после всех замен (c, h, j, q, w, x ...)
RE_RESIDUAL_LATIN = re.compile(r"[A-Za-z]")


@dataclass(frozen=True)
class ConversionResult:
    """Результат обратной транслитерации."""
    original: str
    converted: str
    changed: bool
    is_directory_hint: bool


class TransliterationReverter:
    """
    Конвертер транслита в кириллицу для имён папок.

    Особенности:
    - Таблица правил упорядочивается один раз (длинные паттерны первыми)
    - Спецслучаи для окончаний выполняются до таблицы
    - Завершающий разделитель каталога сохраняется как есть
    - Если после замен осталась латиница, строка считается английской
      и возвращается без изменений (``keep_partial=True`` отключает)
    """

    def __init__(
        self,
        rules: Sequence[Rule] | None = None,
        special_cases: Sequence[SpecialCase] | None = None,
        directory_markers: Iterable[str] | None = None,
        keep_partial: bool = False,
    ):
        self._rules = compile_rule_table(rules if rules is not None else TRANSLITERATION_RULES)
        self._special_cases = tuple(special_cases if special_cases is not None else SPECIAL_CASES)
        self._markers = tuple(directory_markers) if directory_markers is not None else DEFAULT_DIRECTORY_MARKERS
        self._keep_partial = keep_partial

    @property
    def rules(self) -> Tuple[Rule, ...]:
        """Правила в порядке применения."""
        return self._rules

    def _split_marker(self, text: str) -> Tuple[str, str]:
        if text and text[-1] in self._markers:
            return text[:-1], text[-1]
        return text, ""

    def _rewrite(self, text: str) -> str:
        for case in self._special_cases:
            text = case.apply(text)
        for pattern, replacement in self._rules:
            if pattern in text:
                text = text.replace(pattern, replacement)
        return text

    def convert(self, text: str) -> ConversionResult:
        """
        Конвертирует одно имя папки.

        Никогда не бросает исключений: пустые и нераспознанные строки
        возвращаются как есть с ``changed=False``.
        """
        core, marker = self._split_marker(text)
        is_directory = bool(marker)

        converted = self._rewrite(core)

        if converted == core:
            return ConversionResult(text, text, False, is_directory)

        if not self._keep_partial and RE_RESIDUAL_LATIN.search(converted):
            logger.debug("Partial conversion rejected: %r -> %r", text, converted)
            return ConversionResult(text, text, False, is_directory)

        logger.debug("Transliteration reverted: %r -> %r", core, converted)
        return ConversionResult(text, converted + marker, True, is_directory)

    def sort_key(self, text: str) -> str:
        """Ключ сортировки: сконвертированное имя без разделителя каталога."""
        converted = self.convert(text).converted
        core, _ = self._split_marker(converted)
        return core

    def sort_names(self, names: Iterable[str]) -> List[str]:
        """Стабильная сортировка имён по ``sort_key``."""
        return sorted(names, key=self.sort_key)


# Singleton instance
_reverter: TransliterationReverter | None = None


def get_reverter() -> TransliterationReverter:
    """Возвращает singleton экземпляр TransliterationReverter."""
    global _reverter
    if _reverter is None:
        settings = get_settings()
        _reverter = TransliterationReverter(
            directory_markers=settings.directory_marker_set,
            keep_partial=settings.keep_partial_conversions,
        )
    return _reverter


def reset_reverter() -> None:
    """Сбрасывает singleton (для тестов)."""
    global _reverter
    _reverter = None


def revert_transliteration(text: str) -> str:
    """Быстрая функция: имя папки в кириллице (или исходное)."""
    return get_reverter().convert(text).converted


def sort_key(text: str) -> str:
    """Быстрая функция ключа сортировки."""
    return get_reverter().sort_key(text)
