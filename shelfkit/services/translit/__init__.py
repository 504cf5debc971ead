"""
Translit Module - обратная транслитерация имён папок.

Компоненты:
- TransliterationReverter: латиница → кириллица по таблице правил
- ConversionResult: результат конвертации
- sort_key: ключ сортировки для смешанных списков папок
"""

from .reverter import (
    ConversionResult,
    TransliterationReverter,
    get_reverter,
    reset_reverter,
    revert_transliteration,
    sort_key,
)
from .rules import SPECIAL_CASES, TRANSLITERATION_RULES, SpecialCase, compile_rule_table

__all__ = [
    "ConversionResult",
    "TransliterationReverter",
    "get_reverter",
    "reset_reverter",
    "revert_transliteration",
    "sort_key",
    "SPECIAL_CASES",
    "TRANSLITERATION_RULES",
    "SpecialCase",
    "compile_rule_table",
]
