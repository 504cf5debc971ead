"""
Таблица правил обратной транслитерации (латиница → кириллица).

Правила — буквальные подстроки, без regex. Порядок в таблице задаёт
приоритет среди паттернов одинаковой длины; длинные паттерны всегда
применяются раньше коротких (см. ``compile_rule_table``).

Спецслучаи (``SPECIAL_CASES``) выполняются до таблицы и учитывают границу
слова: без них окончания вроде ``-y`` / ``-iel`` неоднозначны.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence, Tuple

Rule = Tuple[str, str]

# ============================================================================
# Таблица правил (порядок авторский, не менять)
# ============================================================================

TRANSLITERATION_RULES: Tuple[Rule, ...] = (
    # Окончания прилагательных/причастий
    ("ionnyie", "ённые"),    # Izmienionnyie → Изменённые
    ("Ionnyie", "ённые"),
    ("IONNYIE", "ённые"),
    ("iennyie", "енные"),    # Dvurozhdiennyie → Двурожденные
    ("Iennyie", "енные"),
    ("ionnymi", "ёнными"),
    ("ennymi", "енными"),
    ("onnyie", "ённые"),
    ("ennyie", "енные"),

    ("Shch", "Щ"),
    ("shch", "щ"),
    ("SCHCH", "ЩЩ"),

    # Суффиксы и окончания
    ("iuzhie", "южие"),
    ("inghie", "ингие"),
    ("skiia", "ския"),
    ("skogo", "ского"),
    ("skomu", "скому"),

    ("iuz", "юз"),           # S'iuzien → Сьюзен
    ("ingh", "инг"),         # Kingh → Кинг
    ("Tsy", "Цы"),
    ("tsy", "цы"),
    ("skii", "ский"),
    ("skie", "ские"),
    ("skoi", "ской"),
    ("skaia", "ская"),
    ("skoe", "ское"),

    # Многобуквенные кириллические буквы
    ("Sh", "Ш"),
    ("sh", "ш"),
    ("Ch", "Ч"),
    ("ch", "ч"),
    ("Zh", "Ж"),
    ("zh", "ж"),
    ("Kh", "Х"),
    ("kh", "х"),
    ("Ts", "Ц"),
    ("ts", "ц"),
    ("Yu", "Ю"),
    ("yu", "ю"),
    ("Ya", "Я"),
    ("ya", "я"),
    ("Yo", "Ё"),
    ("yo", "ё"),
    ("E'", "Э"),
    ("e'", "э"),

    # Слоги и окончания
    ("iei", "ей"),           # Sierghiei → Сергей (раньше "ie")
    ("Iei", "ей"),
    ("IEI", "ей"),
    ("iEi", "ей"),
    ("IeI", "ей"),
    ("iEI", "ей"),
    ("iai", "яй"),
    ("ien", "ен"),           # Stivien → Стивен
    ("ion", "ён"),
    ("nyie", "ные"),
    ("nyi", "ный"),
    ("nye", "ные"),
    ("nykh", "ных"),
    ("ium", "юм"),
    ("iia", "ия"),           # Garsiia → Гарсия
    ("iin", "инь"),
    ("ian", "ян"),           # Luk'ianienko → Лукьяненко
    ("ier", "ер"),
    ("ing", "инг"),          # Roulingh → Роулинг
    ("ova", "ова"),
    ("evo", "ево"),
    ("evy", "евы"),
    ("yna", "ына"),
    ("ina", "ина"),
    ("ago", "аго"),
    ("ogo", "ого"),
    ("omu", "ому"),
    ("omy", "омы"),
    ("ymi", "ыми"),

    # Двухбуквенные — строго до однобуквенных
    ("Iu", "Ю"),             # Pom Iu → Пом Ю
    ("iu", "ю"),
    ("Ia", "Я"),
    ("ia", "я"),
    ("Io", "Ё"),
    ("io", "ё"),
    ("gh", "г"),             # Vierghiezie → Вергезе
    ("ai", "ай"),            # Uaild → Уайлд
    ("oi", "ой"),
    ("ui", "уй"),
    ("ei", "ей"),
    ("ie", "е"),             # Briendon → Брендон
    ("ye", "е"),
    ("Ye", "Е"),
    ("yi", "ый"),
    ("ykh", "ых"),
    ("ym", "ым"),
    # Согласная + y → ы (Dozory → Дозоры)
    ("ry", "ры"),
    ("ly", "лы"),
    ("ny", "ны"),
    ("ty", "ты"),
    ("sy", "сы"),
    ("my", "мы"),
    ("by", "бы"),
    ("vy", "вы"),
    ("gy", "гы"),
    ("dy", "ды"),
    ("zy", "зы"),
    ("ky", "кы"),
    ("py", "пы"),
    ("fy", "фы"),
    ("yu", "ю"),
    ("ya", "я"),
    ("yo", "ё"),
    ("ar'", "арь"),
    ("er'", "ерь"),
    ("ir'", "ирь"),
    ("or'", "орь"),
    ("ur'", "урь"),
    ("yr'", "ырь"),
    ("''", "ъ"),             # твёрдый знак
    ("'", "ь"),              # мягкий знак

    # Однобуквенные
    ("A", "А"),
    ("a", "а"),
    ("B", "Б"),
    ("b", "б"),
    ("V", "В"),
    ("v", "в"),
    ("G", "Г"),
    ("g", "г"),
    ("D", "Д"),
    ("d", "д"),
    ("E", "Е"),
    ("e", "е"),
    ("Z", "З"),
    ("z", "з"),
    ("I", "И"),
    ("i", "и"),
    ("Y", "Й"),
    ("y", "й"),
    ("K", "К"),
    ("k", "к"),
    ("L", "Л"),
    ("l", "л"),
    ("M", "М"),
    ("m", "м"),
    ("N", "Н"),
    ("n", "н"),
    ("O", "О"),
    ("o", "о"),
    ("P", "П"),
    ("p", "п"),
    ("R", "Р"),
    ("r", "р"),
    ("S", "С"),
    ("s", "с"),
    ("T", "Т"),
    ("t", "т"),
    ("U", "У"),
    ("u", "у"),
    ("F", "Ф"),
    ("f", "ф"),
    # c, h, j, q, w, x намеренно без правил
)


# ============================================================================
# Спецслучаи (до общей таблицы)
# ============================================================================

# Граница слова считается только по ASCII: кириллица в рабочей строке —
# уже заменённый текст, а не буквы исходника.
_ASCII_WORD = "0-9A-Za-z"
_CONSONANTS = "bcdfghklmnprstvzBCDFGHKLMNPRSTVZ"
# Ровно один ASCII-символ, не буква и не цифра
_ASCII_NON_WORD = r"[\x00-\x2f\x3a-\x40\x5b-\x60\x7b-\x7f]"


@dataclass(frozen=True)
class SpecialCase:
    """Именованная замена с граничным условием."""

    name: str
    pattern: re.Pattern[str]
    replacement: str

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


SPECIAL_CASES: Tuple[SpecialCase, ...] = (
    # "Iu" раньше одиночной "I"
    SpecialCase("iu_upper", re.compile("Iu"), "Ю"),
    SpecialCase("iu_lower", re.compile("iu"), "ю"),
    # Порталы, Дозоры: y после согласной в конце слова
    SpecialCase(
        "consonant_y_plural",
        re.compile(rf"([{_CONSONANTS}])y(?![{_ASCII_WORD}])"),
        r"\1ы",
    ),
    # "iel" → "ель" только перед мягким знаком или в самом конце,
    # иначе Pienielopa → Пенелопа ломается
    SpecialCase("iel_soft_sign", re.compile("iel'"), "ель'"),
    SpecialCase("iel_final", re.compile(rf"iel(?={_ASCII_NON_WORD}?\Z)"), "ель"),
    SpecialCase("iel_soft_sign_upper", re.compile("Iel'"), "Ель'"),
    SpecialCase("iel_final_upper", re.compile(rf"Iel(?={_ASCII_NON_WORD}?\Z)"), "Ель"),
)


def compile_rule_table(rules: Sequence[Rule]) -> Tuple[Rule, ...]:
    """
    Упорядочивает правила: длинные паттерны первыми, при равной длине
    сохраняется авторский порядок.
    """
    indexed = sorted(enumerate(rules), key=lambda pair: (-len(pair[1][0]), pair[0]))
    return tuple(rule for _, rule in indexed)
