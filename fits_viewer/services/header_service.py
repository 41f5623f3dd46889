"""Разбор и проверка заголовка FITS.

Принципы:
- SRP: `HeaderParser` только читает карточки, `HeaderValidator` только проверяет
  обязательные ключи и вычисляет смещение данных.
- Порядок определения типа значения задаётся настройкой `value_typing`.
"""
from __future__ import annotations

import logging
import math
import re
from typing import List, Optional, Tuple

from fits_viewer.errors import FormatError, ValidationError
from fits_viewer.models.header_model import (
    BLOCK_LENGTH,
    CARD_LENGTH,
    FitsHeader,
    HeaderValue,
    ValueKind,
)

logger = logging.getLogger(__name__)

_END_CARD = re.compile(r"END *$")
_INTEGER = re.compile(r"[+-]?\d+$")

REQUIRED_NUMERIC_KEYS = ("NAXIS1", "NAXIS2", "BITPIX")


def _to_number(text: str) -> Optional[HeaderValue]:
    """Целое, если строка целиком целое, иначе вещественное; None, если не число."""
    text = text.strip()
    if _INTEGER.match(text):
        return HeaderValue.integer(int(text))
    try:
        return HeaderValue.floating(float(text.replace("D", "E").replace("d", "e")))
    except ValueError:
        return None


class HeaderParser:
    """Читает 80-байтовые карточки до END.

    Args:
        value_typing: "legacy" — приоритет кавычка → T → F → точка → целое;
            "strict" — разбор по фиксированному формату FITS.
        max_cards: Сколько карточек просматривать, прежде чем признать файл не-FITS.
    """

    def __init__(self, value_typing: str = "legacy", max_cards: int = 3600) -> None:
        if value_typing not in ("legacy", "strict"):
            raise ValueError(f"неизвестный режим типизации: {value_typing}")
        self.value_typing = value_typing
        self.max_cards = max_cards

    def parse(self, buffer: bytes) -> Tuple[FitsHeader, int]:
        """Возвращает заголовок и длину заголовка в байтах (включая карточку END).

        Raises:
            FormatError: буфер короче одной карточки, не-ASCII байты, или END
                не найден в пределах `max_cards` карточек.
        """
        data = memoryview(buffer)
        if len(data) < CARD_LENGTH:
            raise FormatError(f"не FITS-файл: {len(data)} байт, меньше одной карточки")

        entries: dict[str, HeaderValue] = {}
        raw_cards: List[str] = []
        for index in range(self.max_cards):
            start = index * CARD_LENGTH
            if start + CARD_LENGTH > len(data):
                raise FormatError(f"не FITS-файл: нет карточки END в первых {index} карточках")
            try:
                card = bytes(data[start:start + CARD_LENGTH]).decode("ascii")
            except UnicodeDecodeError as exc:
                raise FormatError(f"не FITS-файл: карточка {index} не ASCII") from exc

            if _END_CARD.match(card):
                header_length = start + CARD_LENGTH
                break

            raw_cards.append(card)
            parsed = self._parse_card(card)
            if parsed is not None:
                key, value = parsed
                entries[key] = value
        else:
            raise FormatError(f"не FITS-файл: нет карточки END в первых {self.max_cards} карточках")

        logger.debug("Заголовок: %d карточек, %d ключей, %d байт", len(raw_cards), len(entries), header_length)
        return FitsHeader(entries=entries, cards=tuple(raw_cards)), header_length

    # ---- Карточки ----
    def _parse_card(self, card: str) -> Optional[Tuple[str, HeaderValue]]:
        if self.value_typing == "strict":
            return self._parse_card_strict(card)
        return self._parse_card_legacy(card)

    def _parse_card_legacy(self, card: str) -> Optional[Tuple[str, HeaderValue]]:
        if "=" not in card:  # COMMENT, HISTORY etc
            return None
        key = card[:8].rstrip()
        text = card[10:].lstrip()
        text = text.split("/", 1)[0].rstrip()

        if "'" in text:
            if text.startswith("'"):
                return key, HeaderValue.string(self._read_quoted(text))
            return key, HeaderValue.string(text.strip("'").rstrip())
        if "T" in text:
            return key, HeaderValue.boolean(True)
        if "F" in text:
            return key, HeaderValue.boolean(False)
        if "." in text:
            try:
                return key, HeaderValue.floating(float(text))
            except ValueError:
                pass
        number = _to_number(text)
        if number is None:
            logger.warning("Ключ %s: значение %r не число, сохранено как строка", key, text)
            return key, HeaderValue.string(text)
        return key, number

    def _parse_card_strict(self, card: str) -> Optional[Tuple[str, HeaderValue]]:
        if card[8:10] != "= ":
            return None
        key = card[:8].rstrip()
        rest = card[10:].lstrip()

        if rest.startswith("'"):
            return key, HeaderValue.string(self._read_quoted(rest))

        text = rest.split("/", 1)[0].strip()
        if text == "T":
            return key, HeaderValue.boolean(True)
        if text == "F":
            return key, HeaderValue.boolean(False)
        number = _to_number(text)
        if number is None:
            if text:
                logger.warning("Ключ %s: значение %r не распознано, сохранено как строка", key, text)
            return key, HeaderValue.string(text)
        return key, number

    @staticmethod
    def _read_quoted(text: str) -> str:
        # '' inside the literal is an escaped quote
        chars: List[str] = []
        i = 1
        while i < len(text):
            ch = text[i]
            if ch == "'":
                if i + 1 < len(text) and text[i + 1] == "'":
                    chars.append("'")
                    i += 2
                    continue
                break
            chars.append(ch)
            i += 1
        return "".join(chars).rstrip()


class HeaderValidator:
    """Проверяет минимальный заголовок и вычисляет начало пиксельных данных."""

    def validate(self, header: FitsHeader, header_length: int) -> int:
        """Возвращает смещение данных (кратно 2880).

        Raises:
            ValidationError: SIMPLE не T, или NAXIS1/NAXIS2/BITPIX отсутствуют,
                не числовые, либо размеры не целые неотрицательные.
        """
        simple = header.get("SIMPLE")
        if simple is None or simple.kind is not ValueKind.BOOLEAN or not simple.value:
            raise ValidationError("SIMPLE", None if simple is None else simple.value)

        for key in REQUIRED_NUMERIC_KEYS:
            item = header.get(key)
            if item is None or not item.is_number:
                raise ValidationError(key, None if item is None else item.value)
            value = float(item.value)
            if not value.is_integer():
                raise ValidationError(key, item.value)
            if key != "BITPIX" and value < 0:
                raise ValidationError(key, item.value)

        return data_offset(header_length)


def data_offset(header_length: int) -> int:
    """Длина заголовка, округлённая вверх до целого числа блоков по 2880 байт."""
    return int(math.ceil(header_length / BLOCK_LENGTH)) * BLOCK_LENGTH
