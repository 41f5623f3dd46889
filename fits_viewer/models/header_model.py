"""Модель заголовка FITS.

Принципы:
- Значение карточки хранится как явный размеченный тип (`HeaderValue`),
  а не как «что-то строкового или числового вида».
- Заголовок неизменяем; порядок ключей совпадает с порядком карточек.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple, Union

CARD_LENGTH = 80
BLOCK_LENGTH = 2880


class ValueKind(Enum):
    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"


@dataclass(frozen=True)
class HeaderValue:
    """Типизированное значение карточки заголовка.

    Fields:
        kind: Вид значения.
        value: Python-значение, соответствующее `kind`.
    """
    kind: ValueKind
    value: Union[str, bool, int, float]

    @classmethod
    def string(cls, value: str) -> "HeaderValue":
        return cls(ValueKind.STRING, value)

    @classmethod
    def boolean(cls, value: bool) -> "HeaderValue":
        return cls(ValueKind.BOOLEAN, bool(value))

    @classmethod
    def integer(cls, value: int) -> "HeaderValue":
        return cls(ValueKind.INTEGER, int(value))

    @classmethod
    def floating(cls, value: float) -> "HeaderValue":
        return cls(ValueKind.FLOAT, float(value))

    @property
    def is_number(self) -> bool:
        return self.kind in (ValueKind.INTEGER, ValueKind.FLOAT)

    def __str__(self) -> str:
        if self.kind is ValueKind.BOOLEAN:
            return "T" if self.value else "F"
        if self.kind is ValueKind.STRING:
            return f"'{self.value}'"
        return str(self.value)


@dataclass(frozen=True)
class FitsHeader(Mapping[str, HeaderValue]):
    """Неизменяемый упорядоченный заголовок.

    Fields:
        entries: Ключ (до 8 символов) -> типизированное значение.
        cards: Сырые 80-символьные карточки до END (включая COMMENT/HISTORY).
    """
    entries: Mapping[str, HeaderValue] = field(default_factory=dict)
    cards: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def __getitem__(self, key: str) -> HeaderValue:
        return self.entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def number(self, key: str, default: Optional[float] = None) -> Optional[float]:
        """Числовое значение ключа или `default`, если ключа нет или он не числовой."""
        item = self.entries.get(key)
        if item is None or not item.is_number:
            return default
        return item.value  # type: ignore[return-value]

    @property
    def width(self) -> int:
        return int(self.number("NAXIS1", 0))

    @property
    def height(self) -> int:
        return int(self.number("NAXIS2", 0))

    @property
    def bitpix(self) -> int:
        return int(self.number("BITPIX", 0))

    @property
    def bzero(self) -> float:
        return float(self.number("BZERO") or 0.0)

    @property
    def bscale(self) -> float:
        # нулевой BSCALE трактуется как отсутствующий
        return float(self.number("BSCALE") or 1.0)
