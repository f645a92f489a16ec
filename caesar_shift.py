#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Сдвиг Цезаря по латинскому алфавиту: побайтовое преобразование и потоковое применение"""

from functools import lru_cache
from typing import BinaryIO, Iterator, Union

ALPHABET_SIZE = 26
CHUNK_SIZE = 64 * 1024

_UPPER_BASE = ord('A')
_LOWER_BASE = ord('a')


# ═══════════════════════════════════════════════════════════════════════════════
# ПРЕОБРАЗОВАНИЕ БАЙТА
# ═══════════════════════════════════════════════════════════════════════════════

def normalize_shift(shift: int) -> int:
    """Приводит любой сдвиг (в т.ч. отрицательный) к диапазону [0, 26)"""
    return ((shift % ALPHABET_SIZE) + ALPHABET_SIZE) % ALPHABET_SIZE


def shift_byte(shift: int, c: int) -> int:
    """
    Сдвигает один байт на shift позиций вправо.
    A-Z и a-z циклически сдвигаются с сохранением регистра,
    все остальные байты возвращаются без изменений.
    """
    shift = normalize_shift(shift)

    if _UPPER_BASE <= c <= ord('Z'):
        base = _UPPER_BASE
    elif _LOWER_BASE <= c <= ord('z'):
        base = _LOWER_BASE
    else:
        return c

    return base + (c - base + shift) % ALPHABET_SIZE


@lru_cache(maxsize=ALPHABET_SIZE)
def _table(shift: int) -> bytes:
    return bytes(shift_byte(shift, b) for b in range(256))


def shift_table(shift: int) -> bytes:
    """Таблица для bytes.translate(): 256 байт, по одному на каждое значение"""
    return _table(normalize_shift(shift))


def shift_bytes(shift: int, data: bytes) -> bytes:
    """Сдвигает готовую последовательность байт целиком"""
    return bytes(data).translate(shift_table(shift))


# ═══════════════════════════════════════════════════════════════════════════════
# ПОТОКОВОЕ ПРИМЕНЕНИЕ
# ═══════════════════════════════════════════════════════════════════════════════

def iter_shifted(
    shift: int, source: BinaryIO, chunk_size: int = CHUNK_SIZE
) -> Iterator[bytes]:
    """
    Читает поток до EOF и отдаёт сдвинутые куски.
    Память ограничена chunk_size, длина входа не важна.
    """
    table = shift_table(shift)
    # read1 отдаёт то, что уже доступно, и не ждёт заполнения всего куска
    read = getattr(source, 'read1', source.read)

    while True:
        chunk = read(chunk_size)
        if not chunk:
            break
        yield chunk.translate(table)


def shift_stream(
    shift: int,
    source: Union[bytes, bytearray, memoryview, BinaryIO],
    sink: BinaryIO,
    chunk_size: int = CHUNK_SIZE,
) -> int:
    """
    Применяет сдвиг ко всему источнику и пишет результат в sink.

    source: либо готовые байты (сообщение из аргумента),
    либо бинарный поток (stdin). Каждый кусок записывается и сбрасывается
    до чтения следующего. Ошибки ввода-вывода не перехватываются.

    Возвращает число записанных байт (всегда равно числу прочитанных).
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        chunks = iter([shift_bytes(shift, source)])
    else:
        chunks = iter_shifted(shift, source, chunk_size)

    written = 0
    for chunk in chunks:
        sink.write(chunk)
        sink.flush()
        written += len(chunk)

    return written
