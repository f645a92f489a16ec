#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CAESAR SHIFT
━━━━━━━━━━━━
Шифрование и расшифровка сообщений шифром Цезаря:
  1. Ключ задаётся через -e (сдвиг вправо) или -d (сдвиг влево)
  2. Сообщение берётся из аргумента, иначе читается из stdin потоком
  3. Результат пишется в stdout байт в байт, без обрамления
"""

import os
import re
import sys
import logging
import argparse
from typing import BinaryIO, List, Optional, Tuple

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from caesar_shift import shift_stream

logger = logging.getLogger(__name__)

ENCRYPT = 'encrypt'
DECRYPT = 'decrypt'

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_INTERRUPTED = 130

# Пробелы в начале, необязательный знак, затем только десятичные цифры
_KEY_RE = re.compile(r'\s*[+-]?[0-9]+')

DESCRIPTION = """\
Encrypt or decrypt the supplied message with a given key. The
key should be a non-negative base 10 integer. This integer is used
to either right-shift (encrypt) or left-shift (decrypt) the ASCII
letters in the message.

Any non-letter bytes in the message are left unchanged. The
encrypted or decrypted message is written to standard output.
If msg is omitted, the message is read from standard input."""


# ═══════════════════════════════════════════════════════════════════════════════
# UI (Rich)
# ═══════════════════════════════════════════════════════════════════════════════

class UI:
    """Сообщения для человека: только stderr, stdout занят данными"""

    def __init__(self, console: Optional[Console] = None):
        self.c = console or Console(stderr=True)

    def error(self, message: str):
        self.c.print(f"[bold red]❌ {escape(message)}[/bold red]")


def setup_logging(verbose: bool = False) -> None:
    """Логи приложения на stderr через Rich; корневой логгер не трогаем"""
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    # main() может вызываться повторно: обработчик всегда один
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


# ═══════════════════════════════════════════════════════════════════════════════
# АРГУМЕНТЫ
# ═══════════════════════════════════════════════════════════════════════════════

def parse_key(arg: str) -> int:
    """
    Разбирает ключ как десятичное целое.
    Ключ должен помещаться в знаковое целое платформы и быть неотрицательным.
    """
    if not _KEY_RE.fullmatch(arg):
        raise argparse.ArgumentTypeError(
            f"key must be a non-negative base 10 integer: {arg!r}")

    key = int(arg)
    if not -sys.maxsize - 1 <= key <= sys.maxsize:
        raise argparse.ArgumentTypeError(f"key is out of range: {arg!r}")
    if key < 0:
        raise argparse.ArgumentTypeError(
            f"key must be a non-negative base 10 integer: {arg!r}")

    return key


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog='caesar',
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    mode = p.add_mutually_exclusive_group(required=True)
    mode.add_argument('-d', '--decrypt', type=parse_key, metavar='KEY',
                      help='Decrypt message using the given key')
    mode.add_argument('-e', '--encrypt', type=parse_key, metavar='KEY',
                      help='Encrypt message using the given key')
    p.add_argument('msg', nargs='?',
                   help='ASCII text to encrypt or decrypt (default: stdin)')
    p.add_argument('-v', '--verbose', action='store_true',
                   help='Debug logging to stderr')
    return p


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def effective_shift(args: argparse.Namespace) -> Tuple[str, int]:
    """Режим и сдвиг для ядра: для расшифровки ключ берётся со знаком минус"""
    if args.encrypt is not None:
        return ENCRYPT, args.encrypt
    return DECRYPT, -args.decrypt


# ═══════════════════════════════════════════════════════════════════════════════
# ПРИЛОЖЕНИЕ
# ═══════════════════════════════════════════════════════════════════════════════

def _silence_stdout():
    """После обрыва pipe интерпретатор не должен снова писать в stdout при выходе"""
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())
    os.close(devnull)


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    real_stdout = stdout is None
    stdin = stdin if stdin is not None else sys.stdin.buffer
    stdout = stdout if stdout is not None else sys.stdout.buffer

    mode, shift = effective_shift(args)
    logger.debug("mode=%s shift=%d", mode, shift)

    ui = UI()
    try:
        if args.msg is not None:
            # Исходные байты argv, без перекодирования
            source = os.fsencode(args.msg)
            logger.debug("input: argument, %d bytes", len(source))
        else:
            source = stdin
            logger.debug("input: stdin stream")

        count = shift_stream(shift, source, stdout)
        logger.debug("written: %d bytes", count)

        if stdout.isatty():
            stdout.write(b'\n')
            stdout.flush()
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED
    except BrokenPipeError:
        # Читатель закрыл pipe раньше времени: молча выходим с ошибкой
        if real_stdout:
            _silence_stdout()
        return EXIT_IO_ERROR
    except OSError as e:
        ui.error(str(e))
        return EXIT_IO_ERROR

    return EXIT_OK


def run():
    raise SystemExit(main())


if __name__ == '__main__':
    run()
