#!/usr/bin/env python3
"""Logging utilities for skeleton."""

import os
import sys

import colorama

from security import SecurityValidator

colorama.init(autoreset=True)


class Logger:
    """Severity-prefixed console output with colors and credential redaction."""

    PROCESS_NAME = "skeleton"

    @classmethod
    def debug(cls, *messages: str) -> None:
        if not os.getenv("SKELETON_DEBUG"):
            return
        cls._write_stdout(colorama.Fore.LIGHTBLACK_EX, "DEBUG", *messages)

    @classmethod
    def info(cls, *messages: str) -> None:
        cls._write_stdout(colorama.Fore.CYAN, "INFO", *messages)

    @classmethod
    def ok(cls, *messages: str) -> None:
        cls._write_stdout(colorama.Fore.GREEN, "OK", *messages)

    @classmethod
    def warn(cls, *messages: str) -> None:
        cls._write_stdout(colorama.Fore.YELLOW, "WARN", *messages)

    @classmethod
    def error(cls, *messages: str) -> None:
        cls._write_stderr(colorama.Fore.RED, "ERROR", *messages)

    @classmethod
    def _write_stdout(cls, color: str, level: str, *messages: str) -> None:
        sys.stdout.write(cls._format_line(color, level, *messages) + "\n")

    @classmethod
    def _write_stderr(cls, color: str, level: str, *messages: str) -> None:
        sys.stderr.write(cls._format_line(color, level, *messages) + "\n")

    @classmethod
    def _get_header(cls, level: str) -> str:
        return f"[{cls.PROCESS_NAME}:{os.getpid()}] {level:<5}"

    @classmethod
    def _format_line(cls, color: str, level: str, *messages: str) -> str:
        header = cls._get_header(level)
        message = " ".join(
            SecurityValidator.sanitize_for_logging(str(m)) for m in messages
        )
        return f"{color}{header}{colorama.Style.RESET_ALL} {message}"
