"""Failure taxonomy for formula installs."""

from __future__ import annotations

from pathlib import Path


class FormulaError(RuntimeError):
    exit_code = 1


class UnsupportedPlatformError(FormulaError):
    exit_code = 3

    def __init__(self, os_name: str, arch: str) -> None:
        super().__init__(f"No tradier binary published for {os_name}/{arch}")
        self.os_name = os_name
        self.arch = arch


class NetworkError(FormulaError):
    exit_code = 4

    def __init__(self, url: str, reason: object) -> None:
        super().__init__(f"Download failed for {url}: {reason}")
        self.url = url
        self.reason = reason


class NotFoundError(FormulaError):
    exit_code = 5

    def __init__(self, url: str) -> None:
        super().__init__(f"Release artifact not found: {url}")
        self.url = url


class VerificationFailed(FormulaError):
    exit_code = 6

    def __init__(self, binary_path: Path, detail: str, output: str = "") -> None:
        super().__init__(f"Verification of {binary_path} failed: {detail}")
        self.binary_path = binary_path
        self.detail = detail
        self.output = output


class ConfigurationError(FormulaError):
    exit_code = 7
