"""Declared formula metadata and Homebrew formula rendering."""

from __future__ import annotations

from dataclasses import dataclass

from .resolver import DEFAULT_REPO, LATEST, PLATFORM_ARTIFACTS, download_url


@dataclass(frozen=True)
class FormulaSpec:
    name: str
    desc: str
    homepage: str
    license: str
    version: str
    repo: str
    binary_name: str


FORMULA = FormulaSpec(
    name="tradier",
    desc="CLI tool for the Tradier brokerage API",
    homepage="https://github.com/cloudmanic/tradier",
    license="MIT",
    version=LATEST,
    repo=DEFAULT_REPO,
    binary_name="tradier",
)

_COPYRIGHT = (
    "#",
    "# Copyright 2026 Cloudmanic Labs, LLC. All rights reserved.",
    "# Date: 2026-02-17",
    "#",
    "",
)

_RUBY_OS = {"mac": "OS.mac?", "linux": "OS.linux?"}
_RUBY_CPU = {"arm": "Hardware::CPU.arm?", "intel": "Hardware::CPU.intel?"}


def class_name(name: str) -> str:
    return "".join(part.capitalize() for part in name.replace("_", "-").split("-") if part)


def render_ruby(formula: FormulaSpec = FORMULA, tag: str = LATEST) -> str:
    """Render the Homebrew formula equivalent of the platform table."""
    lines = [
        *_COPYRIGHT,
        f"# Homebrew formula for the {class_name(formula.name)} CLI. Downloads pre-built binaries",
        "# from GitHub releases for the current platform and architecture.",
        f"class {class_name(formula.name)} < Formula",
        f'  desc "{formula.desc}"',
        f'  homepage "{formula.homepage}"',
        f'  license "{formula.license}"',
        f'  version "{formula.version if tag == LATEST else tag}"',
        "",
    ]

    for idx, (target, artifact) in enumerate(PLATFORM_ARTIFACTS.items()):
        keyword = "if" if idx == 0 else "elsif"
        lines.append(f"  {keyword} {_RUBY_OS[target.os_name]} && {_RUBY_CPU[target.arch]}")
        lines.append(f'    url "{download_url(artifact, repo=formula.repo, tag=tag)}"')
    lines.append("  end")

    lines += [
        "",
        "  def install",
        '    binary_name = stable.url.split("/").last',
        f'    bin.install binary_name => "{formula.binary_name}"',
        "  end",
        "",
        "  test do",
        f'    assert_match "{formula.binary_name} version", '
        f'shell_output("#{{bin}}/{formula.binary_name} --version")',
        "  end",
        "end",
    ]
    return "\n".join(lines) + "\n"
