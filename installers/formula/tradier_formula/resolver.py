"""Release artifact resolution for OS/architecture specific binaries."""

from __future__ import annotations

import platform
from dataclasses import dataclass

from .errors import UnsupportedPlatformError


RELEASE_HOST = "https://github.com"
DEFAULT_REPO = "cloudmanic/tradier"
LATEST = "latest"


@dataclass(frozen=True)
class PlatformTarget:
    os_name: str
    arch: str


PLATFORM_ARTIFACTS: dict[PlatformTarget, str] = {
    PlatformTarget("mac", "arm"): "tradier-darwin-arm64",
    PlatformTarget("mac", "intel"): "tradier-darwin-amd64",
    PlatformTarget("linux", "arm"): "tradier-linux-arm64",
    PlatformTarget("linux", "intel"): "tradier-linux-amd64",
}


def _normalize_os(system: str) -> str:
    s = system.strip().lower()
    if s.startswith("darwin") or s.startswith("mac"):
        return "mac"
    if s.startswith("linux"):
        return "linux"
    if s.startswith("win"):
        return "windows"
    return s


def _normalize_arch(machine: str) -> str:
    m = machine.strip().lower()
    if m in ("arm64", "aarch64", "arm") or m.startswith("armv8"):
        return "arm"
    if m in ("x86_64", "amd64", "x64", "intel"):
        return "intel"
    return m


def resolve_target(system: str, machine: str) -> PlatformTarget:
    return PlatformTarget(os_name=_normalize_os(system), arch=_normalize_arch(machine))


def current_target(system: str | None = None, machine: str | None = None) -> PlatformTarget:
    """Resolve the host target; an explicit ``system`` or ``machine`` replaces the detected value."""
    return resolve_target(system or platform.system(), machine or platform.machine())


def resolve_artifact(target: PlatformTarget) -> str:
    """Return the download identifier for ``target``.

    Raises UnsupportedPlatformError for anything outside the four published
    binaries; callers rely on this happening before any network access.
    """
    try:
        return PLATFORM_ARTIFACTS[target]
    except KeyError:
        raise UnsupportedPlatformError(target.os_name, target.arch) from None


def download_url(artifact: str, repo: str = DEFAULT_REPO, tag: str = LATEST) -> str:
    tag = (tag or LATEST).strip()
    if tag == LATEST:
        return f"{RELEASE_HOST}/{repo}/releases/latest/download/{artifact}"
    return f"{RELEASE_HOST}/{repo}/releases/download/{tag}/{artifact}"
