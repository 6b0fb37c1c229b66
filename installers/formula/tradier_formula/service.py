"""Resolve, fetch, install and verify the tradier binary."""

from __future__ import annotations

import http.client
import logging
import os
import shutil
import ssl
import subprocess
import tempfile
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import certifi

from .errors import ConfigurationError, NetworkError, NotFoundError, VerificationFailed
from .formula import FORMULA
from .resolver import LATEST, PlatformTarget, current_target, download_url, resolve_artifact


ProgressCallback = Callable[[str], None]

BINARY_NAME = FORMULA.binary_name
VERSION_MARKER = f"{BINARY_NAME} version"

log = logging.getLogger(__name__)


def default_bin_dir() -> Path:
    override = os.environ.get("TRADIER_FORMULA_BIN_DIR", "").strip()
    if override:
        return Path(override).expanduser()
    prefix = os.environ.get("HOMEBREW_PREFIX", "").strip()
    if prefix:
        return Path(prefix) / "bin"
    return Path.home() / ".local" / "bin"


def _build_ssl_context(ca_bundle: str | None = None) -> ssl.SSLContext:
    """Create a verified TLS context, honouring an explicit CA bundle first."""
    ca_bundle = (ca_bundle or os.environ.get("TRADIER_CA_BUNDLE", "")).strip()
    if ca_bundle:
        if not Path(ca_bundle).is_file():
            raise ConfigurationError(f"CA bundle not found: {ca_bundle}")
        return ssl.create_default_context(cafile=ca_bundle)
    return ssl.create_default_context(cafile=certifi.where())


def _urlopen(url: str, timeout: int, ca_bundle: str | None = None):
    request = urllib.request.Request(
        url,
        headers={
            "User-Agent": f"tradier-formula/0.1 (+{FORMULA.homepage})",
            "Accept": "application/octet-stream",
        },
    )
    return urllib.request.urlopen(request, timeout=timeout, context=_build_ssl_context(ca_bundle))


def download_file(url: str, dest: Path, timeout: int = 180, ca_bundle: str | None = None) -> Path:
    try:
        with _urlopen(url, timeout=timeout, ca_bundle=ca_bundle) as response, dest.open("wb") as fh:
            shutil.copyfileobj(response, fh)
    except urllib.error.HTTPError as exc:
        if exc.code == 404:
            raise NotFoundError(url) from exc
        raise NetworkError(url, f"HTTP {exc.code}") from exc
    except urllib.error.URLError as exc:
        raise NetworkError(url, exc.reason) from exc
    except (TimeoutError, ConnectionError, ssl.SSLError, http.client.HTTPException) as exc:
        raise NetworkError(url, exc) from exc
    return dest


def install_binary(source: Path, bin_dir: Path) -> Path:
    """Place ``source`` at ``bin_dir/tradier`` with executable permission.

    The previous binary, if any, is replaced atomically.
    """
    bin_dir.mkdir(parents=True, exist_ok=True)
    target = bin_dir / BINARY_NAME
    staging = bin_dir / f".{BINARY_NAME}.partial"
    try:
        shutil.copyfile(source, staging)
        staging.chmod(0o755)
        os.replace(staging, target)
    finally:
        if staging.exists():
            staging.unlink()
    return target


def verify_install(binary_path: Path, timeout: int = 30) -> str:
    try:
        proc = subprocess.run(
            [str(binary_path), "--version"],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        raise VerificationFailed(binary_path, f"timed out after {timeout}s") from exc
    except OSError as exc:
        raise VerificationFailed(binary_path, f"could not execute: {exc}") from exc

    output = (proc.stdout or "") + (proc.stderr or "")
    if proc.returncode != 0:
        raise VerificationFailed(binary_path, f"exited with code {proc.returncode}", output)
    if VERSION_MARKER not in output:
        raise VerificationFailed(binary_path, f"output does not contain {VERSION_MARKER!r}", output)
    return output.strip()


@dataclass(frozen=True)
class InstallResult:
    target: PlatformTarget
    artifact: str
    url: str
    binary_path: Path
    version_output: str | None


def install_formula(
    bin_dir: Path | None = None,
    repo: str = FORMULA.repo,
    tag: str = LATEST,
    system: str | None = None,
    machine: str | None = None,
    timeout_s: int = 180,
    ca_bundle: str | None = None,
    verify: bool = True,
    verify_timeout_s: int = 30,
    progress: ProgressCallback | None = None,
) -> InstallResult:
    progress = progress or (lambda _msg: None)
    bin_dir = bin_dir or default_bin_dir()

    progress("Resolving platform")
    target = current_target(system, machine)
    artifact = resolve_artifact(target)
    url = download_url(artifact, repo=repo, tag=tag)
    log.info("resolved %s/%s to %s", target.os_name, target.arch, artifact, extra={"event": "resolved"})

    with tempfile.TemporaryDirectory(prefix="tradier-formula-") as tmp:
        staged = Path(tmp) / artifact
        progress(f"Downloading {artifact}")
        download_file(url, staged, timeout=timeout_s, ca_bundle=ca_bundle)
        log.info("fetched %s (%d bytes)", url, staged.stat().st_size, extra={"event": "fetched"})

        progress(f"Installing to {bin_dir}")
        binary_path = install_binary(staged, bin_dir)
        log.info("installed %s", binary_path, extra={"event": "installed"})

    version_output: str | None = None
    if verify:
        progress("Verifying install")
        version_output = verify_install(binary_path, timeout=verify_timeout_s)
        log.info("verified %s: %s", binary_path, version_output, extra={"event": "verified"})

    progress("Install complete")
    return InstallResult(
        target=target,
        artifact=artifact,
        url=url,
        binary_path=binary_path,
        version_output=version_output,
    )
