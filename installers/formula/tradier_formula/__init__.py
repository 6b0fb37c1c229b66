"""Platform-aware installer for the prebuilt tradier CLI binary."""

from .errors import (
    ConfigurationError,
    FormulaError,
    NetworkError,
    NotFoundError,
    UnsupportedPlatformError,
    VerificationFailed,
)
from .formula import FORMULA, FormulaSpec, render_ruby
from .resolver import (
    PLATFORM_ARTIFACTS,
    PlatformTarget,
    current_target,
    download_url,
    resolve_artifact,
    resolve_target,
)
from .service import InstallResult, download_file, install_binary, install_formula, verify_install

__all__ = [
    "ConfigurationError",
    "FORMULA",
    "FormulaError",
    "FormulaSpec",
    "InstallResult",
    "NetworkError",
    "NotFoundError",
    "PLATFORM_ARTIFACTS",
    "PlatformTarget",
    "UnsupportedPlatformError",
    "VerificationFailed",
    "current_target",
    "download_file",
    "download_url",
    "install_binary",
    "install_formula",
    "render_ruby",
    "resolve_artifact",
    "resolve_target",
    "verify_install",
]
