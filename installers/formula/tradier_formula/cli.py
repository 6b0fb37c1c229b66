"""CLI entrypoints for resolving, installing and checking the tradier binary."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

from formula_core import config_path, load_config
from formula_core.logging_setup import configure_logging, get_logger

from .errors import FormulaError
from .formula import FORMULA, render_ruby
from .resolver import PLATFORM_ARTIFACTS, current_target, download_url, resolve_artifact
from .service import BINARY_NAME, default_bin_dir, install_formula, verify_install


def _print_json(data: object, stream=None) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str), file=stream or sys.stdout)


def _bin_dir(args: argparse.Namespace, configured: str | None) -> Path:
    if args.bin_dir:
        return Path(args.bin_dir).expanduser()
    if configured:
        return Path(configured).expanduser()
    return default_bin_dir()


def cmd_info(_args: argparse.Namespace) -> int:
    payload = asdict(FORMULA)
    payload["platforms"] = [
        {"os": t.os_name, "arch": t.arch, "artifact": artifact} for t, artifact in PLATFORM_ARTIFACTS.items()
    ]
    _print_json(payload)
    return 0


def cmd_resolve(args: argparse.Namespace) -> int:
    cfg = load_config()
    target = current_target(args.os, args.arch)
    artifact = resolve_artifact(target)
    _print_json(
        {
            "target_os": target.os_name,
            "target_arch": target.arch,
            "artifact": artifact,
            "url": download_url(artifact, repo=cfg.release.repo, tag=args.tag or cfg.release.tag),
        }
    )
    return 0


def cmd_install(args: argparse.Namespace) -> int:
    cfg = load_config()
    logger = get_logger()
    result = install_formula(
        bin_dir=_bin_dir(args, cfg.install.bin_dir),
        repo=cfg.release.repo,
        tag=args.tag or cfg.release.tag,
        timeout_s=cfg.network.timeout_s,
        ca_bundle=cfg.network.ca_bundle,
        verify=cfg.verify.enabled and not args.no_verify,
        verify_timeout_s=cfg.verify.timeout_s,
        progress=logger.info,
    )
    _print_json(
        {
            "success": True,
            "target_os": result.target.os_name,
            "target_arch": result.target.arch,
            "artifact": result.artifact,
            "url": result.url,
            "path": str(result.binary_path),
            "verified": result.version_output is not None,
            "version_output": result.version_output,
        }
    )
    return 0


def cmd_test(args: argparse.Namespace) -> int:
    cfg = load_config()
    binary_path = _bin_dir(args, cfg.install.bin_dir) / BINARY_NAME
    output = verify_install(binary_path, timeout=cfg.verify.timeout_s)
    _print_json({"success": True, "path": str(binary_path), "version_output": output})
    return 0


def cmd_formula(args: argparse.Namespace) -> int:
    cfg = load_config()
    text = render_ruby(FORMULA, tag=args.tag or cfg.release.tag)
    if args.output:
        out = Path(args.output).expanduser()
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding="utf-8")
        _print_json({"success": True, "path": str(out)})
    else:
        sys.stdout.write(text)
    return 0


def cmd_config(_args: argparse.Namespace) -> int:
    cfg = load_config()
    _print_json({"path": str(config_path()), "config": asdict(cfg)})
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tradier-formula", description="Install the tradier CLI binary")
    parser.add_argument("--verbose", action="store_true", help="Echo log lines to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    info_cmd = sub.add_parser("info", help="Print formula metadata and platform table")
    info_cmd.set_defaults(func=cmd_info)

    resolve_cmd = sub.add_parser("resolve", help="Show which artifact this host would download")
    resolve_cmd.add_argument("--os", default=None, help="Override detected OS (e.g. Darwin, linux)")
    resolve_cmd.add_argument("--arch", default=None, help="Override detected architecture (e.g. arm64, x86_64)")
    resolve_cmd.add_argument("--tag", default=None, help="Release tag or 'latest'")
    resolve_cmd.set_defaults(func=cmd_resolve)

    install_cmd = sub.add_parser("install", help="Download, install and verify the binary")
    install_cmd.add_argument("--bin-dir", default=None, help="Directory to install the binary into")
    install_cmd.add_argument("--tag", default=None, help="Release tag or 'latest'")
    install_cmd.add_argument("--no-verify", action="store_true", help="Skip the post-install version check")
    install_cmd.set_defaults(func=cmd_install)

    test_cmd = sub.add_parser("test", help="Run the post-install version check")
    test_cmd.add_argument("--bin-dir", default=None, help="Directory holding the installed binary")
    test_cmd.set_defaults(func=cmd_test)

    formula_cmd = sub.add_parser("formula", help="Render the Homebrew formula")
    formula_cmd.add_argument("--output", default=None, help="Write to this path instead of stdout")
    formula_cmd.add_argument("--tag", default=None, help="Release tag or 'latest'")
    formula_cmd.set_defaults(func=cmd_formula)

    config_cmd = sub.add_parser("config", help="Print effective configuration")
    config_cmd.set_defaults(func=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = load_config()
    logger = configure_logging(
        keep_files=cfg.logging.keep_log_files,
        level=cfg.logging.level,
        console=args.verbose,
    )
    try:
        return int(args.func(args))
    except FormulaError as exc:
        logger.error("%s failed: %s", args.command, exc, extra={"event": "command_failed"})
        _print_json(
            {"success": False, "error": type(exc).__name__, "message": str(exc)},
            stream=sys.stderr,
        )
        return exc.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
