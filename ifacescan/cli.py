"""Command line entry point; a thin consumer of the library."""

import argparse
import subprocess
import sys

from ifacescan.analyzer import analyze
from ifacescan.backends import Backend, extract_reply
from ifacescan.config import API_KEY_ENV, Config, load_config
from ifacescan.errors import AnalysisError, ConfigError
from ifacescan.languages import Language
from ifacescan.log import configure_logging
from ifacescan.reporting import (
    format_diagnostics,
    format_json,
    format_message,
    format_summary,
    format_text_report,
)


_INSTALLABLE_BACKENDS = {
    "anthropic": ["anthropic>=0.39.0"],
    "groq": ["groq>=0.11.0"],
}

_BACKENDS = ["http", "claude-code", "anthropic", "groq"]


def _handle_install(args: list[str]):
    if not args:
        print("Usage: ifacescan install <backend>")
        print(f"Available: {', '.join(_INSTALLABLE_BACKENDS)}")
        sys.exit(1)

    name = args[0]
    if name not in _INSTALLABLE_BACKENDS:
        print(f"Unknown backend: {name}")
        print(f"Available: {', '.join(_INSTALLABLE_BACKENDS)}")
        sys.exit(1)

    packages = _INSTALLABLE_BACKENDS[name]
    print(f"Installing {name} backend...")
    result = subprocess.run(
        [sys.executable, "-m", "pip", "install", *packages],
        capture_output=False,
        cwd="/",
    )
    if result.returncode != 0:
        sys.exit(result.returncode)

    print(f"\n{name} backend installed. Use it with: ifacescan --backend {name}")


def _make_language(name: str) -> Language:
    if name == "go":
        from ifacescan.languages.go import GoLanguage
        return GoLanguage()
    else:
        print(f"Unknown language: {name}", file=sys.stderr)
        sys.exit(1)


def _make_backend(name: str, config: Config) -> Backend:
    model = config.model
    if name == "http":
        from ifacescan.backends.http import HttpBackend
        if not config.api_key:
            raise ConfigError(f"{API_KEY_ENV} environment variable not set")
        kwargs = {}
        if model:
            kwargs["model"] = model
        if config.endpoint:
            kwargs["endpoint"] = config.endpoint
        return HttpBackend(api_key=config.api_key, **kwargs)
    elif name == "claude-code":
        from ifacescan.backends.claude_code import ClaudeCodeBackend
        return ClaudeCodeBackend(model=model) if model else ClaudeCodeBackend()
    elif name == "anthropic":
        from ifacescan.backends.anthropic import AnthropicBackend
        return AnthropicBackend(model=model) if model else AnthropicBackend()
    elif name == "groq":
        from ifacescan.backends.groq_backend import GroqBackend
        return GroqBackend(model=model) if model else GroqBackend()
    else:
        raise ConfigError(f"Unknown backend: {name}")


def _merge_args(args: argparse.Namespace, config: Config) -> Config:
    """Command-line values take precedence over the config file."""
    if args.declaration:
        config.go_file_path = args.declaration
    if args.root:
        config.go_directory = args.root
    if args.backend:
        config.backend = args.backend
    if args.model:
        config.model = args.model
    if args.endpoint:
        config.endpoint = args.endpoint
    if args.strict_signatures:
        config.strict_signatures = True
    if args.structs_only:
        config.structs_only = True
    if args.workers is not None:
        config.workers = args.workers
    return config


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ifacescan",
        description="Find the Go types that implement the interfaces declared in a file.\n\n"
                    "Paths can also come from a YAML config file (go_file_path, go_directory).\n"
                    "To install optional backends: ifacescan install <anthropic|groq>",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "declaration",
        nargs="?",
        help="Source file declaring the interfaces",
    )
    parser.add_argument(
        "root",
        nargs="?",
        help="Directory tree to scan for implementations",
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="YAML config file (default: ./config.yaml when no paths are given)",
    )
    parser.add_argument(
        "--language",
        choices=["go"],
        default="go",
        help="Source language (default: go)",
    )
    parser.add_argument(
        "--strict-signatures",
        action="store_true",
        help="Require parameter and result types to match, not just method names",
    )
    parser.add_argument(
        "--structs-only",
        action="store_true",
        help="Only report types declared as structs",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="output_json",
        help="Output results as JSON",
    )
    parser.add_argument(
        "--backend",
        choices=_BACKENDS,
        default=None,
        help="Send the report to this backend instead of only printing it",
    )
    parser.add_argument(
        "--model",
        default=None,
        help="Model name for the backend (default depends on backend)",
    )
    parser.add_argument(
        "--endpoint",
        default=None,
        help="Chat completions URL for the http backend",
    )
    parser.add_argument(
        "-w", "--workers",
        type=int,
        default=None,
        help="Number of files parsed in parallel (default: 1)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print debug logging and a run summary",
    )
    return parser


def main(argv: list[str] | None = None):
    argv = sys.argv[1:] if argv is None else argv

    # Handle `ifacescan install <backend>` before argparse
    if argv and argv[0] == "install":
        _handle_install(argv[1:])
        return

    args = _build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(
            args.config,
            use_default=not (args.declaration or args.root),
        )
        config = _merge_args(args, config)
        if not config.go_file_path or not config.go_directory:
            raise ConfigError(
                "a declaration file and a scan root are required "
                "(as arguments or go_file_path / go_directory in the config file)"
            )
        if config.workers < 1:
            raise ConfigError("--workers must be at least 1")
        backend = _make_backend(config.backend, config) if config.backend else None
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    language = _make_language(args.language)

    try:
        analysis = analyze(
            config.go_file_path,
            config.go_directory,
            language=language,
            strict=config.strict_signatures,
            structs_only=config.structs_only,
            workers=config.workers,
        )
    except AnalysisError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.output_json:
        print(format_json(analysis))
    else:
        print(format_text_report(analysis.results))

    if analysis.diagnostics:
        print(f"Skipped {len(analysis.diagnostics)} file(s):", file=sys.stderr)
        print(format_diagnostics(analysis.diagnostics), file=sys.stderr)

    if args.verbose:
        print(format_summary(analysis), file=sys.stderr)

    if backend is not None:
        reply = backend.complete(format_message(analysis.results))
        if not reply:
            print(f"Failed to send report to {config.backend} backend.", file=sys.stderr)
            sys.exit(1)
        print("Report sent successfully!", file=sys.stderr)
        print(extract_reply(reply))


if __name__ == "__main__":
    main()
