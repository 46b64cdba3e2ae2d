"""
Interface de linha de comando do kubemerge.

Resolve a configuração (defaults empacotados + `--config` + flags), executa o
pipeline via `run_merge` e apresenta:
- eventos do run (stderr, filtrados por `engine.log_level`)
- arquivos encontrados, resumo do kubeconfig mesclado e warnings (stdout)

Com `--dry-run` o YAML mesclado vai para stdout e o resumo para stderr, de modo
que a saída possa ser redirecionada diretamente para um arquivo.

Códigos de saída:
    0  sucesso
    1  algum Step falhou
    2  erro de configuração
"""

import argparse
import sys
from typing import Any, Dict, List, Optional

from kubemerge import __version__
from kubemerge.core.config.errors import ConfigError
from kubemerge.core.config.loader import load_config
from kubemerge.core.pipeline.context import (
    MERGED_ARTIFACT_KEY,
    RENDERED_ARTIFACT_KEY,
    SOURCES_ARTIFACT_KEY,
)
from kubemerge.report.summary import (
    render_events,
    render_files,
    render_summary,
    render_warnings,
)
from kubemerge.runner import MergeRun, run_merge


EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG_ERROR = 2

LOG_LEVEL_CHOICES = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kubemerge",
        description="Merge multiple kubeconfig files into a single kubeconfig.",
    )
    parser.add_argument("--input", "-i", metavar="DIR", help="Input directory (default: ~/.kube)")
    parser.add_argument("--output", "-o", metavar="FILE", help="Output file (default: ~/.kube/config)")
    parser.add_argument(
        "--exclude",
        "-e",
        metavar="PATTERN",
        action="append",
        help="Exclude files whose name contains PATTERN (repeatable)",
    )
    parser.add_argument("--config", "-c", metavar="FILE", help="Local configuration override (YAML/JSON)")
    parser.add_argument("--skip-invalid", action="store_true", help="Skip unparseable kubeconfigs instead of aborting")
    parser.add_argument("--no-backup", action="store_true", help="Do not back up an existing output file")
    parser.add_argument("--dry-run", action="store_true", help="Print the merged kubeconfig instead of writing it")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVEL_CHOICES, help="Minimum level of displayed events")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def overrides_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """Traduz as flags em um override de configuração (aplicado por último)."""
    steps: Dict[str, Dict[str, Any]] = {}

    def step(step_id: str) -> Dict[str, Any]:
        return steps.setdefault(step_id, {})

    if args.input:
        step("discover.files")["input_dir"] = args.input
    if args.exclude:
        step("discover.files")["exclude"] = list(args.exclude)
    if args.skip_invalid:
        step("parse.documents")["on_error"] = "skip"
    if args.output:
        step("export.kubeconfig")["output"] = args.output
    if args.no_backup:
        step("export.kubeconfig")["backup"] = False
    if args.dry_run:
        step("export.kubeconfig")["dry_run"] = True

    overrides: Dict[str, Any] = {}
    if steps:
        overrides["steps"] = steps
    if args.log_level:
        overrides["engine"] = {"log_level": args.log_level}
    return overrides


def _emit(lines: List[str], stream) -> None:
    for line in lines:
        if line:
            print(line, file=stream)


def report(run: MergeRun, *, dry_run: bool, log_level: str) -> int:
    ctx = run.ctx
    _emit(render_events(ctx.events, min_level=log_level), sys.stderr)

    if not run.ok:
        error = run.result.first_error() or {}
        print(f"Error: {error.get('message', 'pipeline failed')}", file=sys.stderr)
        if error.get("hint"):
            print(f"Hint: {error['hint']}", file=sys.stderr)
        return EXIT_FAILED

    summary_stream = sys.stderr if dry_run else sys.stdout
    if ctx.has_artifact(SOURCES_ARTIFACT_KEY):
        _emit([render_files([s.source for s in ctx.get_artifact(SOURCES_ARTIFACT_KEY)])], summary_stream)
    if ctx.has_artifact(MERGED_ARTIFACT_KEY):
        _emit([render_summary(ctx.get_artifact(MERGED_ARTIFACT_KEY))], summary_stream)
    _emit([render_warnings(ctx.all_warnings())], summary_stream)

    if dry_run and ctx.has_artifact(RENDERED_ARTIFACT_KEY):
        sys.stdout.write(ctx.get_artifact(RENDERED_ARTIFACT_KEY))
    return EXIT_OK


def main(argv: Optional[list] = None) -> int:
    """Ponto de entrada da CLI; retorna o código de saída."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(local_path=args.config, overrides=overrides_from_args(args))
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    engine_cfg = config.get("engine", {}) or {}
    log_level = str(engine_cfg.get("log_level", "INFO"))
    dry_run = bool(((config.get("steps") or {}).get("export.kubeconfig") or {}).get("dry_run", False))

    run = run_merge(config)
    return report(run, dry_run=dry_run, log_level=log_level)


if __name__ == "__main__":
    sys.exit(main())
