"""
vdf_beacon.cli
--------------

Command-line front end for the VDF core.

Commands:
  - params   : Show the active VDF parameters (profile + overrides).
  - evaluate : Compute y = x^(2^T) mod N.
  - prove    : Evaluate and produce a proof record (JSON or Solidity fixture).
  - verify   : Verify a proof record from a file or stdin.

Exit codes for ``verify``: 0 valid, 1 invalid, 2 malformed input.

Environment:
  VDF_BEACON_* variables are read by :meth:`BeaconConfig.from_env` unless
  ``--config`` points at a JSON/YAML file.

Example:
  vdf-beacon --log-level DEBUG prove --profile devnet --x 0x1234abcd
  vdf-beacon prove --profile devnet --x 0x1234abcd --out proof.json
  vdf-beacon verify proof.json
  cat proof.json | vdf-beacon verify -
"""

from __future__ import annotations

import json
import sys
from dataclasses import replace
from enum import Enum
from time import perf_counter
from typing import Any, Dict, NoReturn, Optional, Sequence

import click
import typer
from prometheus_client import REGISTRY, write_to_textfile

from ..config import BeaconConfig, configure_logging
from ..errors import ConfigError, EncodingError, InvalidParameters
from ..types.core import VDFProofRecord
from ..utils.bytes import parse_int, to_even_hex
from ..vdf.evaluator import evaluate
from ..vdf.params import VDFParams, get_params, profile_names
from ..vdf.prover import Prover
from ..vdf.verifier import Verifier, verify_with_report

__all__ = ["app", "main"]


class OutputFormat(str, Enum):
    json = "json"
    solidity = "solidity"


app = typer.Typer(
    name="vdf-beacon",
    help="Verifiable delay function: evaluate, prove and verify.",
    no_args_is_help=True,
    add_completion=False,
)


# -----------------------
# Helpers
# -----------------------

def _fail(msg: str, code: int = 2) -> NoReturn:
    typer.echo(f"error: {msg}", err=True)
    raise typer.Exit(code=code)


def _config(ctx: typer.Context) -> BeaconConfig:
    cfg = ctx.find_root().obj
    return cfg if isinstance(cfg, BeaconConfig) else BeaconConfig()


def _resolve_params(
    ctx: typer.Context,
    profile: Optional[str],
    iterations: Optional[int] = None,
    delta: Optional[int] = None,
    *,
    for_proof: bool = True,
) -> VDFParams:
    """
    Profile (or the loaded config) with command-line overrides applied.

    Plain evaluation accepts any ``T``, so ``for_proof=False`` skips the
    proof-parameter validation and leaves range checks to :func:`evaluate`.
    """
    try:
        base = get_params(profile) if profile else _config(ctx).vdf
        changes: Dict[str, Any] = {}
        if iterations is not None:
            changes["iterations"] = iterations
        if delta is not None:
            changes["delta"] = delta
        params = replace(base, **changes)
        if for_proof:
            params.validate()
    except InvalidParameters as e:
        _fail(str(e))
    return params


def _parse_seed(raw: str) -> int:
    try:
        return parse_int(raw)
    except EncodingError as e:
        raise typer.BadParameter(str(e), param_hint="--x") from e


def _progress_printer(label: str):
    def _report(done: int, total: int) -> None:
        typer.echo(f"{label}: {done}/{total} squarings ({100 * done // max(total, 1)}%)", err=True)
    return _report


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    try:
        with open(source, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        _fail(f"cannot read {source}: {e}")


def _opt_profile() -> Optional[str]:
    return typer.Option(  # type: ignore[return-value]
        None, "--profile", "-p", help=f"Parameter profile ({', '.join(profile_names())})."
    )


# -----------------------
# Root options
# -----------------------

@app.callback()
def _root(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level (DEBUG, INFO, ...)."),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="JSON or YAML config file."),
    metrics_out: Optional[str] = typer.Option(
        None, "--metrics-out", help="Write Prometheus metrics to this textfile on exit."
    ),
) -> None:
    try:
        cfg = BeaconConfig.from_file(config) if config else BeaconConfig.from_env()
    except ConfigError as e:
        _fail(str(e))

    configure_logging(log_level or cfg.log_level)

    textfile = metrics_out or cfg.metrics_textfile
    if textfile:
        ctx.call_on_close(lambda: write_to_textfile(textfile, REGISTRY))
    ctx.obj = cfg


# -----------------------
# Commands
# -----------------------

@app.command("params")
def cmd_params(ctx: typer.Context, profile: Optional[str] = _opt_profile()) -> None:
    """Show the active VDF parameters as JSON."""
    params = _resolve_params(ctx, profile)
    typer.echo(json.dumps(params.to_dict(), indent=2))


@app.command("evaluate")
def cmd_evaluate(
    ctx: typer.Context,
    x: str = typer.Option(..., "--x", help="Seed (0x-hex or decimal)."),
    iterations: Optional[int] = typer.Option(None, "--iterations", "-T", help="Override T."),
    profile: Optional[str] = _opt_profile(),
    progress: bool = typer.Option(False, "--progress", help="Report squaring progress on stderr."),
) -> None:
    """Compute y = x^(2^T) mod N (no proof)."""
    params = _resolve_params(ctx, profile, iterations=iterations, for_proof=False)
    seed = _parse_seed(x)
    start = perf_counter()
    try:
        y = evaluate(seed, params.iterations, params.modulus_n, _progress_printer("evaluate") if progress else None)
    except InvalidParameters as e:
        _fail(str(e))
    typer.echo(f"evaluated T={params.iterations} in {perf_counter() - start:.3f}s", err=True)
    typer.echo(json.dumps({
        "x": to_even_hex(seed),
        "y": to_even_hex(y),
        "iterations": params.iterations,
        "modulus": to_even_hex(params.modulus_n),
    }, indent=2))


@app.command("prove")
def cmd_prove(
    ctx: typer.Context,
    x: str = typer.Option(..., "--x", help="Seed (0x-hex or decimal)."),
    delta: Optional[int] = typer.Option(None, "--delta", "-d", help="Override delta."),
    iterations: Optional[int] = typer.Option(None, "--iterations", "-T", help="Override T."),
    profile: Optional[str] = _opt_profile(),
    out: Optional[str] = typer.Option(None, "--out", "-o", help="Write the record here instead of stdout."),
    fmt: OutputFormat = typer.Option(OutputFormat.json, "--format", "-f", help="Output format."),
    progress: bool = typer.Option(False, "--progress", help="Report squaring progress on stderr."),
) -> None:
    """
    Evaluate the VDF for a seed and emit the full proof record.

    ``--format solidity`` renders the record as test-fixture statements for
    the on-chain verifier.
    """
    params = _resolve_params(ctx, profile, iterations=iterations, delta=delta)
    seed = _parse_seed(x)
    typer.echo(
        f"proving T={params.iterations} delta={params.delta} (may take a while on large T)", err=True
    )
    try:
        record = Prover(params).prove_record(seed, _progress_printer("prove") if progress else None)
    except InvalidParameters as e:
        _fail(str(e))

    text = record.to_json() + "\n" if fmt is OutputFormat.json else record.to_solidity()
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text)
        typer.echo(f"wrote {fmt.value} proof record: {out}", err=True)
    else:
        typer.echo(text, nl=False)


@app.command("verify")
def cmd_verify(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Proof record JSON file, or '-' for stdin."),
    profile: Optional[str] = typer.Option(
        None, "--profile", "-p", help="Also require the record to use this profile's (N, T, delta)."
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="No output; exit code only."),
) -> None:
    """Verify a proof record. Exit 0 valid, 1 invalid, 2 malformed."""
    try:
        record = VDFProofRecord.from_json(_read_source(source))
    except (EncodingError, TypeError, ValueError) as e:
        _fail(f"malformed proof record: {e}")

    try:
        if profile:
            report = Verifier(_resolve_params(ctx, profile)).verify_record(record)
        else:
            report = verify_with_report(
                record.x, record.y, record.iterations, record.delta, record.proof, record.modulus
            )
    except InvalidParameters as e:
        _fail(f"malformed proof record: {e}")

    if not quiet:
        typer.echo(json.dumps({"valid": report.ok, "reason": report.reason}))
    if not report.ok:
        raise typer.Exit(code=1)


def main(argv: Optional[Sequence[str]] = None) -> None:  # pragma: no cover - thin wrapper
    """Entry-point for the ``vdf-beacon`` script and ``python -m vdf_beacon.cli``."""
    try:
        rc = app(args=list(argv) if argv is not None else None, standalone_mode=False, prog_name="vdf-beacon")
    except click.exceptions.Abort:
        # Ctrl-C inside a long evaluation
        typer.echo("", err=True)
        sys.exit(130)
    except click.exceptions.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    sys.exit(rc if isinstance(rc, int) else 0)


if __name__ == "__main__":  # pragma: no cover
    main()
