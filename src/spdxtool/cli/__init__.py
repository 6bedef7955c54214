"""
CLI for spdxtool.

Provides the ``spdx`` command: ``init`` writes LICENSE and LICENSE.spdx,
``check`` reports files without the expected copyright/SPDX header, and
``fix`` adds or replaces those headers.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from spdxtool.cli.ui import (
    render_error,
    render_init_result,
    render_result,
    render_summary,
)
from spdxtool.core.config import HeaderConfig, SpdxToolConfig, load_config
from spdxtool.core.errors import ConfigurationUnresolvedError
from spdxtool.core.exclusion import ExclusionRuleSet
from spdxtool.core.file_selector import FileSelector
from spdxtool.core.header_codec import HeaderFields
from spdxtool.core.project_root import ProjectContext, detect_project_context
from spdxtool.infrastructure import (
    CatalogCache,
    LicenseCatalogClient,
    LicenseCatalogError,
    LicenseNotFoundError,
    RetryConfig,
    get_default_cache_dir,
    read_git_homepage,
    read_git_user_name,
)
from spdxtool.services import (
    LicenseInitError,
    ReconcileMode,
    ReconcileSummary,
    ReconciliationDriver,
    initialize_license,
    resolve_header_fields,
)

# Initialize Rich Consoles
console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="spdx",
    help="Manage SPDX license files and copyright headers",
    add_completion=False,
)


@dataclass
class CliState:
    """Per-invocation state built by the top-level callback."""

    config: SpdxToolConfig
    context: ProjectContext


def _spdx_id_option():
    return typer.Option(None, "--spdx-id", "-s", help="SPDX license identifier, e.g. MIT")


def _copyright_option():
    return typer.Option(None, "--copyright", "-C", help="Copyright holder")


def _year_option():
    return typer.Option(None, "--year", "-y", help="Copyright year (default: current year)")


def _exclude_option():
    return typer.Option(
        None,
        "--exclude",
        "-e",
        help="Gitignore-style pattern to exclude. Can be specified multiple times.",
    )


def _extension_option():
    return typer.Option(
        None,
        "--extension",
        "-x",
        help="File extension to include when scanning directories (default: clj, cljc, cljs). "
        "Can be specified multiple times.",
    )


def _configure_logging(cfg: SpdxToolConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, cfg.logging.level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=cfg.logging.format)


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Configuration file (.yaml, .yml or .json)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Manage SPDX license files and copyright headers."""
    try:
        cfg = load_config(config_path)
    except (OSError, ValueError, TypeError) as e:
        render_error(f"Invalid configuration: {e}", err_console)
        raise typer.Exit(1)

    _configure_logging(cfg, verbose)
    ctx.obj = CliState(config=cfg, context=detect_project_context(Path.cwd()))


def _resolve_fields(
    state: CliState,
    spdx_id: Optional[str],
    copyright_holder: Optional[str],
    year: Optional[str],
) -> HeaderFields:
    """Resolve header fields or exit with status 1."""
    header_cfg = state.config.header
    overrides = HeaderConfig(
        spdx_id=spdx_id or header_cfg.spdx_id,
        copyright=copyright_holder or header_cfg.copyright,
        year=year or header_cfg.year,
    )
    try:
        return resolve_header_fields(
            overrides,
            state.context,
            git_user_name=lambda: read_git_user_name(state.context.cwd),
        )
    except ConfigurationUnresolvedError as e:
        render_error(str(e), err_console)
        raise typer.Exit(1)


def _reconcile(
    state: CliState,
    mode: ReconcileMode,
    paths: Optional[list[Path]],
    spdx_id: Optional[str],
    copyright_holder: Optional[str],
    year: Optional[str],
    exclude: Optional[list[str]],
    extension: Optional[list[str]],
) -> ReconcileSummary:
    fields = _resolve_fields(state, spdx_id, copyright_holder, year)
    selection = state.config.selection
    context = state.context

    exclusion = ExclusionRuleSet.from_base_dir(
        context.base_dir, list(selection.exclude_patterns) + list(exclude or [])
    )
    selector = FileSelector(
        extensions=extension or selection.extensions,
        exclusion=exclusion,
        fields=fields,
        cwd=context.cwd,
    )
    targets = selector.select(paths or [Path(".")])

    driver = ReconciliationDriver(
        fields,
        on_result=lambda result: render_result(result, mode, context.cwd, console),
    )
    summary = driver.run(targets, mode)
    render_summary(summary, console)
    return summary


@app.command()
def init(
    ctx: typer.Context,
    license_id: Optional[str] = typer.Argument(
        None, metavar="SPDX-ID", help="SPDX license identifier to initialize"
    ),
    spdx_id: Optional[str] = _spdx_id_option(),
    copyright_holder: Optional[str] = _copyright_option(),
    year: Optional[str] = _year_option(),
    exclude: Optional[list[str]] = _exclude_option(),
    extension: Optional[list[str]] = _extension_option(),
    homepage: Optional[str] = typer.Option(
        None, "--homepage", help="Project home page (default: git remote.origin.url)"
    ),
):
    """Write LICENSE and LICENSE.spdx for the project."""
    state: CliState = ctx.obj
    cfg = state.config
    context = state.context

    chosen_id = license_id or spdx_id
    fields = _resolve_fields(state, chosen_id, copyright_holder, year)
    target_dir = context.root_or_cwd

    cache = CatalogCache(cfg.catalog.cache_dir or get_default_cache_dir())
    try:
        with LicenseCatalogClient(
            base_url=cfg.catalog.base_url,
            cache=cache,
            timeout=cfg.catalog.timeout,
            retry_config=RetryConfig(max_retries=cfg.catalog.max_retries),
        ) as catalog:
            result = initialize_license(
                catalog,
                spdx_id=fields.spdx_id,
                copyright_holder=fields.copyright,
                year=fields.year,
                target_dir=target_dir,
                homepage=homepage or read_git_homepage(target_dir),
            )
    except LicenseNotFoundError as e:
        render_error(f"{e}. See https://spdx.org/licenses/ for valid ids.", err_console)
        raise typer.Exit(1)
    except (LicenseCatalogError, LicenseInitError) as e:
        render_error(str(e), err_console)
        raise typer.Exit(1)

    render_init_result(result, context.cwd, console)


@app.command()
def check(
    ctx: typer.Context,
    paths: Optional[list[Path]] = typer.Argument(
        None, help="Files or directories to check (default: current directory)"
    ),
    spdx_id: Optional[str] = _spdx_id_option(),
    copyright_holder: Optional[str] = _copyright_option(),
    year: Optional[str] = _year_option(),
    exclude: Optional[list[str]] = _exclude_option(),
    extension: Optional[list[str]] = _extension_option(),
):
    """Report files missing the copyright/SPDX header.

    Exits with status 1 when any file needs a header or could not be read.
    """
    summary = _reconcile(
        ctx.obj, ReconcileMode.CHECK, paths, spdx_id, copyright_holder, year, exclude, extension
    )
    if summary.needs_header > 0 or summary.errors > 0:
        raise typer.Exit(1)


@app.command()
def fix(
    ctx: typer.Context,
    paths: Optional[list[Path]] = typer.Argument(
        None, help="Files or directories to fix (default: current directory)"
    ),
    spdx_id: Optional[str] = _spdx_id_option(),
    copyright_holder: Optional[str] = _copyright_option(),
    year: Optional[str] = _year_option(),
    exclude: Optional[list[str]] = _exclude_option(),
    extension: Optional[list[str]] = _extension_option(),
):
    """Add or replace the copyright/SPDX header in source files."""
    _reconcile(
        ctx.obj, ReconcileMode.FIX, paths, spdx_id, copyright_holder, year, exclude, extension
    )
