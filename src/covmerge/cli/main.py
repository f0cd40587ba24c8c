"""covmerge CLI - merge coverage captures into one profile and report."""

from pathlib import Path
from typing import Any

import click

from covmerge import __version__
from covmerge.config.loader import load_config
from covmerge.core.errors import CovMergeError
from covmerge.core.logging import configure_logging, set_run_id
from covmerge.core.progress import get_console, make_revision_table, pluralize, spinner, status
from covmerge.git import GitContentOracle, GitError
from covmerge.ops import run_merge
from covmerge.report import GoCoverRenderer

USAGE_EXAMPLE = "covmerge [options] cover.txt.<timestamp>.<revision> ..."


def _overrides(
    outcover: str | None,
    outhtml: str | None,
    repo: Path | None,
    source_prefix: str | None,
    no_html: bool,
    verbose: bool,
) -> dict[str, Any]:
    """Translate CLI flags into load_config() section overrides."""
    overrides: dict[str, Any] = {}
    output: dict[str, Any] = {}
    if outcover is not None:
        output["profile_path"] = outcover
    if outhtml is not None:
        output["report_path"] = outhtml
    if output:
        overrides["output"] = output

    source: dict[str, Any] = {}
    if repo is not None:
        source["repo_path"] = str(repo)
    if source_prefix is not None:
        source["source_prefix"] = source_prefix
    if source:
        overrides["source"] = source

    if no_html:
        overrides["render"] = {"enabled": False}
    if verbose:
        overrides["logging"] = {"level": "DEBUG"}
    return overrides


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="covmerge")
@click.argument("captures", nargs=-1, type=click.Path(dir_okay=False, path_type=Path))
@click.option("--outcover", default=None, help="Merged profile output (default: cover.txt)")
@click.option("--outhtml", default=None, help="HTML report output (default: cover.html)")
@click.option(
    "--repo",
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Git repository holding the covered sources (default: .)",
)
@click.option(
    "--source-prefix",
    default=None,
    help="Repo path under which profile file names live (default: go/src)",
)
@click.option("--no-html", is_flag=True, help="Only write the merged profile")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(
    captures: tuple[Path, ...],
    outcover: str | None,
    outhtml: str | None,
    repo: Path | None,
    source_prefix: str | None,
    no_html: bool,
    verbose: bool,
) -> None:
    """Merge `go test -coverprofile` captures taken across revisions.

    Each CAPTURE is named <name>.<timestamp>.<revision>. Captures of one
    revision are merged together; files with identical content in several
    revisions are merged once, other files are kept per revision.
    """
    if not captures:
        raise click.UsageError(f"at least one capture is required.\nUsage: {USAGE_EXAMPLE}")

    workdir = Path.cwd()
    try:
        config = load_config(
            workdir,
            **_overrides(outcover, outhtml, repo, source_prefix, no_html, verbose),
        )
    except CovMergeError as e:
        raise click.ClickException(str(e)) from e

    configure_logging(config=config.logging)
    set_run_id()

    repo_path = Path(config.source.repo_path).expanduser()
    if not repo_path.is_absolute():
        repo_path = workdir / repo_path

    renderer = None
    if config.render.enabled:
        gopath = Path(config.render.gopath).expanduser()
        renderer = GoCoverRenderer(
            go_binary=config.render.go_binary,
            gopath=gopath if gopath.is_absolute() else workdir / gopath,
            cwd=workdir,
        )

    try:
        oracle = GitContentOracle(repo_path, source_prefix=config.source.source_prefix)
        with spinner(f"Merging {pluralize(len(captures), 'capture')}"):
            result = run_merge(
                captures,
                config,
                oracle=oracle,
                renderer=renderer,
                workdir=workdir,
            )
    except (CovMergeError, GitError) as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        get_console().print(make_revision_table(result.revisions))

    if result.report_path is not None:
        status(f"generated {result.profile_path} and {result.report_path}", style="success")
    else:
        status(f"generated {result.profile_path}", style="success")
    status(
        f"{pluralize(result.file_count, 'file')}, {pluralize(result.block_count, 'block')}, "
        f"{pluralize(len(result.revisions), 'revision')}",
        indent=2,
    )
    if result.num_stmts:
        pct = 100.0 * result.covered_stmts / result.num_stmts
        status(f"{pct:.1f}% of {pluralize(result.num_stmts, 'statement')} covered", indent=2)


if __name__ == "__main__":
    cli()
