"""Site building functionality for hidsite.

This module hands the site's content graph to its processor and writes the
results to the output directory.

Key functions:
- build_site: Main function to build the entire site.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from .config import CONFIG_FILE, ConfigError
from .content import Asset, Page, Post, Skipped
from .site import Site
from .utils import ensure_clean_dir, is_private_path, is_within


class BuildError(Exception):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the source file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        site: The loaded site model.
        output_dir: Directory where the site was built.
        written: Output files, in the order they were written.
        skipped: Source files dropped because they failed to build.
    """

    site: Site
    output_dir: Path
    written: list[Path] = field(default_factory=list)
    skipped: list[Skipped] = field(default_factory=list)


def build_site(
    source_dir: Path,
    config_file: str | Path | None = None,
    dest: Path | None = None,
    clean: bool = True,
) -> BuildResult:
    """Build the entire static site.

    Args:
        source_dir: Root of the site source tree.
        config_file: Optional configuration file instead of ``_config.yml``.
        dest: Optional output directory instead of the configured ``site_dir``.
        clean: Whether to wipe the output directory before building.

    Returns:
        BuildResult describing what was written and skipped.

    Raises:
        ConfigError: If the configuration or layout graph is unusable.
        BuildError: If a post or page fails to render or write.
    """
    site = Site(source_dir, config_file or CONFIG_FILE)
    if dest is not None:
        site.config["site_dir"] = str(Path(dest).resolve())
    site.load()
    processor = site.processor
    output_dir = site.output_dir
    _check_output_dir(site)
    if clean:
        ensure_clean_dir(output_dir)
    else:
        output_dir.mkdir(parents=True, exist_ok=True)

    result = BuildResult(site=site, output_dir=output_dir, skipped=site.skipped())
    context = site.template_context()
    owners: dict[Path, str] = {}
    for item in site.objects():
        if not isinstance(item, (Post, Page, Asset)):
            continue
        target = item.output_path.resolve()
        if target in owners:
            result.skipped.append(
                Skipped(item.path, f"output {item.url} is already written by {owners[target]}")
            )
            continue
        owners[target] = item.path
        if isinstance(item, Asset):
            _copy_asset(item)
        else:
            try:
                rendered = processor.process(item, context)
            except Exception as exc:
                raise BuildError(
                    site.source_dir / item.path,
                    _format_error_message(exc),
                    exc,
                ) from exc
            _write_text(item, rendered)
        result.written.append(item.output_path)
    return result


def _check_output_dir(site: Site) -> None:
    """Refuse an output directory whose cleaning would delete site sources.

    Raises:
        ConfigError: If the output directory is the source root or one of its
            ancestors, or if it lies inside the source tree under a public
            name or holds a layout, post, include or other claimed path.
    """
    output_dir = site.output_dir
    source = site.source_dir.resolve()
    if output_dir.resolve() == source or output_dir.resolve() in source.parents:
        raise ConfigError(f"Output directory {output_dir} would overwrite the source tree")
    rel = site.output_rel
    if rel is None:
        return
    if not is_private_path(rel):
        raise ConfigError(
            f"Output directory {output_dir} is a public source directory; "
            "use a name starting with '_' or a directory outside the source tree"
        )
    for directory in (site.layout_dir, site.posts_dir, site.include_dir):
        if directory and is_within(PurePosixPath(directory).as_posix(), rel):
            raise ConfigError(f"Output directory {output_dir} would overwrite {directory}")
    for path in site.classifier:
        if is_within(path, rel):
            raise ConfigError(f"Output directory {output_dir} would overwrite {path}")


def _format_error_message(exc: Exception) -> str:
    """Format an exception into a user-friendly error message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    error_type = type(exc).__name__
    lineno = getattr(exc, "lineno", None)
    if error_type == "TemplateSyntaxError" and lineno:
        return f"Template syntax error on line {lineno}: {exc}"
    if error_type == "UndefinedError":
        return f"Undefined variable: {exc}"
    if error_type == "TemplateNotFound":
        return f"Include not found: {exc}"
    return f"{error_type}: {exc}"


def _write_text(item: Post | Page, rendered: str) -> None:
    target = item.output_path
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(rendered, encoding="utf-8")
    except OSError as exc:
        raise BuildError(
            item.site.source_dir / item.path, f"Cannot write {target}: {exc}", exc
        ) from exc


def _copy_asset(asset: Asset) -> None:
    target = asset.output_path
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(asset.source_path, target)
    except OSError as exc:
        raise BuildError(asset.source_path, f"Cannot copy to {target}: {exc}", exc) from exc
