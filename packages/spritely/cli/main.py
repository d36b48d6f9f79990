"""Command-line interface for Spritely."""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
import sys

from rich.console import Console

from spritely.core.build import (
    DEFAULT_MAX_WORKERS,
    BuildOrchestrator,
    BuildResult,
    FileOptimisation,
    expand_paths,
    optimise_files,
)
from spritely.core.caching import NullCacheTracker, create_tracker
from spritely.core.config import load_project
from spritely.core.config.scaffold import (
    DEFAULT_SOURCES_DIR,
    DEFAULT_SPRITES_DIR,
    write_sample_project,
)
from spritely.core.errors import MissingProjectError, SpritelyError
from spritely.core.imaging import ExternalToolOptimiser, PillowImageInspector
from spritely.core.layout import compute_layout, format_deviants_message
from spritely.core.project import Project, Sprite
from spritely.core.stylesheet import (
    background_statement,
    position_statement,
    read_embedded_payloads,
)
from spritely.core.utils.logging import configure_logging
from spritely.core.version import VERSION

console = Console()
logger = logging.getLogger(__name__)

MISSING_PROJECT_MESSAGE = (
    "Couldn't find a Spritely project in the current directory, or any of the "
    'parent directories. Run "spritely init" if you want to create a new project here.'
)


def _say(message: str, style: str | None = None) -> None:
    console.print(message, style=style, markup=False, highlight=False, soft_wrap=True)


def _error(message: str) -> None:
    _say(" ".join(message.split()), style="red")


def _status(status: str, message: str, style: str = "green") -> None:
    _say(f"{status:>12}  {message}", style=style)


def _format_saving(name: str, saved: int, before: int) -> str:
    if saved <= 0:
        return f"{name} - no savings"
    percent = saved / before * 100 if before else 0.0
    return f"{name} - saved {saved / 1024:.2f}kb ({percent:.1f}%)"


def find_project(cwd: Path) -> Project:
    """Load the project containing ``cwd``."""
    return load_project(cwd)


# --- build -------------------------------------------------------------------


def report_build(result: BuildResult) -> None:
    """Print what a build did."""
    for unit in result.units:
        if not unit.success:
            continue
        _status("generated", unit.sprite)
        if unit.bytes_saved is not None:
            before = unit.metadata.get("size", 0)
            _status("optimised", _format_saving(unit.sprite, unit.bytes_saved, before))

    for label in result.stylesheets:
        _status("written", label)

    for name, message in result.failures.items():
        _error(f"{name}: {message}")


async def run_build_async(
    project: Project, names: list[str], force: bool, fast: bool, jobs: int
) -> int:
    """Build sprites and stylesheets.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    orchestrator = BuildOrchestrator(project, max_workers=jobs)
    result = await orchestrator.build(names, force=force, fast=fast)

    report_build(result)

    for sprite_name, offenders in result.deviants.items():
        _say(format_deviants_message(sprite_name, offenders), style="yellow")

    logger.debug(f"Build finished in {result.total_duration_ms:.0f}ms")
    return 0 if result.success else 1


def run_build(args: argparse.Namespace) -> int:
    project = find_project(Path.cwd())
    return asyncio.run(
        run_build_async(project, args.sprites, args.force, args.fast, args.jobs)
    )


# --- optimise ----------------------------------------------------------------


def report_optimisation(outcome: FileOptimisation, cwd: Path) -> None:
    try:
        name = str(outcome.path.relative_to(cwd))
    except ValueError:
        name = str(outcome.path)

    if outcome.error:
        _error(f"{name}: {outcome.error}")
    elif outcome.skipped == "not a PNG":
        _status("skipped", f"{name} - not a PNG", style="yellow")
    elif outcome.skipped is None:
        _status("optimised", _format_saving(name, outcome.bytes_saved, outcome.size_before))


def run_optimise(args: argparse.Namespace) -> int:
    cwd = Path.cwd()

    try:
        project: Project | None = find_project(cwd)
    except MissingProjectError:
        project = None

    tracker = create_tracker(project) if project is not None else NullCacheTracker()
    outcomes = optimise_files(
        expand_paths(args.paths, cwd), tracker, ExternalToolOptimiser(), force=args.force
    )
    for outcome in outcomes:
        report_optimisation(outcome, cwd)

    if project is not None:
        tracker.clean(known_sprites=[sprite.name for sprite in project.sprites])
    tracker.write()

    return 1 if any(outcome.error for outcome in outcomes) else 0


# --- position ----------------------------------------------------------------


def matching_sprites(project: Project, query: str) -> tuple[list[Sprite], str]:
    """Sprites holding the source named by ``query`` (``name`` or ``sprite/name``).

    Raises:
        SpritelyError: If the sprite or source does not exist
    """
    if "/" in query:
        sprite_name, source = query.split("/", 1)
        sprite = project.sprite(sprite_name)
        if sprite is None:
            raise SpritelyError(f"No such sprite: {sprite_name}")
        candidates = [sprite]
    else:
        source = query
        candidates = list(project.sprites)

    sprites = [sprite for sprite in candidates if sprite.source(source) is not None]
    if not sprites:
        raise SpritelyError(f"No such source: {source}")
    return sprites, source


def run_position(args: argparse.Namespace) -> int:
    project = find_project(Path.cwd())
    sprites, source = matching_sprites(project, args.source)

    inspector = PillowImageInspector()
    payloads = read_embedded_payloads(project.sass_path)

    _say("")
    for sprite in sprites:
        layout = compute_layout(sprite, inspector)
        payload = payloads.get(sprite.name)
        _say(f"{sprite.logical_name(source)}: {layout.position_of(source)}px", style="green")
        background = background_statement(sprite, layout, source, payload=payload)
        if background is None:
            _say(f"    {position_statement(sprite, layout, source)}")
            _say(
                f"  The '{sprite.name}' image is not embedded yet; run `spritely build` first.",
                style="yellow",
            )
        else:
            _say(f"    {background}")
            _say("  - or -")
            _say(f"    {position_statement(sprite, layout, source)}")
        _say("")
    return 0


# --- init --------------------------------------------------------------------


def run_init(args: argparse.Namespace) -> int:
    written = write_sample_project(
        Path.cwd(),
        sprites_dir=args.sprites,
        sources_dir=args.sources,
        examples=not args.no_examples,
    )
    for path in written:
        _status("create", str(path.relative_to(Path.cwd())))
    _say("Your project was created!", style="green")
    return 0


COMMANDS = {
    "build": run_build,
    "optimise": run_optimise,
    "optimize": run_optimise,
    "position": run_position,
    "init": run_init,
}


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="spritely",
        description="Spritely - combine source images into CSS sprites",
    )
    p.add_argument("--version", action="version", version=f"Spritely {VERSION}")
    p.add_argument(
        "--no-color",
        "--no-colour",
        dest="no_color",
        action="store_true",
        help="Disable colours in output",
    )
    p.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    p.add_argument("--log-json", action="store_true", help="Emit logs as JSON lines")

    sub = p.add_subparsers(dest="cmd", required=True)

    build = sub.add_parser("build", help="Create the sprites defined in your config")
    build.add_argument("sprites", nargs="*", help="Sprites to build (default: all)")
    build.add_argument(
        "--force", action="store_true", help="Re-generate sprites whose sources have not changed"
    )
    build.add_argument(
        "--fast", action="store_true", help="Skip optimisation of images after they are generated"
    )
    build.add_argument(
        "--jobs",
        "-j",
        type=int,
        default=DEFAULT_MAX_WORKERS,
        help=f"Sprites built concurrently (default: {DEFAULT_MAX_WORKERS})",
    )

    optimise = sub.add_parser(
        "optimise", aliases=["optimize"], help="Optimise PNG images at the given paths"
    )
    optimise.add_argument("paths", nargs="+", help="Files or directories of PNG images")
    optimise.add_argument(
        "--force",
        action="store_true",
        help="Re-optimise images which haven't changed since they were last optimised",
    )

    position = sub.add_parser("position", help="Show the position of a source within a sprite")
    position.add_argument("source", help='Source name, or a "sprite/source" pair')

    init = sub.add_parser("init", help="Create a new Spritely project in the current directory")
    init.add_argument(
        "--sprites",
        default=DEFAULT_SPRITES_DIR,
        help=f"Where generated sprites are saved (default: {DEFAULT_SPRITES_DIR})",
    )
    init.add_argument(
        "--sources",
        default=DEFAULT_SOURCES_DIR,
        help=f"Where source images live (default: {DEFAULT_SOURCES_DIR})",
    )
    init.add_argument(
        "--no-examples", action="store_true", help="Don't create example source images"
    )

    return p


def run(argv: list[str] | None = None) -> int:
    """Parse ``argv`` and run the command.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = build_arg_parser().parse_args(argv)

    console.no_color = args.no_color
    configure_logging(level="DEBUG" if args.verbose else "WARNING", structured=args.log_json)

    if args.cmd == "build" and args.jobs < 1:
        _error("--jobs must be at least 1")
        return 1

    try:
        return COMMANDS[args.cmd](args)
    except MissingProjectError:
        _error(MISSING_PROJECT_MESSAGE)
        return 1
    except SpritelyError as e:
        _error(str(e))
        return 1


def main() -> None:
    """Main entry point for CLI."""
    sys.exit(run())
