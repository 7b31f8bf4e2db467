"""
Main CLI entry point for skillshelf.

Provides the command-line interface using Click. Every command works on
the skills/ directory chosen by --skills-dir, SKILLSHELF_SKILLS_DIR, a
config file, or discovery from the working directory.
"""

import json as _json
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import click as _click
import pydantic as _pydantic
import rich.console as _rich_console
import rich.logging as _rich_logging

import skillshelf
import skillshelf.config as config
import skillshelf.config.sources as config_sources
import skillshelf.constants as constants
import skillshelf.errors as errors
import skillshelf.skills as skills
import skillshelf.ui as ui
import skillshelf.ui.console as ui_console

PROG_NAME = "skillshelf"

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

HELP_EPILOG = f"""\b
Examples:
    {PROG_NAME} list
    {PROG_NAME} show bdd-scenario-writer
    {PROG_NAME} search testing
    {PROG_NAME} stats
    {PROG_NAME} validate
    {PROG_NAME} validate bdd-scenario-writer
    {PROG_NAME} install bdd-scenario-writer
    {PROG_NAME} install-all

\b
Global Installation Paths:
    Claude skills:    {constants.DEFAULT_PRIMARY_INSTALL_DIR}/
    OpenCode skills:  {constants.DEFAULT_FALLBACK_INSTALL_DIR}/
"""


class SkillshelfGroup(_click.Group):
    """Command group that reports unknown commands with the full usage summary."""

    def resolve_command(
        self, ctx: _click.Context, args: list[str]
    ) -> tuple[str | None, _click.Command | None, list[str]]:
        cmd_name = str(args[0]) if args else ""
        if cmd_name and not cmd_name.startswith("-") and self.get_command(ctx, cmd_name) is None:
            ui.Messenger().error(f"Unknown command: {cmd_name}")
            _click.echo()
            _click.echo(ctx.get_help())
            ctx.exit(1)
        return super().resolve_command(ctx, args)


def _configure_logging(level: str) -> None:
    """Send skillshelf log records to stderr through Rich."""
    logger = _logging.getLogger("skillshelf")
    for handler in list(logger.handlers):
        if isinstance(handler, _rich_logging.RichHandler):
            logger.removeHandler(handler)

    handler = _rich_logging.RichHandler(
        console=_rich_console.Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(_logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(level.upper())


def _state(ctx: _click.Context) -> tuple[config.Settings, ui.Messenger]:
    """Settings and messenger built by the group callback."""
    return ctx.obj["settings"], ctx.obj["messenger"]


def _fail(
    ctx: _click.Context,
    message: str,
    *,
    json_output: bool = False,
) -> _typing.NoReturn:
    """Report an error and exit with status 1."""
    if json_output:
        _click.echo(_json.dumps({"error": message}, indent=2))
    else:
        _, messenger = _state(ctx)
        messenger.error(message)
    raise SystemExit(1)


def _usage_error(ctx: _click.Context, message: str, usage: str) -> _typing.NoReturn:
    """Report a missing argument with a usage hint and exit with status 1."""
    _, messenger = _state(ctx)
    messenger.error(message)
    _click.echo(f"Usage: {PROG_NAME} {usage}")
    raise SystemExit(1)


def _require_skills_dir(
    ctx: _click.Context,
    repo: skills.SkillRepository,
    *,
    json_output: bool = False,
) -> None:
    """Exit with status 1 unless the skills/ directory exists."""
    try:
        repo.ensure_exists()
    except errors.SkillsDirectoryNotFoundError as e:
        _fail(ctx, str(e), json_output=json_output)


@_click.group(
    cls=SkillshelfGroup,
    invoke_without_command=True,
    context_settings=CONTEXT_SETTINGS,
    epilog=HELP_EPILOG,
)
@_click.version_option(skillshelf.__version__, "-V", "--version", prog_name=PROG_NAME)
@_click.option(
    "--skills-dir",
    type=_click.Path(file_okay=False, path_type=_pathlib.Path),
    default=None,
    help="Skills directory (default: nearest skills/ from the working directory)",
)
@_click.option(
    "--color/--no-color",
    "color",
    default=None,
    help="Force or disable colored output (default: auto-detect)",
)
@_click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable debug logging on stderr",
)
@_click.pass_context
def cli(
    ctx: _click.Context,
    skills_dir: _pathlib.Path | None,
    color: bool | None,
    verbose: bool,
) -> None:
    """
    skillshelf - manage a library of SKILL.md skills.

    Discovers skills in a skills/ directory, validates their front matter,
    searches them, and installs them into a global skills location.
    """
    try:
        settings = config.Settings()
    except (errors.ConfigFileError, _pydantic.ValidationError) as e:
        ui.Messenger().error(str(e))
        raise SystemExit(1) from None

    if skills_dir is not None:
        settings.skills_dir = str(skills_dir)

    color_mode: ui.ColorMode = settings.output.color
    if color is not None:
        color_mode = "always" if color else "never"

    _configure_logging("debug" if verbose else settings.logging.level)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["messenger"] = ui.Messenger(color_mode)

    if ctx.invoked_subcommand is None:
        _click.echo(ctx.get_help())
        ctx.exit(1)


# =============================================================================
# Listing and Lookup
# =============================================================================


@cli.command(name="list")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def list_cmd(ctx: _click.Context, json_output: bool) -> None:
    """List all available skills."""
    settings, messenger = _state(ctx)
    repo = settings.get_repository()
    _require_skills_dir(ctx, repo, json_output=json_output)

    if json_output:
        _click.echo(_json.dumps(repo.to_dict(), indent=2))
        return

    messenger.info(f"Listing all skills in {repo.root}...")
    messenger.line()

    count = 0
    for skill in repo.iter_skills():
        messenger.item(skill.dir_name)
        messenger.line(f"  {skill.summary}")
        messenger.line()
        count += 1

    messenger.info(f"Total skills found: {count}")


@cli.command()
@_click.argument("skill_name", required=False)
@_click.pass_context
def show(ctx: _click.Context, skill_name: str | None) -> None:
    """Show the full SKILL.md of a specific skill.

    The file is written to stdout byte for byte; the banner goes to stderr.
    """
    if not skill_name:
        _usage_error(ctx, "Please provide a skill name", "show <skill-name>")

    settings, messenger = _state(ctx)
    repo = settings.get_repository()

    try:
        content = repo.read_raw(skill_name)
    except errors.SkillNotFoundError as e:
        _fail(ctx, str(e))

    messenger.info(f"Showing details for skill: {skill_name}", err=True)
    stream = _click.get_binary_stream("stdout")
    stream.write(content)
    stream.flush()


@cli.command()
@_click.argument("term", required=False)
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def search(ctx: _click.Context, term: str | None, json_output: bool) -> None:
    """Search for skills by name or content (case-insensitive)."""
    if not term:
        _usage_error(ctx, "Please provide a search term", "search <search-term>")

    settings, messenger = _state(ctx)
    repo = settings.get_repository()
    _require_skills_dir(ctx, repo, json_output=json_output)

    if json_output:
        matches = repo.search(term)
        _click.echo(_json.dumps({
            "term": term,
            "count": len(matches),
            "matches": [m.dir_name for m in matches],
        }, indent=2))
        return

    messenger.info(f"Searching for skills matching: {term}")
    messenger.line()

    matches = repo.search(term)
    for match in matches:
        messenger.item(match.dir_name)

    if not matches:
        messenger.warning(f"No skills found matching: {term}")
    else:
        messenger.info(f"Found {len(matches)} matching skills")


# =============================================================================
# Validation
# =============================================================================


@cli.command()
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def stats(ctx: _click.Context, json_output: bool) -> None:
    """Show statistics about all skills."""
    settings, messenger = _state(ctx)
    repo = settings.get_repository()
    _require_skills_dir(ctx, repo, json_output=json_output)

    counts = repo.stats()

    if json_output:
        _click.echo(_json.dumps(counts.to_dict(), indent=2))
        return

    messenger.info("Skills statistics")
    messenger.line()
    messenger.line(f"Total skills: {counts.total}")
    messenger.line(f"Valid skills: {counts.valid}", ui_console.STYLE_SUCCESS)
    if counts.invalid > 0:
        messenger.line(f"Invalid skills: {counts.invalid}", ui_console.STYLE_ERROR)


def _print_result(messenger: ui.Messenger, result: skills.ValidationResult) -> None:
    """Print one validation line plus any warnings."""
    if result.valid:
        messenger.item(f"{result.name}: Valid")
    else:
        messenger.item(f"{result.name}: {result.reason}", ok=False)
    for warning in result.warnings:
        messenger.notice(f"{result.name}: {warning}")


@cli.command()
@_click.argument("skill_name", required=False)
@_click.option("--strict", is_flag=True, help="Exit with status 1 if any skill is invalid")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def validate(
    ctx: _click.Context, skill_name: str | None, strict: bool, json_output: bool
) -> None:
    """Validate skill format (all skills if no name provided).

    Invalid skills are reported but do not change the exit status
    unless --strict is given.
    """
    settings, messenger = _state(ctx)
    repo = settings.get_repository()
    _require_skills_dir(ctx, repo, json_output=json_output)

    try:
        results = repo.validate(skill_name or None)
    except errors.SkillNotFoundError as e:
        _fail(ctx, str(e), json_output=json_output)

    valid = sum(1 for r in results if r.valid)
    invalid = len(results) - valid

    if json_output:
        _click.echo(_json.dumps({
            "results": [r.to_dict() for r in results],
            "valid": valid,
            "invalid": invalid,
        }, indent=2))
    elif skill_name:
        messenger.info(f"Validating skill: {skill_name}")
        _print_result(messenger, results[0])
    else:
        messenger.info("Validating all skills...")
        messenger.line()
        for result in results:
            _print_result(messenger, result)
        messenger.line()
        messenger.info("Validation complete")
        messenger.line(f"Valid: {valid}", ui_console.STYLE_SUCCESS)
        if invalid > 0:
            messenger.line(f"Invalid: {invalid}", ui_console.STYLE_ERROR)

    if strict and invalid > 0:
        raise SystemExit(1)


# =============================================================================
# Installation
# =============================================================================

_target_option = _click.option(
    "--target",
    type=_click.Path(file_okay=False, path_type=_pathlib.Path),
    default=None,
    help="Install into this directory instead of the configured locations",
)

_on_existing_option = _click.option(
    "--on-existing",
    type=_click.Choice(skills.ON_EXISTING_CHOICES),
    default=None,
    help="What to do with an already installed copy (default: from config, 'replace')",
)

_install_json_option = _click.option(
    "--json", "json_output", is_flag=True, help="JSON output"
)


def _make_installer(
    ctx: _click.Context,
    repo: skills.SkillRepository,
    target: _pathlib.Path | None,
    on_existing: str | None,
    *,
    json_output: bool = False,
) -> skills.SkillInstaller:
    """
    Build an installer and create its target directory.

    The target is checked against the skills directory before anything
    is created.
    """
    settings, _ = _state(ctx)
    locations = settings.get_install_locations(target)
    policy = _typing.cast(skills.OnExisting, on_existing or settings.install.on_existing)
    installer = skills.SkillInstaller(repo, locations.choose(), on_existing=policy)

    try:
        installer.check_target()
        locations.resolve_target()
    except errors.InstallError as e:
        _fail(ctx, str(e), json_output=json_output)
    return installer


@cli.command()
@_click.argument("skill_name", required=False)
@_target_option
@_on_existing_option
@_install_json_option
@_click.pass_context
def install(
    ctx: _click.Context,
    skill_name: str | None,
    target: _pathlib.Path | None,
    on_existing: str | None,
    json_output: bool,
) -> None:
    """Install a specific skill to the global location."""
    if not skill_name:
        _usage_error(ctx, "Please provide a skill name", "install <skill-name>")

    settings, messenger = _state(ctx)
    repo = settings.get_repository()

    try:
        repo.get_skill_dir(skill_name)
    except errors.SkillNotFoundError as e:
        _fail(ctx, str(e), json_output=json_output)

    installer = _make_installer(ctx, repo, target, on_existing, json_output=json_output)
    if not json_output:
        messenger.info(f"Installing {skill_name} to {installer.target}...")

    try:
        result = installer.install(skill_name)
    except errors.InstallError as e:
        _fail(ctx, str(e), json_output=json_output)

    if json_output:
        _click.echo(_json.dumps(result.to_dict(), indent=2))
        return

    messenger.success(f"Skill {skill_name} installed successfully to {installer.target}")


@cli.command(name="install-all")
@_target_option
@_on_existing_option
@_install_json_option
@_click.pass_context
def install_all(
    ctx: _click.Context,
    target: _pathlib.Path | None,
    on_existing: str | None,
    json_output: bool,
) -> None:
    """Install all skills to the global location."""
    settings, messenger = _state(ctx)
    repo = settings.get_repository()
    _require_skills_dir(ctx, repo, json_output=json_output)

    installer = _make_installer(ctx, repo, target, on_existing, json_output=json_output)
    if not json_output:
        messenger.info(f"Installing all skills to {installer.target}...")

    try:
        results = installer.install_all()
    except errors.InstallError as e:
        _fail(ctx, str(e), json_output=json_output)

    if json_output:
        _click.echo(_json.dumps({
            "target": str(installer.target),
            "count": len(results),
            "installed": [r.to_dict() for r in results],
        }, indent=2))
        return

    messenger.success(f"Installed {len(results)} skills to {installer.target}")


# =============================================================================
# Configuration and Help
# =============================================================================


@cli.command(name="config")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def config_cmd(ctx: _click.Context, json_output: bool) -> None:
    """Show the effective configuration."""
    settings, messenger = _state(ctx)

    yaml_source = config_sources.LayeredYamlSettingsSource(config.Settings, _pathlib.Path.cwd())
    loaded = {path for _, path in yaml_source.get_loaded_layers()}
    config_files = [
        (layer, path, path in loaded) for layer, path in yaml_source.get_layer_paths()
    ]
    extras = settings.collect_all_extra_fields()

    if json_output:
        data = settings.to_dict()
        data["config_files"] = [
            {"layer": layer, "path": str(path), "loaded": is_loaded}
            for layer, path, is_loaded in config_files
        ]
        data["unknown_keys"] = sorted(extras)
        _click.echo(_json.dumps(data, indent=2))
        return

    locations = settings.get_install_locations()
    skills_path = settings.skills_path
    resolved = locations.choose()

    messenger.line("skillshelf Configuration:")
    messenger.line(
        f"  Skills Dir: {skills_path} "
        f"{ui.ICON_SUCCESS if skills_path.is_dir() else '(not found)'}"
    )
    messenger.line(
        f"  Install Target: {resolved} "
        f"{ui.ICON_SUCCESS if resolved.is_dir() else '(will be created)'}"
    )
    messenger.line(f"  Primary Location: {locations.primary}")
    messenger.line(f"  Fallback Location: {locations.fallback}")
    messenger.line(f"  Explicit Target: {locations.explicit or '(none)'}")
    messenger.line(f"  On Existing: {settings.install.on_existing}")
    messenger.line(f"  Color: {settings.output.color}")
    messenger.line(f"  Log Level: {settings.logging.level}")
    messenger.line()
    messenger.line("Config Files:")
    for layer, path, is_loaded in config_files:
        status = ui.ICON_SUCCESS if is_loaded else ui.ICON_FAILURE
        messenger.line(f"  {status} {layer.capitalize()} config: {path}")

    if extras:
        messenger.line()
        messenger.warning(f"Unknown config keys: {', '.join(sorted(extras))}")


@cli.command(name="help")
@_click.pass_context
def help_cmd(ctx: _click.Context) -> None:
    """Show this help message."""
    root = ctx.find_root()
    _click.echo(root.get_help())


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name=PROG_NAME)


if __name__ == "__main__":
    main()
