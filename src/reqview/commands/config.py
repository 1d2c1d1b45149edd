"""Config commands -- view and modify the configuration file.

Provides the ``reqview config`` sub-command group for reading, updating and
resetting :class:`~reqview.models.GlobalConfig`, persisted as
``config.json`` in the reqview config directory.
"""

from __future__ import annotations

import typer
from pydantic import ValidationError

from reqview.output import error, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the current configuration.

    The stored settings are displayed with the JSON renderer, in the same
    container as response bodies.

    Example::

        reqview config show
        reqview --plain config show
    """
    from reqview.classifier import ContentKind, Formatted
    from reqview.config import config_path, load_global_config
    from reqview.output import get_output
    from reqview.render import StyleScheme, render_json

    config = load_global_config()
    output = get_output()
    scheme = StyleScheme.from_config(config.styles, config.render.color and not output.no_color)

    info(f"Config file: {config_path()}")
    rendered = render_json(config.model_dump(mode="json"), styles=scheme)
    output.show_result(Formatted(rendered, ContentKind.JSON, markup=scheme.markup), config.styles)


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g., 'render.max_length')."
    ),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    Uses dot notation for nested keys. The string value is converted to the
    field's type by Pydantic validation before anything is saved.

    Raises:
        typer.Exit: With code 2 if the key path is unknown or the value
            fails validation.

    Example::

        reqview config set request.timeout 5
        reqview config set render.non_json reject
        reqview config set styles.key "bold magenta"
    """
    from reqview.config import load_global_config, save_global_config
    from reqview.models import GlobalConfig

    config = load_global_config()
    data = config.model_dump(mode="json")

    keys = key.split(".")
    target = data
    for k in keys[:-1]:
        if k not in target or not isinstance(target[k], dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=2)
        target = target[k]

    final_key = keys[-1]
    if final_key not in target or isinstance(target[final_key], dict):
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=2)

    target[final_key] = value

    try:
        new_config = GlobalConfig.model_validate(data)
    except ValidationError as exc:
        error(f"Invalid value for {key}: {exc.errors()[0]['msg']}")
        raise typer.Exit(code=2) from None

    save_global_config(new_config)
    success(f"Set {key} = {value}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Reset configuration to defaults.

    Asks for confirmation unless ``--force`` is given.

    Example::

        reqview config reset --force
    """
    from reqview.config import reset_global_config

    if not force:
        confirmed = typer.confirm("Reset all config to defaults?")
        if not confirmed:
            info("Cancelled.")
            raise typer.Exit()

    reset_global_config()
    success("Configuration reset to defaults.")
