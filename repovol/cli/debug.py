import click

from .utils.logging import configure_logging


def _debug_option() -> click.Option:
    return click.Option(
        ["--debug/--no-debug"],
        is_eager=True,
        expose_value=False,
        callback=_set_debug,
        help="Log at debug level.",
    )


def add_debug_option(cmd: click.Command) -> click.Command:
    """Give a command or group a --debug/--no-debug flag that configures logging."""
    if not any(param.name == "debug" for param in cmd.params):
        cmd.params.insert(0, _debug_option())
    return cmd


def _set_debug(ctx: click.Context, param: click.Parameter, value: bool) -> bool:
    root_ctx = ctx.find_root()
    root_ctx.ensure_object(dict)
    root_ctx.obj.setdefault("DEBUG", False)

    # --debug given at any level wins; only the top level may turn it off
    if value or ctx is root_ctx:
        root_ctx.obj["DEBUG"] = value

    configure_logging(root_ctx.obj["DEBUG"])
    return root_ctx.obj["DEBUG"]
