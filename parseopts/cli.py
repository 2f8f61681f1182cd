# parseopts/cli.py

import json
import logging
import shlex
import click

from .compiler import compile_optstring
from .exceptions import UsageError
from .specfile import load_spec_file


def _spec_options(f):
    """Options shared by every subcommand to pick the optstring and bounds."""
    f = click.option("--max", "max_args", type=click.IntRange(min=0),
                     help="Maximum number of positional arguments")(f)
    f = click.option("--min", "min_args", type=click.IntRange(min=0),
                     help="Minimum number of positional arguments")(f)
    f = click.option("--name", help="Named spec (`specs.NAME`) inside --spec-file")(f)
    f = click.option("-f", "--spec-file", help="TOML/JSON file describing the spec")(f)
    f = click.option("-o", "--optstring", help="getopts optstring, e.g. 'ab:f:v'")(f)
    return f


def _load_spec(optstring, spec_file, name, min_args, max_args):
    """
    Resolve the spec from -o or -f. Explicit --min/--max win over the file.
    Returns (plan, usage_from_file).
    """
    if (optstring is None) == (spec_file is None):
        raise click.UsageError("Provide exactly one of --optstring or --spec-file")

    usage = None
    if spec_file:
        try:
            spec = load_spec_file(spec_file, name)
        except (FileNotFoundError, RuntimeError, KeyError) as e:
            raise click.ClickException(str(e))
        optstring = spec["optstring"]
        usage = spec["usage"]
        if min_args is None:
            min_args = spec["min_args"]
        if max_args is None:
            max_args = spec["max_args"]
    elif name:
        raise click.UsageError("--name requires --spec-file")

    return compile_optstring(optstring, min_args, max_args), usage


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
def cli(verbose):
    """
    parseopts CLI: compile getopts optstrings and parse argument lists.

    \b
      • compile   -o OPTSTRING [--min N] [--max N]
      • parse     -o OPTSTRING [--min N] [--max N] -- ARGS...
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@cli.command("compile")
@_spec_options
@click.pass_context
def compile_cmd(ctx, optstring, spec_file, name, min_args, max_args):
    """Print the compiled bindings and bounds as JSON."""
    plan, _ = _load_spec(optstring, spec_file, name, min_args, max_args)
    if plan.error is not None:
        plan.error.show()
        ctx.exit(plan.error.exit_code)

    click.echo(json.dumps({
        "optstring": plan.optstring,
        "min_args": plan.min_args,
        "max_args": plan.max_args,
        "bindings": [
            {"name": b.ident, "kind": b.kind, "default": b.default}
            for b in plan.bindings
        ],
    }, indent=2))


@cli.command()
@_spec_options
@click.option("--usage", envvar="PARSEOPTS_USAGE",
              help="Usage text printed after errors (env: PARSEOPTS_USAGE)")
@click.option("--format", "fmt", type=click.Choice(["shell", "json"]), default="shell",
              help="Output format")
@click.option("--local", "as_local", is_flag=True,
              help="Declare shell assignments with `local`")
@click.argument("argv", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def parse(ctx, optstring, spec_file, name, min_args, max_args, usage, fmt, as_local, argv):
    """
    Parse ARGV (everything after `--`) and print the bindings.

    The shell format is meant for `eval` inside a shell function:

    \b
      eval "$(parseopts parse -o 'ab:' -- "$@")"

    It prints one `name=value` line per option (digit options as `o<digit>`)
    and a final `set -- ...` with the remaining arguments. On a usage error
    the diagnostics go to stderr, `return 2` is printed, and the exit code is 2.
    """
    plan, file_usage = _load_spec(optstring, spec_file, name, min_args, max_args)
    try:
        result = plan.execute(argv, usage=usage or file_usage)
    except UsageError as e:
        e.show()
        if fmt == "shell":
            click.echo(f"return {e.exit_code}")
        ctx.exit(e.exit_code)

    if fmt == "json":
        click.echo(json.dumps({"options": dict(result.options), "args": result.args}, indent=2))
        return

    declare = "local " if as_local else ""
    for b in plan.bindings:
        click.echo(f"{declare}{b.attr_name}={shlex.quote(str(result.options[b.ident]))}")
    click.echo(" ".join(["set", "--", *(shlex.quote(a) for a in result.args)]))


def main():
    cli()
