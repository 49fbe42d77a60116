import logging
import sys

import click
import yaml

from config import builder_from_config, load_config
from imgurl.printer import format_output
from imgurl.srcset import SrcsetOptions


def parse_params(ctx, param, values):
    """Turn repeated -p key=value options into a dict of value lists."""
    params = {}
    for item in values:
        if '=' not in item:
            raise click.BadParameter(f"'{item}' is not in key=value form", ctx=ctx, param=param)
        key, value = item.split('=', 1)
        params.setdefault(key, []).append(value)
    return params


def parse_widths(ctx, param, value):
    if not value:
        return None
    try:
        return [int(w) for w in value.split(',')]
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a comma-separated list of integers", ctx=ctx, param=param)


param_option = click.option('-p', '--param', 'params', multiple=True, callback=parse_params,
                            help='Transformation parameter as key=value (repeatable)')


@click.group(context_settings=dict(help_option_names=['--help']))
@click.option('--profile', required=True, help='Profile name from .config.yaml')
@click.option('--config', 'config_path', default='.config.yaml',
              help='Path to configuration file')
@click.option('--format', 'outfmt', default='text',
              type=click.Choice(['text', 'json', 'yaml', 'table']))
@click.option('--verbose', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, profile, config_path, outfmt, verbose):
    """CLI tool for building and signing image CDN URLs."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        conf = load_config(profile, config_path)
        builder = builder_from_config(conf)
    except (OSError, yaml.YAMLError, ValueError) as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)

    ctx.obj = {
        'profile': profile,
        'conf': conf,
        'builder': builder,
        'outfmt': outfmt,
    }


@cli.command('url')
@click.argument('path')
@param_option
@click.pass_context
def url_cmd(ctx, path, params):
    """Print the full (signed, if a token is configured) URL for PATH."""
    url = ctx.obj['builder'].create_url(path, params)
    format_output({'url': url} if ctx.obj['outfmt'] != 'text' else url, ctx.obj['outfmt'])


@cli.command('sign')
@click.argument('path')
@param_option
@click.pass_context
def sign_cmd(ctx, path, params):
    """Show the encoded path, canonical query and signature for PATH."""
    encoded_path, query, signature = ctx.obj['builder'].sign(path, params)
    if not signature:
        click.echo(f"No 'token' configured for profile '{ctx.obj['profile']}'", err=True)
        sys.exit(1)

    format_output({
        'path': encoded_path,
        'query': query,
        'signature': signature,
    }, ctx.obj['outfmt'])


@cli.command('srcset')
@click.argument('path')
@param_option
@click.option('--widths', callback=parse_widths, help='Comma-separated explicit widths')
@click.option('--begin', type=int, default=SrcsetOptions.begin, show_default=True)
@click.option('--end', type=int, default=SrcsetOptions.end, show_default=True)
@click.option('--tolerance', type=float, default=SrcsetOptions.tolerance, show_default=True)
@click.option('--variable-quality/--no-variable-quality', default=True)
@click.pass_context
def srcset_cmd(ctx, path, params, widths, begin, end, tolerance, variable_quality):
    """Print a srcset attribute value for PATH."""
    options = SrcsetOptions(widths=widths, begin=begin, end=end,
                            tolerance=tolerance, variable_quality=variable_quality)
    try:
        srcset = ctx.obj['builder'].create_srcset(path, params, options)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if ctx.obj['outfmt'] == 'text':
        click.echo(srcset)
    else:
        entries = [dict(zip(('url', 'descriptor'), line.rstrip(',').rsplit(' ', 1)))
                   for line in srcset.split('\n')]
        format_output(entries, ctx.obj['outfmt'])


if __name__ == '__main__':
    cli()
