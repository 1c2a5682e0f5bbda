"""Command-line interface for pyrequests using Click."""

import logging
import sys
from typing import Optional, Tuple

import click

from pyrequests import __version__
from pyrequests.config import Config
from pyrequests.errors import RequestsError
from pyrequests.http.headers import parse_header_line
from pyrequests.http.params import URLParam
from pyrequests.http.response import Response
from pyrequests.session import Session


# Setup logging - default to WARNING so only problems reach stderr
# INFO and DEBUG logs are only shown when --verbose is used
logging.basicConfig(
    level=logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def request_options(func):
    """Options shared by the get and post commands."""
    options = [
        click.argument('url'),
        click.option('--param', '-p', 'params', multiple=True, help='Parameter as key=value (repeatable)'),
        click.option('--header', '-H', 'headers', multiple=True, help='Header as "Name: value" (repeatable)'),
        click.option('--header-file', type=click.Path(exists=True, dir_okay=False), help='Path to header file'),
        click.option('--cookie-file', type=click.Path(exists=True, dir_okay=False), help='Path to cookie file (Netscape format)'),
        click.option('--user-agent', '-U', help='Custom user agent'),
        click.option('--output', '-o', type=click.Path(dir_okay=False), help='Write the body to this file'),
        click.option('--no-redirects', is_flag=True, help='Do not follow 3xx redirects'),
        click.option('--show-headers', is_flag=True, help='Print response headers'),
        click.option('--show-cookies', is_flag=True, help='Print the cookie jar after the request'),
        click.option('--verbose', is_flag=True, help='Enable verbose logging'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        # Also enable httpx logging
        logging.getLogger('httpx').setLevel(logging.INFO)


def _build_session(
    headers: Tuple[str, ...],
    header_file: Optional[str],
    cookie_file: Optional[str],
    user_agent: Optional[str],
    no_redirects: bool,
) -> Session:
    config = Config(
        header_file=header_file,
        cookie_file=cookie_file,
        follow_redirects=not no_redirects,
    )
    if user_agent:
        config.user_agent = user_agent

    session = Session.from_config(config)
    for line in headers:
        name, value = parse_header_line(line)
        if name == 'Cookie':
            session.add_cookies(value)
        else:
            session.add_header(name, value)

    # An explicit -U wins over a User-Agent from the header file
    if user_agent:
        session.add_header('User-Agent', user_agent)
    return session


def _build_params(params: Tuple[str, ...]) -> URLParam:
    result = URLParam()
    for item in params:
        key, _, value = item.partition('=')
        result.add(key, value)
    return result


def _emit(
    response: Response,
    session: Session,
    output: Optional[str],
    show_headers: bool,
    show_cookies: bool,
) -> None:
    if show_headers:
        click.echo(f"Status: {response.status_code}")
        response.print_headers()
        click.echo()

    if output:
        path = response.write_to_file(output)
        click.echo(f"✓ Saved {len(response.content)} bytes to {path}")
    else:
        response.print_text()

    if show_cookies:
        session.print_cookies()


def _fail(error: Exception) -> None:
    logger.debug("Request failed", exc_info=True)
    click.echo(f"✗ Failed: {error}", err=True)
    sys.exit(1)


@click.group(invoke_without_command=True)
@click.option('--version', '-v', is_flag=True, help='Show version and exit')
@click.pass_context
def cli(ctx, version):
    """pyrequests - HTTP requests with persistent cookies and headers."""
    if version:
        click.echo(f"pyrequests version {__version__}")
        ctx.exit()

    # If no subcommand, show help
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@request_options
def get(
    url: str,
    params: Tuple[str, ...],
    headers: Tuple[str, ...],
    header_file: Optional[str],
    cookie_file: Optional[str],
    user_agent: Optional[str],
    output: Optional[str],
    no_redirects: bool,
    show_headers: bool,
    show_cookies: bool,
    verbose: bool,
):
    """Send a GET request.

    Example:
        pyrequests get "http://example.test/search" -p "q=hello world"
    """
    _configure_logging(verbose)
    try:
        session = _build_session(headers, header_file, cookie_file, user_agent, no_redirects)
        response = session.get(url, _build_params(params) if params else None)
        _emit(response, session, output, show_headers, show_cookies)
    except (RequestsError, OSError) as e:
        _fail(e)


@cli.command()
@request_options
@click.option('--data', '-d', help='Raw request body (sent as given)')
def post(
    url: str,
    params: Tuple[str, ...],
    headers: Tuple[str, ...],
    header_file: Optional[str],
    cookie_file: Optional[str],
    user_agent: Optional[str],
    output: Optional[str],
    no_redirects: bool,
    show_headers: bool,
    show_cookies: bool,
    verbose: bool,
    data: Optional[str],
):
    """Send a POST request.

    The body is either --data as given or the encoded --param pairs.

    Example:
        pyrequests post "http://example.test/login" -p user=alice -p "pass=s3cret"
    """
    _configure_logging(verbose)
    if data is not None and params:
        raise click.UsageError("Use either --data or --param, not both")

    try:
        session = _build_session(headers, header_file, cookie_file, user_agent, no_redirects)
        body = data if data is not None else _build_params(params)
        response = session.post(url, body)
        _emit(response, session, output, show_headers, show_cookies)
    except (RequestsError, OSError) as e:
        _fail(e)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
