"""CLI commands for blogger-client."""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Optional

import click
import yaml

from blogger_client.client import BloggerClient
from blogger_client.config import BloggerConfig
from blogger_client.exceptions import BloggerError
from blogger_client.session import Session


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _call(fn: Callable[[], Any]) -> Any:
    """Run an API call, turning client errors into a clean CLI failure."""
    try:
        return fn()
    except BloggerError as e:
        raise click.ClickException(str(e)) from e


def parse_param(value: str) -> tuple[str, Any]:
    """Parse ``key=value``.

    Ids stay strings; booleans, objects and arrays are decoded as JSON.
    """
    if "=" not in value:
        raise click.BadParameter(f"expected key=value, got {value!r}")
    key, raw = value.split("=", 1)
    if raw in ("true", "false") or raw[:1] in ("{", "["):
        try:
            return key, json.loads(raw)
        except json.JSONDecodeError:
            raise click.BadParameter(f"invalid JSON for {key}: {raw}")
    return key, raw


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    help="Path to config.yaml",
)
@click.option(
    "--credentials",
    "credentials_path",
    type=click.Path(path_type=Path),
    help="Path to the OAuth client credentials.json",
)
@click.option(
    "--token", "token_path", type=click.Path(path_type=Path), help="Path to token.json"
)
@click.option("--blog-id", help="Blog to operate on")
@click.option(
    "--manual-auth", is_flag=True, help="Paste the authorization code manually"
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(
    ctx,
    config_path: Optional[Path],
    credentials_path: Optional[Path],
    token_path: Optional[Path],
    blog_id: Optional[str],
    manual_auth: bool,
    verbose: bool,
):
    """Blogger API client."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    ctx.ensure_object(dict)
    if "client" in ctx.obj:
        return

    try:
        config = BloggerConfig.load(config_path)
    except (ValueError, yaml.YAMLError) as e:
        raise click.BadParameter(str(e), param_hint="--config") from e
    if credentials_path:
        config.credentials_path = credentials_path
    if token_path:
        config.token_path = token_path
    if blog_id:
        config.blog_id = blog_id
    if manual_auth:
        config.auth_mode = "manual"

    ctx.obj["client"] = BloggerClient(
        Session.from_config(config), blog_id=config.blog_id
    )


@main.command()
@click.pass_obj
def login(obj):
    """Authorize access and save the token."""
    client: BloggerClient = obj["client"]
    _call(client.session.ensure_authenticated)
    click.echo(f"✅ Authenticated. Token: {client.session.token_path}")


@main.command()
@click.pass_obj
def logout(obj):
    """Delete the saved token."""
    client: BloggerClient = obj["client"]
    if client.logout():
        click.echo("Logged out successfully. Credentials have been deleted.")
    else:
        click.echo("No saved credentials to delete.")


@main.command()
@click.pass_obj
def blog(obj):
    """Show the configured blog."""
    echo_json(_call(obj["client"].get_blog))


@main.command()
@click.argument("user_id", default="self")
@click.pass_obj
def blogs(obj, user_id: str):
    """List a user's blogs (default: yourself)."""
    echo_json(_call(lambda: obj["client"].get_user_blogs(user_id)))


@main.command("find-blog")
@click.argument("url")
@click.pass_obj
def find_blog(obj, url: str):
    """Find one of your blogs by URL."""
    echo_json(_call(lambda: obj["client"].get_blog_by_url(url)))


@main.command()
@click.option("--max-results", "-n", type=int, help="Maximum posts to return")
@click.option(
    "--status",
    type=click.Choice(["draft", "live", "scheduled"], case_sensitive=False),
    help="Only posts with this status",
)
@click.pass_obj
def posts(obj, max_results: Optional[int], status: Optional[str]):
    """List posts on the configured blog."""
    params = {}
    if max_results is not None:
        params["maxResults"] = max_results
    if status:
        params["status"] = status
    echo_json(_call(lambda: obj["client"].get_posts(**params)))


@main.command()
@click.argument("post_id")
@click.pass_obj
def post(obj, post_id: str):
    """Show one post."""
    echo_json(_call(lambda: obj["client"].get_post(post_id)))


@main.command()
@click.argument("post_id")
@click.pass_obj
def comments(obj, post_id: str):
    """List comments on a post."""
    echo_json(_call(lambda: obj["client"].get_comments(post_id)))


@main.command()
@click.pass_obj
def pages(obj):
    """List pages on the configured blog."""
    echo_json(_call(obj["client"].get_pages))


@main.command()
@click.argument("page_id")
@click.pass_obj
def page(obj, page_id: str):
    """Show one page."""
    echo_json(_call(lambda: obj["client"].get_page(page_id)))


@main.command()
@click.pass_obj
def user(obj):
    """Show the authenticated user."""
    echo_json(_call(obj["client"].get_user))


@main.command()
@click.argument("method")
@click.argument("endpoint")
@click.option(
    "--param", "-p", "params", multiple=True, help="Request parameter as key=value"
)
@click.option("--body", help="JSON request body")
@click.pass_obj
def request(obj, method: str, endpoint: str, params: tuple[str, ...], body: Optional[str]):
    """Call any endpoint, e.g. `request GET posts.get -p blogId=1 -p postId=2`.

    Examples:

      blogger request GET blogs.get -p blogId=123

      blogger request POST posts.insert -p blogId=123 --body '{"title": "Hi"}'
    """
    request_params = dict(parse_param(p) for p in params)
    if body is not None:
        try:
            request_params["body"] = json.loads(body)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"invalid JSON: {e}", param_hint="--body")
    echo_json(
        _call(lambda: obj["client"].send_request(method, endpoint, request_params))
    )


if __name__ == "__main__":
    main()
