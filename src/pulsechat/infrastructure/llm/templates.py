"""Jinja2 template utilities for LLM prompts."""

from jinja2 import Environment, PackageLoader, select_autoescape

from pulsechat.domain.services.timestamps import to_iso_string


def create_jinja_env() -> Environment:
    """Create Jinja2 environment for LLM templates.

    Creates a configured Jinja2 environment that loads templates from
    the pulsechat.infrastructure.llm templates directory, with the
    ``iso_timestamp`` filter registered.

    Returns:
        Configured Jinja2 environment.
    """
    env = Environment(
        loader=PackageLoader("pulsechat.infrastructure.llm", "templates"),
        autoescape=select_autoescape(),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["iso_timestamp"] = to_iso_string
    return env
