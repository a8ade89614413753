"""GitHub Actions workflow commands - step outputs and failure annotations."""

import logging
import os
from typing import Mapping, Optional

import click

logger = logging.getLogger(__name__)


def set_output(name: str, value: str, environ: Optional[Mapping[str, str]] = None) -> None:
    """
    Publish a step output.

    Appends ``name=value`` to the file named by GITHUB_OUTPUT. Outside of
    Actions the pair is printed to stdout so a caller can still capture it.
    """
    env = os.environ if environ is None else environ
    output_file = env.get('GITHUB_OUTPUT')
    if output_file:
        with open(output_file, 'a', encoding='utf-8') as f:
            f.write(f"{name}={value}\n")
        logger.debug("Wrote output %s to %s", name, output_file)
    else:
        click.echo(f"{name}={value}")


def set_failed(message: str) -> None:
    """Emit an error annotation for the step."""
    click.echo(f"::error::{message}", err=True)
