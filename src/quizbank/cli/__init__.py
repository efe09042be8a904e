import click
from dotenv import load_dotenv

from ..utils.logger import setup_logger
from .db import db
from .opentdb import fetch, token

load_dotenv()

@click.group()
def cli():
    """Command line interface for quizbank."""
    setup_logger()

cli.add_command(db)
cli.add_command(token)
cli.add_command(fetch)
