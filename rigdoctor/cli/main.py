"""CLI main entry point"""

import click

from rigdoctor import __version__
from rigdoctor.cli.doctor import doctor


@click.group()
@click.version_option(version=__version__, prog_name="rigdoctor")
def cli():
    """rigdoctor - health checks for rig working copies"""


cli.add_command(doctor)


if __name__ == "__main__":
    cli()
