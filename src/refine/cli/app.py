import logging
from typing import Annotated

import typer

from refine.cli.instrument import instrument, scan
from refine.cli.reference import decode, encode, locate

app = typer.Typer(
    name="refine",
    help="Refine CLI — trace rendered HTML back to template source lines.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def _root(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log skipped tags and lookups.")] = False,
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


app.command("instrument")(instrument)
app.command("scan")(scan)
app.command("encode")(encode)
app.command("decode")(decode)
app.command("locate")(locate)


def main() -> None:
    app()
